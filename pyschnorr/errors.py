#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.


class SchnorrError(Exception):
    pass


class RandomnessError(SchnorrError):
    """The random source is broken or exhausted. Fatal, never retried."""


class ParameterSearchError(SchnorrError):
    """No generator was accepted within the bounded search."""


class ProtocolViolation(SchnorrError):
    """
    A blind signing session received an inconsistent value, or a step
    was called out of order. The session is aborted.
    """


class SessionExpired(ProtocolViolation):
    pass
