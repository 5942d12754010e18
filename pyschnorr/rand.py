#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

import secrets
from random import Random

from pyschnorr.errors import RandomnessError

# NOTE: Every draw goes through `rndg`. Passing a seeded random.Random
#   makes runs reproducible, which is only acceptable for tests and demos.

_system_random = secrets.SystemRandom()


def _source(rndg: Random | None) -> Random:
    return _system_random if rndg is None else rndg


def randbelow(n: int, rndg: Random | None = None) -> int:
    if n <= 0:
        raise ValueError(f"upper bound must be positive, got {n}")
    try:
        return _source(rndg).randrange(n)
    except (OSError, NotImplementedError) as e:
        raise RandomnessError(f"random source failed: {e}") from e


def randbits(k: int, rndg: Random | None = None) -> int:
    try:
        return _source(rndg).getrandbits(k)
    except (OSError, NotImplementedError) as e:
        raise RandomnessError(f"random source failed: {e}") from e


def random_scalar(order: int, rndg: Random | None = None) -> int:
    """
    Draw a scalar uniformly from [0, order).
    """
    return randbelow(order, rndg)


def is_scalar(value, order: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < order
