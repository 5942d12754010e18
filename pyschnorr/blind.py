#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

import enum
import logging
import secrets
import time
from random import Random
from typing import Callable

from pyschnorr.errors import ProtocolViolation, SessionExpired
from pyschnorr.hasher import challenge
from pyschnorr.keys import PrivateKey, PublicKey
from pyschnorr.rand import is_scalar, random_scalar
from pyschnorr.schnorr import Signature, check_response, respond

logger = logging.getLogger(__name__)

# Blind Schnorr signature
#
#   Signer                                   Requester (X, m)
#   ------                                   ----------------
#   1. r <~ Fq, R = [r]g         -- R -->
#                                            2. alpha, beta <~ Fq
#                                               R' = R + [alpha]g + [beta]X
#                                               c' = H(R' || m)
#                                <-- c --       c  = c' + beta
#   3. s = r + c * x             -- s -->
#                                            4. [s]g ?= R + [c]X
#                                               s' = s + alpha
#                                               (R', s') is a signature on m
#
# The signer only ever sees R, c and s. Each session object holds the
# secrets of exactly one run and forgets them once the run is over.


class SignerState(enum.Enum):
    READY = "ready"
    AWAITING_CHALLENGE = "awaiting-challenge"
    DONE = "done"
    ABORTED = "aborted"


class RequesterState(enum.Enum):
    READY = "ready"
    AWAITING_RESPONSE = "awaiting-response"
    DONE = "done"
    ABORTED = "aborted"


class _Session:
    timeout: float | None
    deadline: float | None

    def __init__(self, timeout: float | None, clock: Callable[[], float]):
        self.session_id = secrets.token_hex(4)
        self.timeout = timeout
        self.clock = clock
        self.deadline = None

    def _start_clock(self):
        if self.timeout is not None:
            self.deadline = self.clock() + self.timeout

    def _check_deadline(self):
        if self.deadline is not None and self.clock() > self.deadline:
            self.abort()
            raise SessionExpired(f"session {self.session_id} expired after {self.timeout}s")

    def _expect(self, expected):
        if self.state is not expected:
            raise ProtocolViolation(
                f"session {self.session_id} is {self.state.value}, expected {expected.value}")

    def _move(self, state):
        logger.debug("%s %s: %s -> %s", type(self).__name__, self.session_id,
                     self.state.value, state.value)
        self.state = state

    def abort(self):
        raise NotImplementedError


class SignerSession(_Session):
    """
    The signer's side of one blind signing run. The nonce r lives only
    between `commit` and `respond`.
    """
    state: SignerState

    def __init__(self, private_key: PrivateKey, rndg: Random | None = None,
                 timeout: float | None = None, clock: Callable[[], float] = time.monotonic):
        super().__init__(timeout, clock)
        self.params = private_key.params
        self._sk = private_key
        self._rnd_gen = rndg
        self._r = None
        self.state = SignerState.READY

    # Step 1
    def commit(self):
        self._expect(SignerState.READY)
        self._r = random_scalar(self.params.order, self._rnd_gen)
        R = self.params.combine(self._r, self.params.generator)
        self._start_clock()
        self._move(SignerState.AWAITING_CHALLENGE)
        return R

    # Step 3
    def respond(self, c: int) -> int:
        self._expect(SignerState.AWAITING_CHALLENGE)
        self._check_deadline()
        if not is_scalar(c, self.params.order):
            self.abort()
            raise ProtocolViolation(f"session {self.session_id}: challenge is not a scalar mod order")
        s = respond(self.params, self._r, c, self._sk.secret)
        self._r = None
        self._move(SignerState.DONE)
        return s

    def abort(self):
        self._r = None
        if self.state is not SignerState.ABORTED:
            self._move(SignerState.ABORTED)


class RequesterSession(_Session):
    """
    The requester's side of one blind signing run. alpha, beta and R'
    stay in this object and are dropped by `finalize` or `abort`.
    """
    state: RequesterState

    def __init__(self, pk: PublicKey, message: bytes | str, rndg: Random | None = None,
                 timeout: float | None = None, clock: Callable[[], float] = time.monotonic):
        super().__init__(timeout, clock)
        self.pk = pk
        self.params = pk.params
        self.message = message
        self._rnd_gen = rndg
        self._R = None
        self._c = None
        self._alpha = None
        self._beta = None
        self._R_blinded = None
        self.state = RequesterState.READY

    # Step 2
    def blind(self, R) -> int:
        self._expect(RequesterState.READY)
        params = self.params
        if not params.contains(R):
            self.abort()
            raise ProtocolViolation(f"session {self.session_id}: commitment is not a group element")

        alpha = random_scalar(params.order, self._rnd_gen)
        beta = random_scalar(params.order, self._rnd_gen)
        R_blinded = params.compose(
            params.compose(R, params.combine(alpha, params.generator)),
            params.combine(beta, self.pk.point))
        c_blinded = challenge(R_blinded, self.message)
        c = (c_blinded + beta) % params.order

        self._R, self._c = R, c
        self._alpha, self._beta, self._R_blinded = alpha, beta, R_blinded
        self._start_clock()
        self._move(RequesterState.AWAITING_RESPONSE)
        return c

    def check_response(self, s: int) -> bool:
        """

            [s]g ?= R + [c]X
        """
        self._expect(RequesterState.AWAITING_RESPONSE)
        if not is_scalar(s, self.params.order):
            return False
        return check_response(self.params, self._R, self._c, s, self.pk.point)

    # Step 4
    def finalize(self, s: int) -> Signature:
        self._expect(RequesterState.AWAITING_RESPONSE)
        self._check_deadline()
        if not self.check_response(s):
            self.abort()
            raise ProtocolViolation(f"session {self.session_id}: signer returned an invalid response")
        sig = Signature(self._R_blinded, (s + self._alpha) % self.params.order)
        self._forget()
        self._move(RequesterState.DONE)
        return sig

    def abort(self):
        self._forget()
        if self.state is not RequesterState.ABORTED:
            self._move(RequesterState.ABORTED)

    def _forget(self):
        self._R = self._c = None
        self._alpha = self._beta = self._R_blinded = None


def run_blind_signing(private_key: PrivateKey, pk: PublicKey, message: bytes | str,
                      rndg: Random | None = None) -> Signature:
    signer = SignerSession(private_key, rndg)
    requester = RequesterSession(pk, message, rndg)

    R = signer.commit()
    c = requester.blind(R)
    s = signer.respond(c)
    return requester.finalize(s)


if __name__ == "__main__":
    from pyschnorr.group import ModularGroup
    from pyschnorr.keys import derive
    from pyschnorr.schnorr import verify

    params = ModularGroup.generate(64)
    sk, pk = derive(params)
    sig = run_blind_signing(sk, pk, "hello")
    print(f"sig: {sig}")
    print(f"?: {verify('hello', sig, pk)}")
