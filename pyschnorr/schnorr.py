#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

from dataclasses import dataclass
from random import Random

from pyschnorr.group import GroupParameters
from pyschnorr.hasher import challenge
from pyschnorr.keys import PrivateKey, PublicKey
from pyschnorr.rand import is_scalar, random_scalar

# Schnorr signature (Fiat-Shamir)
#
#   sign:    r <~ [0, q),  R = [r]g,  c = H(R || m),  s = r + c * x  (mod q)
#   verify:  [s]g ?= R + [c]X
#
# A fresh r MUST be drawn for every signature. Two signatures sharing
# r give away x, see `extract`.


@dataclass(frozen=True)
class Signature:
    commitment: object
    response: int

    def __str__(self) -> str:
        return f"(R={self.commitment}, s={self.response})"


def respond(params: GroupParameters, nonce: int, c: int, secret: int) -> int:
    return (nonce + c * secret) % params.order


def check_response(params: GroupParameters, commitment, c: int, response: int, point) -> bool:
    """

        [response]g ?= commitment + [c]point
    """
    lhs = params.combine(response, params.generator)
    rhs = params.compose(commitment, params.combine(c, point))
    return params.same(lhs, rhs)


def sign(message: bytes | str, private_key: PrivateKey, rndg: Random | None = None) -> Signature:
    params = private_key.params
    r = random_scalar(params.order, rndg)
    R = params.combine(r, params.generator)
    c = challenge(R, message)
    return Signature(R, respond(params, r, c, private_key.secret))


def verify(message: bytes | str, signature: Signature, public_key: PublicKey) -> bool:
    params = public_key.params
    if not isinstance(signature, Signature):
        return False
    if not is_scalar(signature.response, params.order) or not params.contains(signature.commitment):
        return False
    c = challenge(signature.commitment, message)
    return check_response(params, signature.commitment, c, signature.response, public_key.point)


class SchnorrSigner:
    private_key: PrivateKey
    rnd_gen: Random | None

    def __init__(self, private_key: PrivateKey, rndg: Random | None = None):
        self.private_key = private_key
        self.pk = private_key.public_key()
        self.rnd_gen = rndg

    def sign(self, message: bytes | str) -> Signature:
        return sign(message, self.private_key, self.rnd_gen)


class SchnorrVerifier:
    pk: PublicKey

    def __init__(self, pk: PublicKey):
        self.pk = pk

    def verify(self, message: bytes | str, signature: Signature) -> bool:
        return verify(message, signature, self.pk)


def extract(message1: bytes | str, sig1: Signature, message2: bytes | str, sig2: Signature,
            params: GroupParameters) -> int:
    """
    Recover x from two signatures made with the same nonce r:

        s1 - s2 = (c1 - c2) * x  (mod q)
    """
    if not params.same(sig1.commitment, sig2.commitment):
        raise ValueError("signatures do not share a commitment")
    c1 = challenge(sig1.commitment, message1) % params.order
    c2 = challenge(sig2.commitment, message2) % params.order
    if c1 == c2:
        raise ValueError("challenges coincide modulo the order")
    return (sig1.response - sig2.response) * pow(c1 - c2, -1, params.order) % params.order


if __name__ == "__main__":
    from pyschnorr.group import ModularGroup
    from pyschnorr.keys import derive

    params = ModularGroup.generate(64)
    sk, pk = derive(params)
    sig = SchnorrSigner(sk).sign("hello")
    print(f"sig: {sig}")
    print(f"?: {SchnorrVerifier(pk).verify('hello', sig)}")
    print(f"?: {SchnorrVerifier(pk).verify('hellp', sig)}")
