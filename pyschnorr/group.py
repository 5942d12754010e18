#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Callable

from sympy import isprime

from pyschnorr.curve import BN128_CURVE_ORDER, G1Point, ec_mul
from pyschnorr.errors import ParameterSearchError
from pyschnorr.rand import randbits

logger = logging.getLogger(__name__)

DEFAULT_BIT_LENGTH = 256
MAX_GENERATOR_TRIALS = 1000
GENERATOR_SEARCH_START = 2

# Every protocol in this package is written against the generic
# interface below:
#
#     combine(k, E)   "k times E" in the group
#     compose(A, B)   the group law
#     same(A, B)      element equality used by the verification equation
#
# Three groups implement it:
#
#   ModularGroup   order-q subgroup of Z_p^*, p = 2q + 1 (modular exponentiation)
#   IntegerGroup   plain integer multiplication/addition, compared mod order.
#                  NOT a discrete-log group: secret = point / generator.
#                  Kept for protocol-logic testing only.
#   CurveGroup     BN128 G1 (elliptic-curve scalar multiplication)


@dataclass(frozen=True)
class GroupParameters:
    order: int
    generator: object

    name = "abstract"

    def __post_init__(self):
        if not isprime(self.order):
            raise ValueError(f"group order must be prime, got {self.order}")
        if not self.contains(self.generator) or self.same(self.generator, self.identity):
            raise ValueError(f"{self.generator} is not a generator of the {self.name} group")

    @property
    def identity(self):
        raise NotImplementedError

    def combine(self, k: int, element):
        raise NotImplementedError

    def compose(self, a, b):
        raise NotImplementedError

    def same(self, a, b) -> bool:
        return a == b

    def contains(self, element) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class ModularGroup(GroupParameters):
    modulus: int = field(default=0)

    name = "modular"

    def __post_init__(self):
        if self.modulus != 2 * self.order + 1 or not isprime(self.modulus):
            raise ValueError(f"modulus must be the safe prime 2 * order + 1, got {self.modulus}")
        super().__post_init__()

    @property
    def identity(self) -> int:
        return 1

    def combine(self, k: int, element: int) -> int:
        return pow(element, k % self.order, self.modulus)

    def compose(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def contains(self, element) -> bool:
        if not _is_int(element) or not 0 < element < self.modulus:
            return False
        return pow(element, self.order, self.modulus) == 1

    @classmethod
    def generate(cls, bit_length: int = DEFAULT_BIT_LENGTH, rndg: Random | None = None,
                 max_trials: int = MAX_GENERATOR_TRIALS) -> "ModularGroup":
        """
        Sample a safe prime p = 2q + 1 with q of `bit_length` bits and
        pick the first quadratic residue g >= 2, i.e. g^q = 1 (mod p).

        Raises:
            RandomnessError: if the random source fails.
            ParameterSearchError: if no generator is found in `max_trials` steps.
        """
        _check_bit_length(bit_length)
        trials = 0
        while True:
            q = random_prime(bit_length, rndg)
            trials += 1
            if isprime(2 * q + 1):
                break
        p = 2 * q + 1
        logger.debug("safe prime found after %d candidates for q (%d bits)", trials, bit_length)

        g = search_generator(lambda h: 1 < h < p and pow(h, q, p) == 1, max_trials)
        return cls(order=q, generator=g, modulus=p)


@dataclass(frozen=True)
class IntegerGroup(GroupParameters):

    name = "integer"

    @property
    def identity(self) -> int:
        return 0

    def combine(self, k: int, element: int) -> int:
        return k * element

    def compose(self, a: int, b: int) -> int:
        return a + b

    def same(self, a: int, b: int) -> bool:
        return a % self.order == b % self.order

    def contains(self, element) -> bool:
        return _is_int(element) and element >= 0

    @classmethod
    def generate(cls, bit_length: int = DEFAULT_BIT_LENGTH, rndg: Random | None = None,
                 max_trials: int = MAX_GENERATOR_TRIALS) -> "IntegerGroup":
        _check_bit_length(bit_length)
        p = random_prime(bit_length, rndg)

        # "g times the order is the identity", without g being the identity
        g = search_generator(lambda h: h % p != 0 and (p * h) % p == 0, max_trials)
        return cls(order=p, generator=g)


@dataclass(frozen=True)
class CurveGroup(GroupParameters):

    name = "bn128"

    @property
    def identity(self) -> G1Point:
        return G1Point.zero()

    def combine(self, k: int, element: G1Point) -> G1Point:
        return ec_mul(element, k)

    def compose(self, a: G1Point, b: G1Point) -> G1Point:
        return a + b

    def contains(self, element) -> bool:
        return isinstance(element, G1Point) and element.is_on_curve()

    @classmethod
    def bn128(cls) -> "CurveGroup":
        return cls(order=BN128_CURVE_ORDER, generator=G1Point.ec_gen_group1())


GROUP_KINDS = ("modular", "integer", "bn128")


def make_group(kind: str = "modular", bit_length: int = DEFAULT_BIT_LENGTH,
               rndg: Random | None = None) -> GroupParameters:
    if kind == "modular":
        return ModularGroup.generate(bit_length, rndg)
    if kind == "integer":
        return IntegerGroup.generate(bit_length, rndg)
    if kind == "bn128":
        return CurveGroup.bn128()
    raise ValueError(f"unknown group kind {kind!r}, expected one of {GROUP_KINDS}")


def random_prime(bit_length: int, rndg: Random | None = None) -> int:
    """
    Draw random odd `bit_length`-bit integers until one is prime.
    """
    top = 1 << (bit_length - 1)
    while True:
        candidate = randbits(bit_length, rndg) | top | 1
        if isprime(candidate):
            return candidate


def search_generator(accepts: Callable[[int], bool], max_trials: int = MAX_GENERATOR_TRIALS,
                     start: int = GENERATOR_SEARCH_START) -> int:
    for g in range(start, start + max_trials):
        if accepts(g):
            logger.debug("generator %d accepted after %d trials", g, g - start + 1)
            return g
    raise ParameterSearchError(f"no generator found in {max_trials} candidates starting at {start}")


def _check_bit_length(bit_length: int):
    if not _is_int(bit_length) or bit_length < 2:
        raise ValueError(f"bit_length must be an integer >= 2, got {bit_length!r}")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
