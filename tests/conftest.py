import random

import pytest

from pyschnorr.group import CurveGroup, IntegerGroup, ModularGroup


class ScriptedRandom:
    """
    A random source that hands out fixed values, for pinning nonces,
    secrets and blinding factors.
    """

    def __init__(self, *values: int):
        self.values = list(values)

    def randrange(self, n: int) -> int:
        assert self.values, "ScriptedRandom ran out of values"
        v = self.values.pop(0)
        assert 0 <= v < n, f"scripted value {v} is outside [0, {n})"
        return v

    def getrandbits(self, k: int) -> int:
        raise AssertionError("ScriptedRandom does not produce random bits")


class BrokenRandom:

    def randrange(self, n: int) -> int:
        raise OSError("entropy source unavailable")

    def getrandbits(self, k: int) -> int:
        raise OSError("entropy source unavailable")


@pytest.fixture
def toy_group() -> IntegerGroup:
    return IntegerGroup(order=23, generator=5)


@pytest.fixture(scope="session")
def modular_group() -> ModularGroup:
    return ModularGroup.generate(64, random.Random("pyschnorr-tests"))


@pytest.fixture(scope="session")
def curve_group() -> CurveGroup:
    return CurveGroup.bn128()


@pytest.fixture(scope="session")
def integer_group() -> IntegerGroup:
    return IntegerGroup.generate(64, random.Random("pyschnorr-tests"))


@pytest.fixture(params=["modular", "integer", "bn128"])
def any_group(request, modular_group, integer_group, curve_group):
    return {"modular": modular_group, "integer": integer_group, "bn128": curve_group}[request.param]


# Groups where a forged equation holds only with negligible probability.
@pytest.fixture(params=["modular", "bn128"])
def secure_group(request, modular_group, curve_group):
    return {"modular": modular_group, "bn128": curve_group}[request.param]
