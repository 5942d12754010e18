#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

from dataclasses import dataclass
from random import Random

from pyschnorr.group import GroupParameters
from pyschnorr.rand import random_scalar


@dataclass(frozen=True)
class PublicKey:
    params: GroupParameters
    point: object


class PrivateKey:
    """
    A signer's secret scalar x in [0, order).

    The secret never shows up in repr/str, and the key refuses to be
    pickled or copied. `destroy()` (or leaving a `with` block) drops it.
    """
    __slots__ = ("params", "_secret")

    params: GroupParameters

    def __init__(self, params: GroupParameters, secret: int):
        if not 0 <= secret < params.order:
            raise ValueError("secret must lie in [0, order)")
        self.params = params
        self._secret = secret

    @property
    def secret(self) -> int:
        if self._secret is None:
            raise ValueError("private key has been destroyed")
        return self._secret

    @property
    def destroyed(self) -> bool:
        return self._secret is None

    def public_key(self) -> PublicKey:
        return PublicKey(self.params, self.params.combine(self.secret, self.params.generator))

    def destroy(self):
        self._secret = None

    def __enter__(self) -> "PrivateKey":
        return self

    def __exit__(self, *exc):
        self.destroy()
        return False

    def __repr__(self) -> str:
        state = "destroyed" if self.destroyed else "<redacted>"
        return f"PrivateKey({self.params.name}, {state})"

    __str__ = __repr__

    def __reduce_ex__(self, protocol):
        raise TypeError("private keys cannot be serialized")

    def __copy__(self):
        raise TypeError("private keys cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("private keys cannot be copied")


def derive(params: GroupParameters, rndg: Random | None = None) -> tuple[PrivateKey, PublicKey]:
    """
    x <~ [0, order),  X = combine(x, g)
    """
    sk = PrivateKey(params, random_scalar(params.order, rndg))
    return sk, sk.public_key()


if __name__ == "__main__":
    from pyschnorr.group import IntegerGroup

    sk, pk = derive(IntegerGroup(order=23, generator=5))
    print(f"sk: {sk}")
    print(f"pk: {pk.point}")
