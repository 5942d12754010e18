#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

from typing import NewType

import py_ecc.bn128 as bn128

BN128_CURVE_ORDER = bn128.curve_order

Fp = NewType("BaseField", bn128.FQ)


class G1Point:
    def __init__(self, x: Fp, y: Fp, is_zero: bool = False):
        self.x = x
        self.y = y
        self.is_zero = is_zero

    @classmethod
    def ec_gen_group1(cls) -> "G1Point":
        return cls(bn128.G1[0], bn128.G1[1])

    @classmethod
    def zero(cls) -> "G1Point":
        return cls(bn128.Z1, bn128.Z1, is_zero=True)

    def is_on_curve(self) -> bool:
        if self.is_zero:
            return True
        return bn128.is_on_curve((self.x, self.y), bn128.b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, G1Point):
            return NotImplemented
        if self.is_zero and other.is_zero:
            return True
        elif not self.is_zero and not other.is_zero:
            return self.x == other.x and self.y == other.y
        return False

    def __add__(self, other: "G1Point") -> "G1Point":
        if self.is_zero:
            return other
        if other.is_zero:
            return self
        result = bn128.add((self.x, self.y), (other.x, other.y))
        # P + (-P)
        if result is None:
            return G1Point.zero()
        return G1Point(result[0], result[1])

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"G1Point({self.x}, {self.y})"

    def __hash__(self) -> int:
        return hash((self.x, self.y))


def ec_mul(pt: G1Point, coeff: int) -> G1Point:
    coeff %= BN128_CURVE_ORDER
    if pt.is_zero:
        return G1Point.zero()
    if coeff == 0:
        return G1Point.zero()
    h = bn128.multiply((pt.x, pt.y), coeff)
    return G1Point(h[0], h[1])


if __name__ == "__main__":
    g = G1Point.ec_gen_group1()
    print(f"b.curve_order: {BN128_CURVE_ORDER}")
    print(f"g: {g}")
    print(f" > ec_mul(g, 8): {ec_mul(g, 8)}")
    print(f" > ec_mul(g, 3) + ec_mul(g, 5): {ec_mul(g, 3) + ec_mul(g, 5)}")
