#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

import hashlib

# Fiat-Shamir challenge
#
#   c = SHA256(str(R) || m)   read as a big-endian integer, NOT reduced mod order


def challenge(commitment, message: bytes | str) -> int:
    """
    Args:
        commitment: a group element; integers hash as their decimal string,
            curve points as "(x, y)"
        message: the message, str is UTF-8 encoded
    Returns:
        the 256-bit challenge as an int
    """
    digest = hashlib.sha256(str(commitment).encode() + to_bytes(message)).digest()
    return int.from_bytes(digest, "big")


def to_bytes(message: bytes | str) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise TypeError(f"message must be bytes or str, got {type(message).__name__}")
