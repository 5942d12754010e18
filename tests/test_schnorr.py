import random

import pytest

from conftest import BrokenRandom, ScriptedRandom
from pyschnorr.errors import RandomnessError
from pyschnorr.keys import PrivateKey, derive
from pyschnorr.schnorr import (
    SchnorrSigner,
    SchnorrVerifier,
    Signature,
    extract,
    sign,
    verify,
)


def test_toy_scenario(toy_group):
    # order 23, generator 5, secret 6, nonce 3:
    #   R = 15,  c = H("15hello") = 7 (mod 23),  s = 3 + 7 * 6 = 22 (mod 23)
    sk = PrivateKey(toy_group, 6)
    pk = sk.public_key()
    assert pk.point == 30

    sig = sign("hello", sk, ScriptedRandom(3))
    assert sig == Signature(commitment=15, response=22)
    assert verify("hello", sig, pk)
    assert not verify("hellp", sig, pk)


def test_toy_group_collides_on_challenges(toy_group):
    # H("15Hello") = H("15hello") (mod 23): a 23-element group cannot
    # tell the two messages apart.
    sk = PrivateKey(toy_group, 6)
    sig = sign("hello", sk, ScriptedRandom(3))
    assert verify("Hello", sig, sk.public_key())


def test_signature_str():
    assert str(Signature(15, 22)) == "(R=15, s=22)"


def test_completeness(any_group):
    sk, pk = derive(any_group)
    for message in [b"", b"hello", "héllo", bytes(range(256))]:
        assert verify(message, sign(message, sk), pk)


def test_completeness_many_keys(modular_group):
    rng = random.Random("completeness")
    for i in range(20):
        sk, pk = derive(modular_group, rng)
        message = f"message {i}".encode()
        assert verify(message, sign(message, sk, rng), pk)


def test_message_bit_flip(secure_group):
    sk, pk = derive(secure_group)
    message = b"hello world"
    sig = sign(message, sk)
    for i in range(len(message) * 8):
        tampered = bytearray(message)
        tampered[i // 8] ^= 1 << (i % 8)
        assert not verify(bytes(tampered), sig, pk)


def test_commitment_tampering(secure_group):
    sk, pk = derive(secure_group)
    sig = sign(b"hello", sk)
    moved = secure_group.compose(sig.commitment, secure_group.generator)
    assert not verify(b"hello", Signature(moved, sig.response), pk)


def test_response_tampering(any_group):
    sk, pk = derive(any_group)
    sig = sign(b"hello", sk)
    for delta in (1, 2, any_group.order - 1):
        s = (sig.response + delta) % any_group.order
        assert not verify(b"hello", Signature(sig.commitment, s), pk)


def test_wrong_public_key(secure_group):
    sk, _ = derive(secure_group)
    _, other = derive(secure_group)
    assert not verify(b"hello", sign(b"hello", sk), other)


def test_malformed_signatures_are_rejected(modular_group):
    sk, pk = derive(modular_group)
    sig = sign(b"hello", sk)
    q = modular_group.order
    for bad in [
        Signature(sig.commitment, q),
        Signature(sig.commitment, -1),
        Signature(sig.commitment, True),
        Signature(sig.commitment, "1"),
        Signature(0, sig.response),
        Signature(modular_group.modulus, sig.response),
        Signature("R", sig.response),
        (sig.commitment, sig.response),
        None,
    ]:
        assert verify(b"hello", bad, pk) is False


def test_nonces_are_fresh(secure_group):
    sk, _ = derive(secure_group)
    sigs = [sign(b"hello", sk) for _ in range(5)]
    assert len({str(s.commitment) for s in sigs}) == 5


def test_sign_broken_randomness(toy_group):
    with pytest.raises(RandomnessError):
        sign(b"hello", PrivateKey(toy_group, 6), BrokenRandom())


def test_signer_and_verifier(curve_group):
    sk, pk = derive(curve_group)
    signer = SchnorrSigner(sk)
    verifier = SchnorrVerifier(signer.pk)
    assert signer.pk == pk
    sig = signer.sign(b"hello")
    assert verifier.verify(b"hello", sig)
    assert not verifier.verify(b"bye", sig)


def test_extract_from_nonce_reuse(modular_group):
    sk, _ = derive(modular_group)
    sig1 = sign(b"first", sk, ScriptedRandom(12345))
    sig2 = sign(b"second", sk, ScriptedRandom(12345))
    assert sig1.commitment == sig2.commitment
    assert extract(b"first", sig1, b"second", sig2, modular_group) == sk.secret


def test_extract_toy(toy_group):
    # H("15hello") = 7 and H("15hellp") = 5 (mod 23)
    sk = PrivateKey(toy_group, 6)
    sig1 = sign("hello", sk, ScriptedRandom(3))
    sig2 = sign("hellp", sk, ScriptedRandom(3))
    assert extract("hello", sig1, "hellp", sig2, toy_group) == 6


def test_extract_needs_shared_nonce(modular_group):
    sk, _ = derive(modular_group)
    sig1 = sign(b"first", sk)
    sig2 = sign(b"second", sk)
    with pytest.raises(ValueError):
        extract(b"first", sig1, b"second", sig2, modular_group)
    with pytest.raises(ValueError):
        extract(b"first", sig1, b"first", sig1, modular_group)
