"""
ECDSA verification of signed transactions.
"""

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from persona_tx import encode, verify_signature, verify_second_signature
from persona_tx.signers import verify_der_signature

from helpers import mk_private_key, mk_transfer, public_key_hex


def sign(key, data):
    return key.sign(data, ec.ECDSA(hashes.SHA256())).hex()


@pytest.fixture
def signed(signer_key, identity):
    tx = mk_transfer(amount=100, sender_public_key=identity.public_key)
    return tx.evolve(signature=sign(signer_key, encode(tx, False, False)))


class TestVerifySignature:

    def test_valid_signature(self, signed):
        assert verify_signature(signed)

    def test_tampered_amount_fails(self, signed):
        assert not verify_signature(signed.evolve(amount=101))

    def test_other_signer_fails(self, signed):
        other = mk_private_key(b"other")
        assert not verify_signature(signed.evolve(sender_public_key=public_key_hex(other)))

    def test_missing_signature(self, signed):
        assert not verify_signature(signed.evolve(signature=None))

    def test_garbage_signature(self, signed):
        assert not verify_signature(signed.evolve(signature="30" * 70))


class TestVerifySecondSignature:

    def test_valid_second_signature(self, signed):
        second = mk_private_key(b"second")
        double = signed.evolve(second_signature=sign(second, encode(signed, True, False)))
        assert verify_second_signature(double, public_key_hex(second))

    def test_second_signature_must_cover_first(self, signed):
        second = mk_private_key(b"second")
        double = signed.evolve(second_signature=sign(second, encode(signed, False, False)))
        assert not verify_second_signature(double, public_key_hex(second))

    def test_absent_second_signature(self, signed):
        assert not verify_second_signature(signed, public_key_hex(mk_private_key(b"second")))


def test_verify_der_signature_rejects_invalid_point():
    assert not verify_der_signature(b"\x02" + b"\x00" * 32, b"\x30\x00", b"message")
