"""
Content-addressed id tests.

Ids must be a pure function of the canonical bytes: stable for equal bytes
and different for any changed byte, including an appended signature.
"""

import hashlib
import random

import pytest

from persona_tx import compute_id, derive_id, encode
from persona_tx.codec import is_valid_id

from helpers import mk_transfer


@pytest.fixture
def prepared(identity):
    return mk_transfer(amount=100, sender_public_key=identity.public_key)


def test_derive_id_is_sha256_hex():
    data = b"persona"
    assert derive_id(data) == hashlib.sha256(data).hexdigest()


def test_derive_id_is_idempotent(prepared):
    data = encode(prepared)
    assert derive_id(data) == derive_id(bytes(data))


def test_id_shape(prepared):
    tx_id = compute_id(prepared)
    assert len(tx_id) == 64
    assert is_valid_id(tx_id)


def test_compute_id_covers_signatures(prepared):
    signed = prepared.evolve(signature="30" * 70)
    assert compute_id(signed) == derive_id(encode(signed, True, True))


def test_amount_change_changes_id(identity):
    a = mk_transfer(amount=100, sender_public_key=identity.public_key)
    b = mk_transfer(amount=101, sender_public_key=identity.public_key)
    assert compute_id(a) != compute_id(b)


@pytest.mark.parametrize("change", [
    {"fee": 10_000_001},
    {"timestamp": 12345679},
    {"vendor_field": "memo"},
    {"signature": "30" * 70},
])
def test_single_field_change_changes_id(prepared, change):
    assert compute_id(prepared.evolve(**change)) != compute_id(prepared)


def test_second_signature_changes_id(prepared):
    signed = prepared.evolve(signature="30" * 70)
    double = signed.evolve(second_signature="31" * 70)
    assert compute_id(double) != compute_id(signed)


def test_single_bit_flips_change_id(prepared):
    """Statistical probe: flipping any sampled bit yields a fresh id."""
    data = encode(prepared.evolve(signature="30" * 70))
    original = derive_id(data)
    rng = random.Random(1337)

    seen = {original}
    for bit in rng.sample(range(len(data) * 8), 256):
        mutated = bytearray(data)
        mutated[bit // 8] ^= 1 << (bit % 8)
        seen.add(derive_id(bytes(mutated)))

    assert len(seen) == 257


@pytest.mark.parametrize("value", ["", "zz" * 32, "AB" * 32, "ab" * 31, None])
def test_is_valid_id_rejects(value):
    assert not is_valid_id(value)
