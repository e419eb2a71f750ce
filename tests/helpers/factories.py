"""
Test factories for creating test data consistently.

Provides deterministic secp256k1 keys, base58check addresses and ready-made
transactions.
"""

from __future__ import annotations
import hashlib
from typing import Optional

import base58
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from persona_tx import (
    DelegateAsset,
    SignerIdentity,
    Transaction,
    TransactionAsset,
    TransactionType,
)

ADDRESS_VERSION = 0x38
_CURVE_ORDER = int("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16)


def mk_private_key(seed: bytes) -> ec.EllipticCurvePrivateKey:
    """Derive a deterministic secp256k1 private key from ``seed``."""
    value = int.from_bytes(hashlib.sha256(seed).digest(), "big") % (_CURVE_ORDER - 1) + 1
    return ec.derive_private_key(value, ec.SECP256K1())


def public_key_hex(private_key: ec.EllipticCurvePrivateKey) -> str:
    """Compressed SEC1 public key as hex (33 bytes)."""
    return private_key.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.CompressedPoint,
    ).hex()


def mk_address(seed: bytes) -> str:
    """Deterministic base58check address with the network version byte."""
    payload = bytes([ADDRESS_VERSION]) + hashlib.sha256(seed).digest()[:20]
    return base58.b58encode_check(payload).decode()


def mk_identity(seed: bytes = b"signer", device_index: int = 0) -> SignerIdentity:
    """Signer identity whose key is derived from ``seed``."""
    return SignerIdentity(
        public_key=public_key_hex(mk_private_key(seed)),
        address=mk_address(seed),
        device_index=device_index,
    )


def mk_vote(seed: bytes, add: bool = True) -> str:
    """Vote string for the delegate whose key is derived from ``seed``."""
    return ("+" if add else "-") + public_key_hex(mk_private_key(seed))


def mk_transfer(recipient: Optional[str] = None, amount: int = 100, **fields) -> Transaction:
    """Transfer with a fixed timestamp and fee."""
    return Transaction(
        type=TransactionType.TRANSFER,
        timestamp=fields.pop("timestamp", 12345678),
        recipient_id=recipient if recipient is not None else mk_address(b"recipient"),
        amount=amount,
        fee=fields.pop("fee", 10_000_000),
        **fields,
    )


def mk_vote_tx(recipient: Optional[str] = None, **fields) -> Transaction:
    """Vote for one delegate, addressed to ``recipient`` before normalization."""
    return Transaction(
        type=TransactionType.VOTE,
        timestamp=fields.pop("timestamp", 12345678),
        recipient_id=recipient,
        fee=fields.pop("fee", 100_000_000),
        asset=fields.pop("asset", TransactionAsset(votes=[mk_vote(b"delegate")])),
        **fields,
    )


def mk_delegate_registration(username: str = "genesis_1", **fields) -> Transaction:
    """Delegate registration; carries no recipient."""
    return Transaction(
        type=TransactionType.DELEGATE_REGISTRATION,
        timestamp=fields.pop("timestamp", 12345678),
        fee=fields.pop("fee", 2_500_000_000),
        asset=fields.pop("asset", TransactionAsset(delegate=DelegateAsset(username=username))),
        **fields,
    )
