"""
Persona Binary Codec Module

Canonical binary encoding of transactions and the content-addressed ids
derived from it.

Key components:
- writer.py: fixed-width little-endian primitive writer
- encoder.py: per-type encoding rules and the canonical transaction encoder
- hashes.py: SHA-256 helpers and id derivation
"""

from .hashes import sha256_bytes, derive_id, is_valid_id
from .writer import BinaryWriter
from .encoder import (
    EncodingRule,
    TransferRule,
    SecondSignatureRule,
    DelegateRegistrationRule,
    VoteRule,
    MultiSignatureRule,
    DEFAULT_RULES,
    TransactionEncoder,
    default_encoder,
    encode,
    compute_id,
)

__all__ = [
    "BinaryWriter",
    "sha256_bytes",
    "derive_id",
    "is_valid_id",
    "EncodingRule",
    "TransferRule",
    "SecondSignatureRule",
    "DelegateRegistrationRule",
    "VoteRule",
    "MultiSignatureRule",
    "DEFAULT_RULES",
    "TransactionEncoder",
    "default_encoder",
    "encode",
    "compute_id",
]
