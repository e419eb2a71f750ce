"""
Hash Functions

Content-addressed identity for transactions: the id is the SHA-256 of the
canonical byte encoding, rendered as lowercase hex.
"""

import hashlib

ID_LENGTH = 64


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def derive_id(data: bytes) -> str:
    """
    Derive a transaction id from canonical bytes.

    Identical bytes always map to the same id; any change in the bytes
    (a signature appended, one amount bit flipped) yields a different id.

    Args:
        data: Canonical transaction encoding

    Returns:
        64-character lowercase hex id
    """
    return sha256_bytes(data).hex()


def is_valid_id(value: str) -> bool:
    """Check that ``value`` looks like a derived id."""
    if not isinstance(value, str) or len(value) != ID_LENGTH:
        return False
    try:
        bytes.fromhex(value)
    except ValueError:
        return False
    return value == value.lower()
