"""
ECDSA/secp256k1 verification of transaction signatures.

The primary signature covers the encoding without any signature; the second
signature covers the encoding that already carries the primary one.
"""

from __future__ import annotations
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ..codec.encoder import PUBLIC_KEY_LENGTH, TransactionEncoder, decode_hex, default_encoder
from ..transactions import Transaction

_CURVE = ec.SECP256K1()


def verify_der_signature(public_key: bytes, signature: bytes, message: bytes) -> bool:
    """
    Verify a DER encoded ECDSA signature over SHA-256(message).

    Args:
        public_key: SEC1 encoded secp256k1 public key
        signature: DER encoded signature
        message: Signed bytes (hashed here)

    Returns:
        True if the signature is valid
    """
    try:
        key = ec.EllipticCurvePublicKey.from_encoded_point(_CURVE, public_key)
        key.verify(signature, message, ec.ECDSA(hashes.SHA256()))
        return True
    except (InvalidSignature, ValueError):
        return False


def verify_signature(transaction: Transaction, encoder: Optional[TransactionEncoder] = None) -> bool:
    """
    Check the primary signature against the sender public key.

    Returns:
        False when the signature is absent or invalid

    Raises:
        EncodingError: If the transaction cannot be encoded
    """
    if not transaction.signature:
        return False
    encoder = encoder or default_encoder()
    message = encoder.encode(transaction, False, False)
    public_key = decode_hex("senderPublicKey", transaction.sender_public_key, PUBLIC_KEY_LENGTH)
    return verify_der_signature(public_key, decode_hex("signature", transaction.signature), message)


def verify_second_signature(transaction: Transaction, second_public_key: str,
                            encoder: Optional[TransactionEncoder] = None) -> bool:
    """
    Check the second signature against the registered second public key.

    Returns:
        False when either signature is absent or the second one is invalid
    """
    if not transaction.signature or not transaction.second_signature:
        return False
    encoder = encoder or default_encoder()
    message = encoder.encode(transaction, True, False)
    public_key = decode_hex("secondPublicKey", second_public_key, PUBLIC_KEY_LENGTH)
    return verify_der_signature(
        public_key, decode_hex("signSignature", transaction.second_signature), message
    )


__all__ = ["verify_der_signature", "verify_signature", "verify_second_signature"]
