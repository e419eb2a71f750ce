"""
Persona Transaction Core

Canonical transaction encoding, content-addressed transaction ids and
hardware-device signing for the Persona wallet.
"""

import logging

from .enums import TransactionType, SignatureSlot
from .config import CoreConfig, DEFAULT_CONFIG
from .runtime.errors import *
from .transactions import (
    Transaction,
    TransactionAsset,
    DelegateAsset,
    SecondSignatureAsset,
    MultiSignatureAsset,
    SignerIdentity,
)
from .codec import TransactionEncoder, EncodingRule, DEFAULT_RULES, derive_id, encode, compute_id
from .tx import TransactionAssembler, prepare_for_signing
from .signers import (
    DeviceChannel,
    SigningRequest,
    Signed,
    Declined,
    Failed,
    SigningResult,
    HardwareSignerCoordinator,
    verify_signature,
    verify_second_signature,
)
from .service import TransactionService

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "TransactionType",
    "SignatureSlot",
    "CoreConfig",
    "DEFAULT_CONFIG",
    "Transaction",
    "TransactionAsset",
    "DelegateAsset",
    "SecondSignatureAsset",
    "MultiSignatureAsset",
    "SignerIdentity",
    "TransactionEncoder",
    "EncodingRule",
    "DEFAULT_RULES",
    "derive_id",
    "encode",
    "compute_id",
    "TransactionAssembler",
    "prepare_for_signing",
    "DeviceChannel",
    "SigningRequest",
    "Signed",
    "Declined",
    "Failed",
    "SigningResult",
    "HardwareSignerCoordinator",
    "verify_signature",
    "verify_second_signature",
    "TransactionService",
    # Errors
    "ErrorCode",
    "PersonaError",
    "ConfigurationError",
    "EncodingError",
    "MissingFieldError",
    "MalformedFieldError",
    "SigningError",
    "SigningDeclined",
    "SigningFailed",
    "is_recoverable",
]
