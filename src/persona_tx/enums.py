# Enumerations shared by the codec, assembler and signers

from enum import Enum, IntEnum


class TransactionType(IntEnum):
    """Transaction kinds, valued by their wire type byte."""
    TRANSFER = 0
    SECOND_SIGNATURE = 1
    DELEGATE_REGISTRATION = 2
    VOTE = 3
    MULTI_SIGNATURE = 4
    IPFS = 5
    TIMELOCK_TRANSFER = 6
    MULTI_PAYMENT = 7
    DELEGATE_RESIGNATION = 8


class SignatureSlot(Enum):
    """Which signature field a signing round fills."""
    PRIMARY = "signature"
    SECOND = "secondSignature"


__all__ = ["TransactionType", "SignatureSlot"]
