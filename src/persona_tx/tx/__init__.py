"""
Transaction assembly for the Persona transaction core.
"""

from .assembler import (
    Normalizer,
    vote_recipient_normalizer,
    DEFAULT_NORMALIZERS,
    TransactionAssembler,
    prepare_for_signing,
)

__all__ = [
    "Normalizer",
    "vote_recipient_normalizer",
    "DEFAULT_NORMALIZERS",
    "TransactionAssembler",
    "prepare_for_signing",
]
