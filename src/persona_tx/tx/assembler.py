"""
Transaction assembler.

Prepares a transaction for signing: binds the signer's public key, stamps a
missing timestamp from the configured network epoch and
applies the type-specific normalization rules. The assembler never encodes
or hashes; it only returns a new transaction value.
"""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from ..config import CoreConfig, DEFAULT_CONFIG
from ..enums import TransactionType
from ..transactions import Transaction, SignerIdentity

logger = logging.getLogger(__name__)

Normalizer = Callable[[Transaction, SignerIdentity], Dict[str, Any]]


def vote_recipient_normalizer(transaction: Transaction, identity: SignerIdentity) -> Dict[str, Any]:
    """
    Votes are always addressed to the voter.

    Any caller-supplied recipient is discarded.
    """
    return {"recipient_id": identity.address}


DEFAULT_NORMALIZERS: Mapping[TransactionType, Normalizer] = MappingProxyType({
    TransactionType.VOTE: vote_recipient_normalizer,
})


class TransactionAssembler:
    """
    Applies signer binding and per-type normalization.

    Example usage:
        ```python
        assembler = TransactionAssembler()
        prepared = assembler.prepare_for_signing(tx, identity)
        ```
    """

    def __init__(self, normalizers: Optional[Mapping[TransactionType, Normalizer]] = None,
                 config: Optional[CoreConfig] = None):
        """
        Initialize the assembler.

        Args:
            normalizers: Rewrite rule per transaction type (defaults to the vote rule)
            config: Core configuration (network epoch for timestamps)
        """
        table = DEFAULT_NORMALIZERS if normalizers is None else normalizers
        self._normalizers = MappingProxyType(dict(table))
        self.config = config or DEFAULT_CONFIG

    @property
    def normalizers(self) -> Mapping[TransactionType, Normalizer]:
        return self._normalizers

    def prepare_for_signing(self, transaction: Transaction, identity: SignerIdentity) -> Transaction:
        """
        Bind the sender key and normalize type-specific fields.

        Args:
            transaction: Caller's transaction (left untouched)
            identity: Signer identity providing key and address

        Returns:
            New transaction ready for encoding
        """
        changes: Dict[str, Any] = {"sender_public_key": identity.public_key}
        if transaction.timestamp is None:
            changes["timestamp"] = self.config.slot_time()

        normalizer = self._normalizers.get(transaction.type)
        if normalizer is not None:
            changes.update(normalizer(transaction, identity))
            logger.debug("Normalized %s transaction fields: %s",
                         transaction.type.name, sorted(changes))

        return transaction.evolve(**changes)


_default_assembler = TransactionAssembler()


def prepare_for_signing(transaction: Transaction, identity: SignerIdentity) -> Transaction:
    """Prepare with the default normalization rules."""
    return _default_assembler.prepare_for_signing(transaction, identity)


__all__ = [
    "Normalizer",
    "vote_recipient_normalizer",
    "DEFAULT_NORMALIZERS",
    "TransactionAssembler",
    "prepare_for_signing",
]
