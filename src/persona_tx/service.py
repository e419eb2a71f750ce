"""
Persona Transaction Service Facade.

Provides the three host-facing contracts of the transaction core plus the
byte and verification helpers the wallet uses around them.

Example:
    ```python
    from persona_tx import TransactionService

    service = TransactionService(device_channel)

    prepared = service.prepare_for_signing(tx, identity)
    unsigned_id = service.compute_id(prepared)

    signed = await service.sign_with_device(identity, tx)
    assert service.verify(signed)
    ```
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from .codec.encoder import TransactionEncoder, compute_id
from .config import CoreConfig, DEFAULT_CONFIG
from .enums import SignatureSlot
from .signers.coordinator import HardwareSignerCoordinator
from .signers.device import DeviceChannel, SigningResult
from .signers.verify import verify_signature
from .transactions import Transaction, SignerIdentity
from .tx.assembler import TransactionAssembler


class TransactionService:
    """
    Facade over encoder, assembler and hardware signer coordinator.

    Attributes:
        encoder: Canonical encoder shared by every operation
        assembler: Normalization rules applied before signing
        coordinator: Device signing coordinator (None without a channel)
    """

    def __init__(
        self,
        channel: Optional[DeviceChannel] = None,
        config: Optional[CoreConfig] = None,
        encoder: Optional[TransactionEncoder] = None,
        assembler: Optional[TransactionAssembler] = None,
    ):
        """
        Initialize the service.

        Args:
            channel: Device channel; required only for ``sign_with_device``
            config: Core configuration
            encoder: Canonical encoder (built from ``config`` when omitted)
            assembler: Transaction assembler
        """
        self.config = config or DEFAULT_CONFIG
        self.encoder = encoder or TransactionEncoder(config=self.config)
        self.assembler = assembler or TransactionAssembler(config=self.config)
        self.coordinator = (
            HardwareSignerCoordinator(channel, self.encoder, self.assembler, self.config)
            if channel is not None else None
        )

    # =========================================================================
    # Pure operations
    # =========================================================================

    def prepare_for_signing(self, transaction: Transaction, identity: SignerIdentity) -> Transaction:
        """Bind the signer and normalize; see TransactionAssembler."""
        return self.assembler.prepare_for_signing(transaction, identity)

    def compute_id(self, transaction: Transaction) -> str:
        """Id of the transaction in its current signing state."""
        return compute_id(transaction, self.encoder)

    def get_bytes(self, transaction: Transaction) -> str:
        """Hex of the unsigned canonical encoding."""
        return self.encoder.get_bytes(transaction)

    def load(self, struct: Dict[str, Any]) -> Transaction:
        """
        Rebuild a persisted transaction, checking its id with this service's encoder.

        Raises:
            ValidationError: If a field is invalid or the id does not match
        """
        return Transaction.from_struct(struct, self.encoder)

    def verify(self, transaction: Transaction) -> bool:
        """Check the primary signature against the sender key."""
        return verify_signature(transaction, self.encoder)

    # =========================================================================
    # Device signing
    # =========================================================================

    async def attempt_with_device(
        self,
        identity: SignerIdentity,
        transaction: Transaction,
        slot: SignatureSlot = SignatureSlot.PRIMARY,
    ) -> SigningResult:
        """Run one device round and return its outcome as a value."""
        return await self._require_coordinator().attempt(identity, transaction, slot)

    async def sign_with_device(
        self,
        identity: SignerIdentity,
        transaction: Transaction,
        slot: SignatureSlot = SignatureSlot.PRIMARY,
    ) -> Transaction:
        """
        Sign on the hardware device and return the finalized transaction.

        Raises:
            EncodingError: If the transaction cannot be encoded
            SigningDeclined: If the user declined or the prompt was cancelled
            SigningFailed: If the device channel failed
        """
        return await self._require_coordinator().sign(identity, transaction, slot)

    def cancel_signing(self) -> bool:
        """Cancel the in-flight device prompt, if any."""
        return self.coordinator.cancel() if self.coordinator is not None else False

    def _require_coordinator(self) -> HardwareSignerCoordinator:
        if self.coordinator is None:
            raise RuntimeError("TransactionService was created without a device channel")
        return self.coordinator


__all__ = ["TransactionService"]
