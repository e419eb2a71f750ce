# Transaction value types for the Persona transaction core
# Field names follow the wallet JSON struct (camelCase aliases)

from __future__ import annotations
from pydantic import BaseModel, Field, ValidationInfo, model_validator
from typing import Optional, List, Dict, Any, TYPE_CHECKING

from .enums import TransactionType

if TYPE_CHECKING:
    from .codec.encoder import TransactionEncoder


# =============================================================================
# Asset payloads (type-specific)
# =============================================================================

class DelegateAsset(BaseModel):
    """Delegate registration payload."""
    username: str

    model_config = {"populate_by_name": True, "frozen": True}


class SecondSignatureAsset(BaseModel):
    """Second passphrase registration payload."""
    public_key: str = Field(..., alias="publicKey")

    model_config = {"populate_by_name": True, "frozen": True}


class MultiSignatureAsset(BaseModel):
    """Multi-signature wallet registration payload."""
    min: int = Field(..., ge=1, le=255)
    lifetime: int = Field(..., ge=1, le=255)
    keysgroup: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}


class TransactionAsset(BaseModel):
    """Container for every asset kind; only the one matching the type is encoded."""
    votes: Optional[List[str]] = None
    delegate: Optional[DelegateAsset] = None
    signature: Optional[SecondSignatureAsset] = None
    multisignature: Optional[MultiSignatureAsset] = None

    model_config = {"populate_by_name": True, "frozen": True}


# =============================================================================
# Transaction
# =============================================================================

class Transaction(BaseModel):
    """
    Logical transaction fields.

    Transactions are immutable values. ``evolve()`` returns an updated copy
    with the id cleared and ``identified()`` returns a copy whose id is
    derived from the canonical encoding. An ``id`` passed to the constructor
    must match the derived one; ``from_struct(data, encoder)`` checks it
    against a non-default encoder.
    """

    type: TransactionType
    # Seconds since the network epoch; stamped by the assembler when left unset
    timestamp: Optional[int] = None
    sender_public_key: Optional[str] = Field(default=None, alias="senderPublicKey")
    requester_public_key: Optional[str] = Field(default=None, alias="requesterPublicKey")
    recipient_id: Optional[str] = Field(default=None, alias="recipientId")
    vendor_field: Optional[str] = Field(default=None, alias="vendorField")
    vendor_field_hex: Optional[str] = Field(default=None, alias="vendorFieldHex")
    amount: int = 0
    fee: int = 0
    asset: TransactionAsset = Field(default_factory=TransactionAsset)
    signature: Optional[str] = None
    second_signature: Optional[str] = Field(default=None, alias="signSignature")
    id: Optional[str] = None

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _check_id(self, info: ValidationInfo) -> Transaction:
        # The encoder may be supplied as validation context {"encoder": ...}
        if self.id is None:
            return self
        from .codec.encoder import default_encoder
        from .codec.hashes import derive_id
        from .runtime.errors import EncodingError
        encoder = (info.context or {}).get("encoder") or default_encoder()
        try:
            expected = derive_id(encoder.encode(self))
        except EncodingError as e:
            raise ValueError(f"id supplied for a transaction that cannot be encoded: {e.message}")
        if self.id != expected:
            raise ValueError("id does not match the canonical encoding of the transaction")
        return self

    def evolve(self, **changes: Any) -> Transaction:
        """
        Return a validated copy with ``changes`` applied and the id cleared.

        Args:
            **changes: Field values keyed by field name

        Returns:
            New transaction value
        """
        data = self.model_dump()
        data.update(changes)
        data["id"] = None
        return type(self).model_validate(data)

    def identified(self, encoder: Optional[TransactionEncoder] = None) -> Transaction:
        """
        Return a copy carrying the id derived from the full encoding.

        Args:
            encoder: Encoder to use (defaults to the stock rule table)

        Returns:
            Transaction with ``id`` set

        Raises:
            EncodingError: If the transaction cannot be encoded
        """
        from .codec.encoder import default_encoder
        from .codec.hashes import derive_id
        encoder = encoder or default_encoder()
        return self.model_copy(update={"id": derive_id(encoder.encode(self))})

    @property
    def is_signed(self) -> bool:
        """True when the primary signature is present."""
        return bool(self.signature)

    def to_struct(self) -> Dict[str, Any]:
        """JSON-ready dict using wallet field names, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    @classmethod
    def from_struct(cls, data: Dict[str, Any],
                    encoder: Optional[TransactionEncoder] = None) -> Transaction:
        """
        Build a transaction from a wallet struct.

        Args:
            data: Struct as produced by ``to_struct()``
            encoder: Encoder the struct's ``id`` was derived with (defaults
                to the stock rule table)

        Raises:
            ValidationError: If a field is invalid or the id does not match
        """
        context = {"encoder": encoder} if encoder is not None else None
        return cls.model_validate(data, context=context)


class SignerIdentity(BaseModel):
    """Who is signing: the sender key, its address and its device account index."""
    public_key: str = Field(..., alias="publicKey")
    address: str
    device_index: int = Field(default=0, ge=0, alias="ledgerIndex")

    model_config = {"populate_by_name": True, "frozen": True}


__all__ = [
    "DelegateAsset",
    "SecondSignatureAsset",
    "MultiSignatureAsset",
    "TransactionAsset",
    "Transaction",
    "SignerIdentity",
]
