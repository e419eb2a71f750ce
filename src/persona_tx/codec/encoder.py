"""
Canonical transaction encoder.

Turns a transaction's logical fields into the single byte sequence that is
hashed into its id and handed to the device for signing. The layout is:

    type            u8
    timestamp       u32 LE
    senderPublicKey 33 bytes (required)
    requesterKey    33 bytes (only when present)
    recipientId     21 bytes base58check payload, or 21 zero bytes
    vendorField     zero padded to the configured width
    amount          u64 LE
    fee             u64 LE
    asset           written by the type's EncodingRule
    signature       raw bytes (optional, flag controlled)
    secondSignature raw bytes (optional, flag controlled)

The field order is part of the wire contract and must not change.
"""

from __future__ import annotations
import re
from abc import ABC, abstractmethod
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import base58

from ..config import CoreConfig, DEFAULT_CONFIG
from ..enums import TransactionType
from ..runtime.errors import EncodingError, ErrorCode, MalformedFieldError, MissingFieldError
from ..transactions import Transaction
from .hashes import derive_id
from .writer import BinaryWriter

PUBLIC_KEY_LENGTH = 33
ADDRESS_LENGTH = 21

_VOTE_PATTERN = re.compile(r"[+-][0-9a-fA-F]{66}")


def decode_hex(field: str, value: str, length: Optional[int] = None) -> bytes:
    """
    Decode a hex field, optionally enforcing its byte length.

    Raises:
        MalformedFieldError: If the value is not hex or has the wrong length
    """
    try:
        raw = bytes.fromhex(value)
    except (TypeError, ValueError) as e:
        raise MalformedFieldError(field, "not a hex string", cause=e)
    if length is not None and len(raw) != length:
        raise MalformedFieldError(field, f"expected {length} bytes, got {len(raw)}")
    return raw


def decode_address(field: str, value: str) -> bytes:
    """
    Decode a base58check address into its 21-byte payload.

    Raises:
        MalformedFieldError: If the checksum or length is wrong
    """
    try:
        raw = base58.b58decode_check(value)
    except ValueError as e:
        raise MalformedFieldError(field, "invalid base58check address", cause=e)
    if len(raw) != ADDRESS_LENGTH:
        raise MalformedFieldError(field, f"expected {ADDRESS_LENGTH} bytes, got {len(raw)}")
    return raw


class EncodingRule(ABC):
    """
    Type-specific part of the canonical encoding.

    A rule states which common fields its type requires and writes the
    asset bytes that follow the fee.
    """

    requires_recipient: bool = False

    @property
    @abstractmethod
    def tx_type(self) -> TransactionType:
        """Transaction type this rule encodes."""
        pass

    @abstractmethod
    def write_asset(self, transaction: Transaction, writer: BinaryWriter) -> None:
        """
        Write the asset bytes for ``transaction``.

        Raises:
            EncodingError: If the asset payload is absent or malformed
        """
        pass


class TransferRule(EncodingRule):
    """Plain value transfer; no asset bytes."""

    requires_recipient = True

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.TRANSFER

    def write_asset(self, transaction: Transaction, writer: BinaryWriter) -> None:
        pass


class SecondSignatureRule(EncodingRule):
    """Registers a second public key: writes that key."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.SECOND_SIGNATURE

    def write_asset(self, transaction: Transaction, writer: BinaryWriter) -> None:
        asset = transaction.asset.signature
        if asset is None:
            raise MissingFieldError("asset.signature")
        writer.bytes(decode_hex("asset.signature.publicKey", asset.public_key, PUBLIC_KEY_LENGTH))


class DelegateRegistrationRule(EncodingRule):
    """Registers a delegate: writes the UTF-8 username."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.DELEGATE_REGISTRATION

    def write_asset(self, transaction: Transaction, writer: BinaryWriter) -> None:
        asset = transaction.asset.delegate
        if asset is None:
            raise MissingFieldError("asset.delegate")
        if not asset.username:
            raise MalformedFieldError("asset.delegate.username", "empty username")
        writer.bytes(asset.username.encode("utf-8"))


class VoteRule(EncodingRule):
    """Casts or removes votes: writes the concatenated vote strings."""

    requires_recipient = True

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.VOTE

    def write_asset(self, transaction: Transaction, writer: BinaryWriter) -> None:
        votes = transaction.asset.votes
        if not votes:
            raise MissingFieldError("asset.votes")
        for vote in votes:
            if not _VOTE_PATTERN.fullmatch(vote):
                raise MalformedFieldError("asset.votes", f"invalid vote {vote!r}")
        writer.bytes("".join(votes).encode("utf-8"))


class MultiSignatureRule(EncodingRule):
    """Registers a multi-signature wallet: min, lifetime, then the keys group."""

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType.MULTI_SIGNATURE

    def write_asset(self, transaction: Transaction, writer: BinaryWriter) -> None:
        asset = transaction.asset.multisignature
        if asset is None:
            raise MissingFieldError("asset.multisignature")
        if not asset.keysgroup:
            raise MissingFieldError("asset.multisignature.keysgroup")
        writer.u8(asset.min)
        writer.u8(asset.lifetime)
        writer.bytes("".join(asset.keysgroup).encode("utf-8"))


DEFAULT_RULES: Mapping[TransactionType, EncodingRule] = MappingProxyType({
    rule.tx_type: rule
    for rule in (
        TransferRule(),
        SecondSignatureRule(),
        DelegateRegistrationRule(),
        VoteRule(),
        MultiSignatureRule(),
    )
})


class TransactionEncoder:
    """
    Canonical encoder driven by an explicit ``{type: rule}`` table.

    Instances hold only immutable configuration, so one encoder can be
    shared across threads and tasks.
    """

    def __init__(self, rules: Optional[Mapping[TransactionType, EncodingRule]] = None,
                 config: Optional[CoreConfig] = None):
        """
        Initialize the encoder.

        Args:
            rules: Encoding rule per transaction type (defaults to DEFAULT_RULES)
            config: Core configuration (vendor field width)
        """
        table: Dict[TransactionType, EncodingRule] = dict(DEFAULT_RULES if rules is None else rules)
        for tx_type, rule in table.items():
            if rule.tx_type != tx_type:
                raise ValueError(f"Rule {type(rule).__name__} registered under {tx_type.name}")
        self._rules = MappingProxyType(table)
        self._config = config or DEFAULT_CONFIG

    @property
    def rules(self) -> Mapping[TransactionType, EncodingRule]:
        return self._rules

    def supports(self, tx_type: TransactionType) -> bool:
        return tx_type in self._rules

    def rule_for(self, tx_type: TransactionType) -> EncodingRule:
        """
        Look up the encoding rule for a type.

        Raises:
            EncodingError: If no rule is registered
        """
        rule = self._rules.get(tx_type)
        if rule is None:
            raise EncodingError(
                f"No encoding rule for transaction type {TransactionType(tx_type).name}",
                ErrorCode.UNSUPPORTED_TYPE,
                details={"type": int(tx_type)},
            )
        return rule

    def encode(self, transaction: Transaction, include_signature: bool = True,
               include_second_signature: bool = True) -> bytes:
        """
        Encode a transaction to its canonical bytes.

        Args:
            transaction: Transaction to encode
            include_signature: Append the primary signature when present
            include_second_signature: Append the second signature when present

        Returns:
            Canonical byte encoding

        Raises:
            EncodingError: If a required field is missing or malformed
        """
        rule = self.rule_for(transaction.type)
        writer = BinaryWriter()

        writer.u8(int(transaction.type))
        if transaction.timestamp is None:
            raise MissingFieldError("timestamp")
        self._write_uint(writer.u32le, "timestamp", transaction.timestamp)

        if not transaction.sender_public_key:
            raise MissingFieldError("senderPublicKey")
        writer.bytes(decode_hex("senderPublicKey", transaction.sender_public_key, PUBLIC_KEY_LENGTH))

        if transaction.requester_public_key:
            writer.bytes(decode_hex("requesterPublicKey", transaction.requester_public_key,
                                    PUBLIC_KEY_LENGTH))

        if transaction.recipient_id:
            writer.bytes(decode_address("recipientId", transaction.recipient_id))
        elif rule.requires_recipient:
            raise MissingFieldError("recipientId", details={"type": transaction.type.name})
        else:
            writer.zeros(ADDRESS_LENGTH)

        self._write_vendor_field(writer, transaction)
        self._write_uint(writer.u64le, "amount", transaction.amount)
        self._write_uint(writer.u64le, "fee", transaction.fee)

        try:
            rule.write_asset(transaction, writer)
        except ValueError as e:
            raise MalformedFieldError("asset", str(e), cause=e)

        if include_signature and transaction.signature:
            writer.bytes(decode_hex("signature", transaction.signature))
        if include_second_signature and transaction.second_signature:
            writer.bytes(decode_hex("signSignature", transaction.second_signature))

        return writer.to_bytes()

    def get_bytes(self, transaction: Transaction) -> str:
        """
        Hex of the fully unsigned encoding (both signatures skipped).

        Args:
            transaction: Transaction to encode

        Returns:
            Hex string the device is asked to sign
        """
        return self.encode(transaction, False, False).hex()

    def _write_vendor_field(self, writer: BinaryWriter, transaction: Transaction) -> None:
        width = self._config.vendor_field_length
        if transaction.vendor_field_hex:
            raw = decode_hex("vendorFieldHex", transaction.vendor_field_hex)
            field = "vendorFieldHex"
        elif transaction.vendor_field:
            raw = transaction.vendor_field.encode("utf-8")
            field = "vendorField"
        else:
            writer.zeros(width)
            return
        if len(raw) > width:
            raise MalformedFieldError(field, f"longer than {width} bytes")
        writer.fixed(raw, width)

    @staticmethod
    def _write_uint(write, field: str, value: int) -> None:
        try:
            write(value)
        except ValueError as e:
            raise MalformedFieldError(field, str(e), cause=e)


@lru_cache(maxsize=1)
def default_encoder() -> TransactionEncoder:
    """Shared encoder using the stock rule table and default configuration."""
    return TransactionEncoder()


def encode(transaction: Transaction, include_signature: bool = True,
           include_second_signature: bool = True) -> bytes:
    """Encode with the default encoder."""
    return default_encoder().encode(transaction, include_signature, include_second_signature)


def compute_id(transaction: Transaction, encoder: Optional[TransactionEncoder] = None) -> str:
    """
    Derive the id of a transaction from its full encoding (signatures included).

    Raises:
        EncodingError: If the transaction cannot be encoded
    """
    return derive_id((encoder or default_encoder()).encode(transaction, True, True))


__all__ = [
    "PUBLIC_KEY_LENGTH",
    "ADDRESS_LENGTH",
    "decode_hex",
    "decode_address",
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
