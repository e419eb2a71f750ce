"""
External signing device contract.

Defines the request sent to a hardware signer, the channel protocol any
transport adapter (USB/HID, IPC, ...) must implement, and the result
variants a signing round resolves to.

Security Requirements:
- Private keys never leave the device
- The device only ever receives the unsigned canonical bytes
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol, Union, runtime_checkable

from ..runtime.errors import ErrorCode, SigningDeclined, SigningFailed
from ..transactions import Transaction

DeviceResponse = Optional[Union[bytes, str]]


@dataclass(frozen=True)
class SigningRequest:
    """One device prompt: unsigned canonical bytes and the device account to sign with."""
    bytes_hex: str
    account_index: int

    def to_dict(self) -> dict:
        return {"transactionHex": self.bytes_hex, "accountIndex": self.account_index}


@runtime_checkable
class DeviceChannel(Protocol):
    """
    Protocol interface for hardware signer transports.

    One channel talks to one physical device, which can show one prompt at
    a time.
    """

    async def request_signature(self, request: SigningRequest) -> DeviceResponse:
        """
        Ask the device to sign ``request.bytes_hex`` with ``request.account_index``.

        Returns:
            Signature as bytes or hex, or ``None``/empty when the user declined

        Raises:
            Exception: Any transport failure (disconnect, timeout, protocol error)
        """
        ...


# =============================================================================
# Signing round results
# =============================================================================

@dataclass(frozen=True)
class Signed:
    """The device signed; ``transaction`` is finalized and re-identified."""
    transaction: Transaction

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Transaction:
        return self.transaction


@dataclass(frozen=True)
class Declined:
    """The user refused on the device or the prompt was cancelled."""
    reason: str = "Signing was declined on the device"

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Transaction:
        raise SigningDeclined(self.reason)


@dataclass(frozen=True)
class Failed:
    """The device channel failed; ``cause`` is the underlying exception."""
    cause: BaseException
    message: str = "Signing failed"
    code: ErrorCode = ErrorCode.SIGNING_FAILED

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Transaction:
        raise SigningFailed(self.message, self.code, cause=self.cause) from self.cause


SigningResult = Union[Signed, Declined, Failed]


__all__ = [
    "DeviceResponse",
    "SigningRequest",
    "DeviceChannel",
    "Signed",
    "Declined",
    "Failed",
    "SigningResult",
]
