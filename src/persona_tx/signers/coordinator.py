"""
Hardware signer coordinator.

Drives one signing round against an external device:

1. normalize the transaction for the signer (assembler)
2. encode it without the signature being requested
3. send a SigningRequest to the device and wait for the operator
4. on a signature, merge it into a private copy and re-derive the id

A round resolves to exactly one of Signed, Declined or Failed. The caller's
transaction is never modified, whatever the outcome; a new attempt is always
an explicit new call.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Optional

from ..codec.encoder import TransactionEncoder, default_encoder
from ..config import CoreConfig, DEFAULT_CONFIG
from ..enums import SignatureSlot
from ..runtime.errors import ErrorCode, MissingFieldError
from ..transactions import Transaction, SignerIdentity
from ..tx.assembler import TransactionAssembler
from .device import (
    DeviceChannel,
    DeviceResponse,
    Declined,
    Failed,
    Signed,
    SigningRequest,
    SigningResult,
)

logger = logging.getLogger(__name__)

_SLOT_FIELDS = {
    SignatureSlot.PRIMARY: "signature",
    SignatureSlot.SECOND: "second_signature",
}


class MalformedDeviceResponse(ValueError):
    """The device answered with something that is not a signature."""
    pass


def _is_empty(response: DeviceResponse) -> bool:
    """A decline is ``None`` or a zero-length bytes/hex answer; other values are malformed."""
    if response is None:
        return True
    return isinstance(response, (bytes, bytearray, str)) and len(response) == 0


def normalize_signature(response: DeviceResponse) -> str:
    """
    Convert a device signature response to lowercase hex.

    Raises:
        MalformedDeviceResponse: If the response is neither bytes nor hex
    """
    if isinstance(response, (bytes, bytearray)):
        return bytes(response).hex()
    if isinstance(response, str):
        try:
            return bytes.fromhex(response).hex()
        except ValueError as e:
            raise MalformedDeviceResponse(f"signature is not hex: {response!r}") from e
    raise MalformedDeviceResponse(f"unexpected signature type {type(response).__name__}")


class HardwareSignerCoordinator:
    """
    Runs signing rounds against one device channel.

    At most one round talks to the device at a time; concurrent callers
    queue on the channel lock. The coordinator keeps no state between
    rounds apart from that lock.
    """

    def __init__(
        self,
        channel: DeviceChannel,
        encoder: Optional[TransactionEncoder] = None,
        assembler: Optional[TransactionAssembler] = None,
        config: Optional[CoreConfig] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            channel: Transport to the hardware signer
            encoder: Canonical encoder (defaults to the stock rule table)
            assembler: Transaction assembler (defaults to the stock rules)
            config: Core configuration (device request timeout)
        """
        self._channel = channel
        self._config = config or DEFAULT_CONFIG
        self._encoder = encoder or (TransactionEncoder(config=config) if config else default_encoder())
        self._assembler = assembler or TransactionAssembler(config=self._config)
        self._lock = asyncio.Lock()
        self._pending: Optional[asyncio.Future] = None

    @property
    def busy(self) -> bool:
        """True while a round holds the device."""
        return self._lock.locked()

    def cancel(self) -> bool:
        """
        Cancel the prompt currently awaiting the device.

        The interrupted round resolves to Declined.

        Returns:
            True if a pending device request was cancelled
        """
        pending = self._pending
        if pending is None or pending.done():
            return False
        logger.debug("Cancelling pending device signing request")
        return pending.cancel()

    async def attempt(
        self,
        identity: SignerIdentity,
        transaction: Transaction,
        slot: SignatureSlot = SignatureSlot.PRIMARY,
    ) -> SigningResult:
        """
        Run one signing round and report its outcome as a value.

        Args:
            identity: Signer key, address and device account index
            transaction: Transaction to sign (never modified)
            slot: Signature field the device fills

        Returns:
            Signed, Declined or Failed

        Raises:
            EncodingError: If the transaction cannot be encoded
        """
        prepared = self._assembler.prepare_for_signing(transaction, identity)
        if slot is SignatureSlot.SECOND and not prepared.signature:
            raise MissingFieldError("signature", details={"slot": slot.value})

        unsigned = self._encoder.encode(
            prepared,
            include_signature=slot is SignatureSlot.SECOND,
            include_second_signature=False,
        )
        request = SigningRequest(bytes_hex=unsigned.hex(), account_index=identity.device_index)

        async with self._lock:
            logger.debug("Requesting %s from device account %d", slot.value, request.account_index)
            try:
                response = await self._request(request)
            except asyncio.CancelledError:
                task = asyncio.current_task()
                if task is not None and task.cancelling():
                    raise
                logger.debug("Device signing request cancelled")
                return Declined("Signing request was cancelled")
            except asyncio.TimeoutError as e:
                return Failed(e, "Device did not answer in time", ErrorCode.DEVICE_TIMEOUT)
            except Exception as e:
                return Failed(e, f"Device channel error: {e}")
            finally:
                self._pending = None

            if _is_empty(response):
                logger.debug("Device declined to sign")
                return Declined()

            try:
                signature = normalize_signature(response)
            except MalformedDeviceResponse as e:
                return Failed(e, "Malformed device response", ErrorCode.MALFORMED_RESPONSE)

            changes = {_SLOT_FIELDS[slot]: signature}
            if slot is SignatureSlot.PRIMARY:
                # A new primary signature invalidates any second signature over the old one
                changes["second_signature"] = None
            finalized = prepared.evolve(**changes).identified(self._encoder)
            logger.debug("Signed transaction %s", finalized.id)
            return Signed(finalized)

    async def sign(
        self,
        identity: SignerIdentity,
        transaction: Transaction,
        slot: SignatureSlot = SignatureSlot.PRIMARY,
    ) -> Transaction:
        """
        Run one signing round and return the finalized transaction.

        Raises:
            EncodingError: If the transaction cannot be encoded
            SigningDeclined: If the device declined or the prompt was cancelled
            SigningFailed: If the device channel failed
        """
        result = await self.attempt(identity, transaction, slot)
        return result.unwrap()

    async def _request(self, request: SigningRequest) -> DeviceResponse:
        self._pending = asyncio.ensure_future(self._channel.request_signature(request))
        timeout = self._config.request_timeout
        if timeout is None:
            return await self._pending
        return await asyncio.wait_for(self._pending, timeout)


__all__ = [
    "MalformedDeviceResponse",
    "normalize_signature",
    "HardwareSignerCoordinator",
]
