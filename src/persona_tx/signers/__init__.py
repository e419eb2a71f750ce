"""
Signing infrastructure for the Persona transaction core.

Provides the hardware device contract, the signing coordinator and
signature verification.
"""

from .device import (
    DeviceResponse,
    SigningRequest,
    DeviceChannel,
    Signed,
    Declined,
    Failed,
    SigningResult,
)
from .coordinator import HardwareSignerCoordinator, MalformedDeviceResponse, normalize_signature
from .verify import verify_der_signature, verify_signature, verify_second_signature

__all__ = [
    "DeviceResponse",
    "SigningRequest",
    "DeviceChannel",
    "Signed",
    "Declined",
    "Failed",
    "SigningResult",
    "HardwareSignerCoordinator",
    "MalformedDeviceResponse",
    "normalize_signature",
    "verify_der_signature",
    "verify_signature",
    "verify_second_signature",
]
