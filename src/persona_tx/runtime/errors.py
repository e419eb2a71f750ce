"""
Persona Error Model

This module provides the error handling framework for the transaction core.
Every error carries a numeric code, optional details and the underlying
cause, so hosts can map them to their own alerting.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes raised by the transaction core."""

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    INVALID_CONFIGURATION = 3

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    MISSING_FIELD = 101
    MALFORMED_FIELD = 102
    UNSUPPORTED_TYPE = 103

    # Signing errors (300-399)
    SIGNING_DECLINED = 300
    SIGNING_FAILED = 301
    DEVICE_TIMEOUT = 302
    MALFORMED_RESPONSE = 303


class PersonaError(Exception):
    """
    Base class for all transaction core errors.

    Provides structured error information for the host application.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause!r}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ConfigurationError(PersonaError):
    """Invalid configuration value."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.INVALID_CONFIGURATION, details, cause)


class EncodingError(PersonaError):
    """A required field is missing or malformed for the transaction type."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, code, details, cause)


class MissingFieldError(EncodingError):
    """Required field absent."""

    def __init__(self, field: str, details: Optional[Dict[str, Any]] = None):
        merged = {"field": field, **(details or {})}
        super().__init__(f"Missing required field: {field}", ErrorCode.MISSING_FIELD, merged)
        self.field = field


class MalformedFieldError(EncodingError):
    """Field present but not encodable."""

    def __init__(self, field: str, reason: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        merged = {"field": field, **(details or {})}
        super().__init__(f"Malformed field {field}: {reason}", ErrorCode.MALFORMED_FIELD, merged, cause)
        self.field = field


class SigningError(PersonaError):
    """Base class for signing round outcomes other than success."""
    pass


class SigningDeclined(SigningError):
    """
    The device or the user refused to sign, or the round was cancelled.

    Recoverable: the caller may start a new signing round from scratch.
    """

    def __init__(self, message: str = "Signing was declined on the device",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.SIGNING_DECLINED, details)


class SigningFailed(SigningError):
    """
    The device channel failed (disconnected, timeout, malformed response).

    The underlying exception is attached as ``cause``.
    """

    def __init__(self, message: str = "Signing failed", code: ErrorCode = ErrorCode.SIGNING_FAILED,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, code, details, cause)


def is_recoverable(error: BaseException) -> bool:
    """
    Check if the host may retry the whole operation after this error.

    Args:
        error: Exception to check

    Returns:
        True for declined and failed signing rounds, False otherwise
    """
    return isinstance(error, SigningError)


__all__ = [
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
