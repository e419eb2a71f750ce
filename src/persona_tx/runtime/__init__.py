"""Runtime helpers for the Persona transaction core"""

from .errors import (
    ErrorCode,
    PersonaError,
    ConfigurationError,
    EncodingError,
    MissingFieldError,
    MalformedFieldError,
    SigningError,
    SigningDeclined,
    SigningFailed,
    is_recoverable,
)

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
