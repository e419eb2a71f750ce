"""
Configuration for the transaction core.

The configuration is an explicit value handed to the encoder, the assembler
and the signing coordinator at construction. Nothing reads it from module
globals at call time.
"""

from __future__ import annotations
import math
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Mapping, Optional

from .runtime.errors import ConfigurationError

DEFAULT_NETWORK_EPOCH = datetime(2017, 3, 21, 13, 0, 0, tzinfo=timezone.utc)
DEFAULT_VENDOR_FIELD_LENGTH = 64

ENV_NETWORK_EPOCH = "PERSONA_NETWORK_EPOCH"
ENV_VENDOR_FIELD_LENGTH = "PERSONA_VENDOR_FIELD_LENGTH"
ENV_SIGNING_TIMEOUT = "PERSONA_SIGNING_TIMEOUT"


@dataclass(frozen=True)
class CoreConfig:
    """Configuration for encoding and device signing."""
    network_epoch: datetime = field(default=DEFAULT_NETWORK_EPOCH)
    vendor_field_length: int = DEFAULT_VENDOR_FIELD_LENGTH
    # None means wait for the operator as long as it takes
    request_timeout: Optional[float] = None

    def __post_init__(self):
        if self.network_epoch.tzinfo is None:
            raise ConfigurationError("network_epoch must be timezone-aware")
        if self.vendor_field_length <= 0:
            raise ConfigurationError(
                "vendor_field_length must be positive",
                details={"vendor_field_length": self.vendor_field_length},
            )
        if self.request_timeout is not None and not (math.isfinite(self.request_timeout)
                                                     and self.request_timeout > 0):
            raise ConfigurationError(
                "request_timeout must be a positive finite number or None",
                details={"request_timeout": self.request_timeout},
            )

    def slot_time(self, now: Optional[datetime] = None) -> int:
        """
        Get seconds elapsed since the network epoch.

        Args:
            now: Point in time to convert (defaults to current UTC time)

        Returns:
            Whole seconds since ``network_epoch``
        """
        now = now or datetime.now(timezone.utc)
        return int((now - self.network_epoch).total_seconds())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> CoreConfig:
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            CoreConfig with unset variables left at their defaults

        Raises:
            ConfigurationError: If a variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        raw_epoch = env.get(ENV_NETWORK_EPOCH)
        if raw_epoch:
            try:
                epoch = datetime.fromisoformat(raw_epoch.replace("Z", "+00:00"))
            except ValueError as e:
                raise ConfigurationError(f"Invalid {ENV_NETWORK_EPOCH}: {raw_epoch}", cause=e)
            if epoch.tzinfo is None:
                epoch = epoch.replace(tzinfo=timezone.utc)
            kwargs["network_epoch"] = epoch

        raw_length = env.get(ENV_VENDOR_FIELD_LENGTH)
        if raw_length:
            try:
                kwargs["vendor_field_length"] = int(raw_length)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {ENV_VENDOR_FIELD_LENGTH}: {raw_length}", cause=e)

        raw_timeout = env.get(ENV_SIGNING_TIMEOUT)
        if raw_timeout:
            try:
                kwargs["request_timeout"] = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {ENV_SIGNING_TIMEOUT}: {raw_timeout}", cause=e)

        return cls(**kwargs)


DEFAULT_CONFIG = CoreConfig()
