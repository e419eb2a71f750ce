"""
Binary Writer

Little-endian primitive writer used by the canonical transaction encoder.
Values are range-checked; nothing is masked or truncated silently.
"""

import struct
from typing import List


class BinaryWriter:
    """
    Append-only byte buffer with fixed-width primitives.

    Every method writes exactly the number of bytes its name implies, so a
    sequence of calls fully determines the output layout.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)

        Raises:
            ValueError: If the value does not fit in one byte
        """
        if not 0 <= v <= 0xFF:
            raise ValueError(f"u8 out of range: {v}")
        self._bb.append(v)

    def u32le(self, v: int) -> None:
        """
        Write unsigned 32-bit integer in little-endian format.

        Args:
            v: Integer value to write as 32-bit little-endian
        """
        if not 0 <= v <= 0xFFFFFFFF:
            raise ValueError(f"u32 out of range: {v}")
        self._bb.extend(struct.pack('<I', v))

    def u64le(self, v: int) -> None:
        """
        Write unsigned 64-bit integer in little-endian format.

        Args:
            v: Integer value to write as 64-bit little-endian
        """
        if not 0 <= v <= 0xFFFFFFFFFFFFFFFF:
            raise ValueError(f"u64 out of range: {v}")
        self._bb.extend(struct.pack('<Q', v))

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def fixed(self, v: bytes, width: int) -> None:
        """
        Write bytes right-padded with zeros to exactly ``width`` bytes.

        Args:
            v: Bytes to write
            width: Total number of bytes to emit

        Raises:
            ValueError: If ``v`` is longer than ``width``
        """
        if len(v) > width:
            raise ValueError(f"{len(v)} bytes do not fit in a {width}-byte field")
        self._bb.extend(v)
        self._bb.extend(bytes(width - len(v)))

    def zeros(self, width: int) -> None:
        """Write ``width`` zero bytes."""
        self._bb.extend(bytes(width))

    def __len__(self) -> int:
        return len(self._bb)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
