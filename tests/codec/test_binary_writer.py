"""
Binary writer primitive tests.
"""

import pytest

from persona_tx.codec import BinaryWriter


class TestBinaryWriter:

    def test_little_endian_integers(self):
        w = BinaryWriter()
        w.u8(0x01)
        w.u32le(0x02030405)
        w.u64le(0x060708090A0B0C0D)
        assert w.to_bytes() == bytes.fromhex("01" "05040302" "0d0c0b0a09080706")
        assert len(w) == 13

    @pytest.mark.parametrize("method,value", [
        ("u8", 256), ("u8", -1),
        ("u32le", 2 ** 32), ("u32le", -1),
        ("u64le", 2 ** 64), ("u64le", -1),
    ])
    def test_out_of_range_values_raise(self, method, value):
        with pytest.raises(ValueError):
            getattr(BinaryWriter(), method)(value)

    def test_fixed_pads_with_zeros(self):
        w = BinaryWriter()
        w.fixed(b"ab", 4)
        assert w.to_bytes() == b"ab\x00\x00"

    def test_fixed_rejects_overflow(self):
        with pytest.raises(ValueError):
            BinaryWriter().fixed(b"abcde", 4)

    def test_raw_bytes_and_zeros(self):
        w = BinaryWriter()
        w.bytes(b"\xff")
        w.zeros(3)
        assert w.to_bytes() == b"\xff\x00\x00\x00"
