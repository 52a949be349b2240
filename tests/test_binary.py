"""Tests for binary utilities."""

import pytest

from lbx_toolkit.utils.binary import BinaryReader


class TestBinaryReader:
    """Tests for BinaryReader class."""

    def test_read_u16_little_endian(self):
        reader = BinaryReader(b"\x34\x12")
        assert reader.read_u16() == 0x1234

    def test_read_u32_little_endian(self):
        reader = BinaryReader(b"\x78\x56\x34\x12")
        assert reader.read_u32() == 0x12345678

    def test_read_fixed_string(self):
        reader = BinaryReader(b"test\x00\x00\x00\x00")
        assert reader.read_fixed_string(8) == "test"
        assert reader.tell() == 8

    def test_read_fixed_string_keeps_inner_nulls(self):
        reader = BinaryReader(b"ab\x00cd\x00\x00\x00")
        assert reader.read_fixed_string(8) == "ab\x00cd"

    def test_read_fixed_string_non_ascii(self):
        reader = BinaryReader(b"caf\xe9")
        assert reader.read_fixed_string(4) == "caf?"

    def test_seek_and_tell(self):
        reader = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        assert reader.tell() == 0
        reader.seek(2)
        assert reader.tell() == 2
        assert reader.read_u16() == 0x0302

    def test_eof_error(self):
        reader = BinaryReader(b"\x00\x01")
        with pytest.raises(EOFError):
            reader.read_bytes(10)

    def test_eof_after_seek_past_end(self):
        reader = BinaryReader(b"\x00\x01")
        reader.seek(512)
        with pytest.raises(EOFError):
            reader.read_u16()
