"""Binary reading utilities for little-endian archive data."""

import struct
from io import BytesIO
from typing import BinaryIO, Union


class BinaryReader:
    """Helper for reading little-endian binary data (LBX format)."""

    def __init__(self, data: Union[bytes, bytearray, memoryview, BinaryIO]):
        if isinstance(data, (bytes, bytearray, memoryview)):
            self._stream = BytesIO(data)
        else:
            self._stream = data

    def tell(self) -> int:
        return self._stream.tell()

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._stream.seek(offset, whence)

    def read_bytes(self, size: int) -> bytes:
        data = self._stream.read(size)
        if len(data) < size:
            raise EOFError(f"Expected {size} bytes at offset {self.tell() - len(data)}, got {len(data)}")
        return data

    def read_u16(self) -> int:
        return struct.unpack("<H", self.read_bytes(2))[0]

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read_bytes(4))[0]

    def read_fixed_string(self, length: int, encoding: str = "ascii") -> str:
        """Read a fixed-length string, stripping trailing null padding.

        Only trailing padding is removed; embedded nulls are kept.
        Undecodable bytes become ``?``.
        """
        data = self.read_bytes(length).rstrip(b"\x00")
        return data.decode(encoding, errors="replace").replace("\ufffd", "?")
