"""Build synthetic LBX archives for tests."""

import struct
from typing import List, Optional, Sequence, Tuple, Union

LBX_MAGIC = b"\xAD\xFE\x00\x00"

Text = Union[str, bytes]


def _field(value: Text, length: int) -> bytes:
    if isinstance(value, str):
        value = value.encode("ascii")
    return value.ljust(length, b"\x00")[:length]


def name_record(name: Text, description: Text = "") -> bytes:
    """Create a 32-byte name/description record."""
    return _field(name, 8) + b"\x00" + _field(description, 22) + b"\x00"


def build_lbx(
    payloads: Sequence[bytes],
    names: Optional[List[Tuple[Text, Text]]] = None,
    entry_count: Optional[int] = None,
    magic: bytes = LBX_MAGIC,
    info: int = 0,
    offsets: Optional[List[int]] = None,
) -> bytes:
    """Create an LBX archive holding payloads back to back.

    Payloads start right after the name records (at 512 when there are
    none). ``offsets`` overrides the computed offset table.
    """
    names = names or []
    count = len(payloads) if entry_count is None else entry_count

    data_start = 512 + 32 * len(names)
    if offsets is None:
        offsets = []
        position = data_start
        for payload in payloads:
            offsets.append(position)
            position += len(payload)

    data = bytearray(data_start)
    header = struct.pack("<H4sH", count, magic, info)
    table = b"".join(struct.pack("<I", offset) for offset in offsets)
    data[0 : len(header) + len(table)] = header + table

    for i, (name, description) in enumerate(names):
        data[512 + i * 32 : 512 + (i + 1) * 32] = name_record(name, description)

    for payload in payloads:
        data += payload
    return bytes(data)
