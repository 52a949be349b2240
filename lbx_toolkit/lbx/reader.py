"""LBX archive decoder.

Layout (little-endian):

- bytes 0-2: entry count (u16)
- bytes 2-6: magic AD FE 00 00
- bytes 6-8: info (u16, unused)
- bytes 8-: one u32 offset per entry
- byte 512-: 32-byte name/description records, for a prefix of entries only
- remaining bytes: entry payloads, located by the offset table
"""

from dataclasses import replace
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..utils.binary import BinaryReader
from .header import (
    DESCRIPTION_LENGTH,
    HEADER_SIZE,
    LBX_MAGIC,
    NAME_LENGTH,
    NAME_RECORD_SIZE,
    NAME_REGION_OFFSET,
    UNNAMED,
    EmptyArchiveError,
    InvalidMagicError,
    LBXEntry,
    LBXHeader,
    MalformedOffsetTableError,
    TruncatedArchiveError,
)
from .naming import NAME_POLICIES, NAME_POLICY_INDEX, sanitize_description, sanitize_name

# The archive end is appended as an extra boundary after the last offset.
SENTINEL_APPEND = "append"
# The archive end replaces the last declared offset; the last entry is dropped.
SENTINEL_OVERWRITE = "overwrite"
SENTINEL_POLICIES = (SENTINEL_APPEND, SENTINEL_OVERWRITE)


class LBXArchive:
    """Parser for SimTex LBX archives.

    The whole archive is validated on construction; entry payloads are
    sliced out on demand.
    """

    def __init__(
        self,
        data: Union[bytes, Path],
        name_policy: str = NAME_POLICY_INDEX,
        sentinel: str = SENTINEL_APPEND,
        source: Optional[Union[str, Path]] = None,
    ):
        if name_policy not in NAME_POLICIES:
            raise ValueError(f"Unknown name policy: {name_policy!r}")
        if sentinel not in SENTINEL_POLICIES:
            raise ValueError(f"Unknown sentinel policy: {sentinel!r}")
        if isinstance(data, Path):
            source = source or data
            data = data.read_bytes()
        self._data = bytes(data)
        self._source = source
        self._name_policy = name_policy
        self._sentinel = sentinel
        self._header: Optional[LBXHeader] = None
        self._boundaries: List[int] = []
        self._entries: List[LBXEntry] = []
        self._parse()

    def _parse(self) -> None:
        """Parse header, offset table, name region and entry ranges."""
        # A zero entry count is reported as such even when the rest of the
        # header is missing.
        if len(self._data) >= 2 and self._data[:2] == b"\x00\x00":
            raise EmptyArchiveError("archive contains no files", self._source)
        if len(self._data) < HEADER_SIZE:
            raise TruncatedArchiveError(
                f"LBX data too small: {len(self._data)} bytes", self._source
            )

        reader = BinaryReader(self._data)
        try:
            self._parse_header(reader)
            self._parse_offsets(reader)
            names = self._parse_names(reader)
        except EOFError as e:
            raise TruncatedArchiveError(str(e), self._source) from e

        self._build_entries(names)

    def _parse_header(self, reader: BinaryReader) -> None:
        entry_count = reader.read_u16()
        magic = reader.read_bytes(4)
        info = reader.read_u16()

        if entry_count < 1:
            raise EmptyArchiveError("archive contains no files", self._source)
        if magic != LBX_MAGIC:
            raise InvalidMagicError(
                f"not a SimTex LBX file (magic {magic.hex(' ')}, expected {LBX_MAGIC.hex(' ')})",
                self._source,
            )

        self._header = LBXHeader(entry_count=entry_count, magic=magic, info=info)

    def _parse_offsets(self, reader: BinaryReader) -> None:
        """Read the offset table and close it with the archive length."""
        offsets = [reader.read_u32() for _ in range(self._header.entry_count)]

        if self._sentinel == SENTINEL_APPEND:
            offsets.append(len(self._data))
        else:
            offsets[-1] = len(self._data)

        self._boundaries = offsets

    def _parse_names(self, reader: BinaryReader) -> List[tuple]:
        """Read (name, description) records until they would overlap data.

        Not every entry has a record; once record i would end past entry
        i's own offset, it and every later entry are unnamed.
        """
        reader.seek(NAME_REGION_OFFSET)
        names = []
        end_of_names = False

        for i in range(self._header.entry_count):
            if NAME_REGION_OFFSET + (i + 1) * NAME_RECORD_SIZE > self._boundaries[i]:
                end_of_names = True

            if end_of_names:
                names.append((UNNAMED, "", False))
                continue

            name = reader.read_fixed_string(NAME_LENGTH)
            reader.read_bytes(1)  # terminator
            description = reader.read_fixed_string(DESCRIPTION_LENGTH)
            reader.read_bytes(1)  # terminator
            names.append((name, description, True))

        return names

    def _build_entries(self, names: List[tuple]) -> None:
        for i in range(len(self._boundaries) - 1):
            start = self._boundaries[i]
            end = self._boundaries[i + 1]

            if end < start:
                raise MalformedOffsetTableError(
                    f"entry {i} ends at 0x{end:X} before it starts at 0x{start:X}",
                    self._source,
                )
            if end > len(self._data):
                raise TruncatedArchiveError(
                    f"entry {i} spans 0x{start:X}-0x{end:X} but archive is {len(self._data)} bytes",
                    self._source,
                )

            raw_name, raw_description, named = names[i]
            self._entries.append(
                LBXEntry(
                    index=i,
                    offset=start,
                    end=end,
                    raw_name=raw_name,
                    raw_description=raw_description,
                    name=sanitize_name(raw_name, i, self._name_policy),
                    description=sanitize_description(raw_description),
                    named=named,
                )
            )

    @property
    def header(self) -> LBXHeader:
        return self._header

    @property
    def offsets(self) -> List[int]:
        """Entry boundaries, including the closing archive length."""
        return list(self._boundaries)

    @property
    def entries(self) -> List[LBXEntry]:
        """Entry table without payloads."""
        return self._entries

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def read_entry(self, index: int) -> bytes:
        """Return the raw payload of entry ``index``."""
        entry = self._entries[index]
        return self._data[entry.offset : entry.end]

    def iter_entries(self) -> Iterator[LBXEntry]:
        """Yield entries in index order with their payloads attached."""
        for entry in self._entries:
            yield replace(entry, data=self.read_entry(entry.index))

    @classmethod
    def from_file(cls, path: Path, **kwargs) -> "LBXArchive":
        """Load an LBX archive from disk."""
        return cls(Path(path), **kwargs)

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> "LBXArchive":
        """Load an LBX archive from bytes."""
        return cls(data, **kwargs)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LBXEntry]:
        return self.iter_entries()

    def __repr__(self) -> str:
        return f"LBXArchive(entries={len(self._entries)}, size={len(self._data)})"


def decode(
    data: bytes,
    name_policy: str = NAME_POLICY_INDEX,
    sentinel: str = SENTINEL_APPEND,
    source: Optional[Union[str, Path]] = None,
) -> Iterator[LBXEntry]:
    """Decode an LBX archive into its entries.

    Raises an LBXError subclass immediately if the archive is invalid;
    the returned iterator itself never fails.
    """
    return LBXArchive(data, name_policy=name_policy, sentinel=sentinel, source=source).iter_entries()
