"""LBX header, entry structures and error types."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

# LBX magic bytes (173, 254, 0, 0)
LBX_MAGIC = b"\xAD\xFE\x00\x00"

HEADER_SIZE = 8

# Name/description records
NAME_REGION_OFFSET = 512
NAME_LENGTH = 8
DESCRIPTION_LENGTH = 22
NAME_RECORD_SIZE = NAME_LENGTH + 1 + DESCRIPTION_LENGTH + 1  # 32 bytes

UNNAMED = "Unnamed "
UNKNOWN_DESCRIPTION = "Unknown"


class LBXError(ValueError):
    """Base class for LBX decode failures.

    ``source`` identifies the archive (usually its path) for reporting.
    """

    def __init__(self, message: str, source: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source is not None:
            return f"{Path(self.source).name}: {self.message}"
        return self.message


class EmptyArchiveError(LBXError):
    """Header declares zero entries."""


class InvalidMagicError(LBXError):
    """Bytes 2-6 are not the LBX magic."""


class MalformedOffsetTableError(LBXError):
    """Offsets decrease, giving an entry a negative length."""


class TruncatedArchiveError(LBXError):
    """A header, table, record or entry reaches past the end of the data."""


@dataclass
class LBXHeader:
    """LBX archive header (8 bytes)."""

    entry_count: int  # 2 bytes
    magic: bytes  # 4 bytes: AD FE 00 00
    info: int  # 2 bytes: reserved, not validated

    @property
    def is_valid(self) -> bool:
        return self.magic == LBX_MAGIC and self.entry_count > 0


@dataclass
class LBXEntry:
    """A single sub-file inside an LBX archive."""

    index: int
    offset: int  # start of data
    end: int  # exclusive
    raw_name: str  # as stored, or UNNAMED past the end of the name region
    raw_description: str
    name: str  # output base name
    description: str  # sanitized label
    named: bool = True  # False once the name region has run out
    data: bytes = b""

    @property
    def length(self) -> int:
        return self.end - self.offset
