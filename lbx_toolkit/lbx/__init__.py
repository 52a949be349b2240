"""SimTex LBX archive support."""

from .extractor import (
    ExtractedFile,
    ExtractionEvent,
    collect_archive_paths,
    extract_archive,
    extract_archives,
    output_directory_for,
)
from .header import (
    LBX_MAGIC,
    EmptyArchiveError,
    InvalidMagicError,
    LBXEntry,
    LBXError,
    LBXHeader,
    MalformedOffsetTableError,
    TruncatedArchiveError,
)
from .naming import sanitize_description, sanitize_name, unique_output_path
from .reader import LBXArchive, decode

__all__ = [
    "LBX_MAGIC",
    "LBXArchive",
    "LBXEntry",
    "LBXHeader",
    "LBXError",
    "EmptyArchiveError",
    "InvalidMagicError",
    "MalformedOffsetTableError",
    "TruncatedArchiveError",
    "ExtractedFile",
    "ExtractionEvent",
    "collect_archive_paths",
    "decode",
    "extract_archive",
    "extract_archives",
    "output_directory_for",
    "sanitize_description",
    "sanitize_name",
    "unique_output_path",
]
