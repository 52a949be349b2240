"""Output filename policy for extracted LBX entries.

LBX names are 8-character DOS-era labels and frequently repeat within a
single archive, so every extracted file gets a collision-free path.
"""

from pathlib import Path
from typing import Union

from .header import UNKNOWN_DESCRIPTION

# Fixed, host-independent set so output names are portable.
INVALID_FILENAME_CHARS = frozenset(
    [chr(c) for c in range(32)] + ['"', "<", ">", "|", ":", "*", "?", "\\", "/"]
)

NAME_POLICY_INDEX = "index"
NAME_POLICY_KEEP = "keep"
NAME_POLICIES = (NAME_POLICY_INDEX, NAME_POLICY_KEEP)


def is_valid_filename(name: str) -> bool:
    """Return True if no character of name is illegal in a filename."""
    return not any(ch in INVALID_FILENAME_CHARS for ch in name)


def sanitize_name(raw_name: str, index: int, policy: str = NAME_POLICY_INDEX) -> str:
    """Derive the output base name for entry ``index``.

    The ``index`` policy always yields the decimal index, matching the
    names produced by the original SimTex extractor. The ``keep`` policy
    keeps a trimmed name when it is non-empty and valid, and only falls
    back to the index otherwise.
    """
    if policy not in NAME_POLICIES:
        raise ValueError(f"Unknown name policy: {policy!r}")

    name = raw_name.strip()
    if not is_valid_filename(name):
        name = ""

    if policy == NAME_POLICY_INDEX or not name:
        return str(index)
    return name


def sanitize_description(raw_description: str) -> str:
    """Return the description, or "Unknown" if it is not filename-safe.

    Expects trailing NUL padding to be stripped already; the original
    SimTex extractor kept it and so labelled most descriptions "Unknown".
    """
    if not is_valid_filename(raw_description):
        return UNKNOWN_DESCRIPTION
    return raw_description


def unique_output_path(directory: Union[str, Path], base_name: str) -> Path:
    """Return the first of base, base-1, base-2, ... not present on disk.

    Not safe against concurrent writers to the same directory.
    """
    directory = Path(directory)
    candidate = directory / base_name
    suffix = 0
    while candidate.exists():
        suffix += 1
        candidate = directory / f"{base_name}-{suffix}"
    return candidate
