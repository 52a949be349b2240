"""Extract LBX archives to disk.

Each archive is extracted into a directory named after it. Entries are
written strictly in order, because collision-free naming depends on
what already exists in that directory.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .header import LBXEntry, LBXError
from .naming import NAME_POLICY_INDEX, unique_output_path
from .reader import SENTINEL_APPEND, LBXArchive

LBX_SUFFIX = ".lbx"

EVENT_STARTED = "started"
EVENT_ENTRY = "entry"
EVENT_FINISHED = "finished"
EVENT_FAILED = "failed"


@dataclass
class ExtractedFile:
    """An entry written to disk."""

    entry: LBXEntry
    path: Path


@dataclass
class ExtractionEvent:
    """Progress report from a batch extraction."""

    kind: str
    archive: Path
    output_dir: Optional[Path] = None
    entry_count: int = 0
    extracted: Optional[ExtractedFile] = None
    error: Optional[Exception] = None


def output_directory_for(archive_path: Path, output_root: Optional[Path] = None) -> Path:
    """Return the extraction directory for an archive.

    Defaults to a sibling directory named after the archive stem.
    """
    archive_path = Path(archive_path)
    root = archive_path.parent if output_root is None else Path(output_root)
    return root / archive_path.stem


def collect_archive_paths(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Expand directory arguments into the .lbx files they contain.

    Only the top level of a directory is searched. Other paths are kept
    as given, including ones that do not exist.
    """
    result = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            result.extend(
                sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() == LBX_SUFFIX)
            )
        else:
            result.append(path)
    return result


def write_entries(archive: LBXArchive, output_dir: Path) -> Iterator[ExtractedFile]:
    """Write every entry of a decoded archive into output_dir."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for entry in archive.iter_entries():
        output_path = unique_output_path(output_dir, entry.name)
        output_path.write_bytes(entry.data)
        yield ExtractedFile(entry=entry, path=output_path)


def extract_archive(
    archive_path: Path,
    output_root: Optional[Path] = None,
    name_policy: str = NAME_POLICY_INDEX,
    sentinel: str = SENTINEL_APPEND,
) -> Iterator[ExtractedFile]:
    """Extract a single archive.

    Yields an ExtractedFile for each written entry. Decode errors are
    raised before anything is written.
    """
    archive_path = Path(archive_path)
    archive = LBXArchive.from_file(archive_path, name_policy=name_policy, sentinel=sentinel)
    yield from write_entries(archive, output_directory_for(archive_path, output_root))


def extract_archives(
    paths: Iterable[Union[str, Path]],
    output_root: Optional[Path] = None,
    name_policy: str = NAME_POLICY_INDEX,
    sentinel: str = SENTINEL_APPEND,
) -> Iterator[ExtractionEvent]:
    """Extract archives one after another, reporting progress as events.

    A missing, unreadable or corrupt archive produces a ``failed`` event
    and extraction moves on to the next path.
    """
    for archive_path in collect_archive_paths(paths):
        if not archive_path.is_file():
            yield ExtractionEvent(
                kind=EVENT_FAILED,
                archive=archive_path,
                error=FileNotFoundError(f"Cannot find file {archive_path}"),
            )
            continue

        try:
            archive = LBXArchive.from_file(archive_path, name_policy=name_policy, sentinel=sentinel)
        except (LBXError, OSError) as e:
            yield ExtractionEvent(kind=EVENT_FAILED, archive=archive_path, error=e)
            continue

        output_dir = output_directory_for(archive_path, output_root)
        yield ExtractionEvent(
            kind=EVENT_STARTED,
            archive=archive_path,
            output_dir=output_dir,
            entry_count=archive.header.entry_count,
        )

        try:
            for extracted in write_entries(archive, output_dir):
                yield ExtractionEvent(
                    kind=EVENT_ENTRY,
                    archive=archive_path,
                    output_dir=output_dir,
                    extracted=extracted,
                )
        except OSError as e:
            yield ExtractionEvent(kind=EVENT_FAILED, archive=archive_path, output_dir=output_dir, error=e)
            continue

        yield ExtractionEvent(
            kind=EVENT_FINISHED,
            archive=archive_path,
            output_dir=output_dir,
            entry_count=archive.entry_count,
        )
