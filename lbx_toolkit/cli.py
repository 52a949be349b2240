"""LBX Toolkit CLI."""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__

legacy_offsets_option = click.option(
    "--legacy-offsets",
    is_flag=True,
    help="Treat the last offset-table slot as the archive end, dropping the "
    "last entry (matches the original SimTex extractor)",
)

keep_names_option = click.option(
    "--keep-names",
    is_flag=True,
    help="Name files after their stored LBX name when it is filename-safe, "
    "instead of always using the entry index",
)


def decode_options(keep_names: bool, legacy_offsets: bool) -> dict:
    """Map CLI flags onto LBXArchive keyword arguments."""
    from .lbx.naming import NAME_POLICY_INDEX, NAME_POLICY_KEEP
    from .lbx.reader import SENTINEL_APPEND, SENTINEL_OVERWRITE

    return {
        "name_policy": NAME_POLICY_KEEP if keep_names else NAME_POLICY_INDEX,
        "sentinel": SENTINEL_OVERWRITE if legacy_offsets else SENTINEL_APPEND,
    }


@click.group()
@click.version_option(version=__version__)
def main():
    """LBX Toolkit - Extract files from SimTex LBX game archives.

    Each archive is extracted into a directory named after it, one file
    per entry.
    """
    pass


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output root (default: next to each archive)",
)
@keep_names_option
@legacy_offsets_option
@click.option("-q", "--quiet", is_flag=True, help="Do not list extracted entries")
def extract(
    paths: Tuple[Path, ...],
    output: Optional[Path],
    keep_names: bool,
    legacy_offsets: bool,
    quiet: bool,
):
    """Extract one or more LBX archives.

    PATHS may be archive files or directories; a directory is searched
    (non-recursively) for *.lbx files. Missing or invalid archives are
    reported and skipped.
    """
    from .lbx.extractor import (
        EVENT_ENTRY,
        EVENT_FAILED,
        EVENT_FINISHED,
        EVENT_STARTED,
        extract_archives,
    )

    failures = 0
    for event in extract_archives(paths, output, **decode_options(keep_names, legacy_offsets)):
        name = event.archive.name

        if event.kind == EVENT_FAILED:
            failures += 1
            if isinstance(event.error, FileNotFoundError):
                click.echo(f"CANNOT FIND FILE {event.archive}", err=True)
            else:
                click.echo(f"Error: {event.error}", err=True)

        elif event.kind == EVENT_STARTED:
            click.echo(f"{name} is a valid file with {event.entry_count} records")
            click.echo(f"Extracting from {name}...")

        elif event.kind == EVENT_ENTRY and not quiet:
            entry = event.extracted.entry
            click.echo(
                f"    {event.output_dir}/{entry.name} - {entry.description}  -  {entry.length} bytes"
            )

        elif event.kind == EVENT_FINISHED:
            click.echo(f"{event.entry_count} file(s) extracted.")

    click.echo()
    if failures:
        sys.exit(1)


@main.command(name="list")
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@keep_names_option
@legacy_offsets_option
def list_entries(archive: Path, keep_names: bool, legacy_offsets: bool):
    """List the entries of an LBX archive without extracting.

    Trailing NUL padding is stripped from names and descriptions before
    they are checked, so padded descriptions are shown as stored. The
    original SimTex extractor reported most of them as "Unknown".
    """
    from .lbx import LBXArchive, LBXError

    try:
        lbx = LBXArchive.from_file(archive, **decode_options(keep_names, legacy_offsets))
    except (LBXError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Archive: {archive}")
    click.echo(f"Records: {lbx.header.entry_count}")
    click.echo(f"Info:    0x{lbx.header.info:04X}")
    click.echo()
    click.echo(f"{'#':>5}  {'offset':>10}  {'length':>10}  {'name':<8}  description")
    for entry in lbx.entries:
        raw_name = entry.raw_name if entry.named else "-"
        click.echo(
            f"{entry.index:>5}  0x{entry.offset:08X}  {entry.length:>10}  {raw_name:<8}  {entry.description}"
        )


if __name__ == "__main__":
    main()
