"""Tar archive encode/decode for image working copies."""

import logging
import os
import shutil
import tarfile
import tempfile
from pathlib import Path
from typing import Iterator

from ..exceptions import ArchiveError, ExtractionError

logger = logging.getLogger(__name__)


def clear_directory(directory: Path) -> None:
    """Remove everything inside directory, keeping the directory itself."""
    for entry in directory.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def extract(archive_path: str | Path, destination: str | Path) -> None:
    """Extract an uncompressed tar archive into destination.

    Args:
        archive_path: Tar file to read
        destination: Existing directory to populate

    Raises:
        ExtractionError: If the archive cannot be read or extracted
    """
    try:
        with tarfile.open(archive_path, "r:") as tar:
            tar.extractall(path=destination, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise ExtractionError("extract", archive_path, str(e)) from e

    logger.debug("Extracted %s into %s", archive_path, destination)


def iter_archive_members(
    source_dir: Path, directory: Path | None = None
) -> Iterator[tuple[Path, str]]:
    """Yield (path, arcname) for every entry under source_dir, depth first in sorted order."""
    for path in sorted((directory or source_dir).iterdir()):
        yield path, path.relative_to(source_dir).as_posix()
        if path.is_dir() and not path.is_symlink():
            yield from iter_archive_members(source_dir, path)


def archive(source_dir: str | Path, archive_path: str | Path) -> None:
    """Write the contents of source_dir to archive_path as an uncompressed tar.

    Members are added in sorted order with paths relative to source_dir, so
    the same tree always produces the same member list. The archive is built
    in a temporary file beside archive_path and moved into place only once
    complete; an existing archive is replaced.

    Args:
        source_dir: Directory whose contents become the archive
        archive_path: Destination tar file

    Raises:
        ArchiveError: If the archive cannot be written
    """
    source_dir = Path(source_dir)
    archive_path = Path(archive_path)

    if not source_dir.is_dir():
        raise ArchiveError("archive", archive_path, f"source {source_dir} is not a directory")

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{archive_path.name}.", suffix=".tmp", dir=archive_path.parent
        )
        os.close(fd)
    except OSError as e:
        raise ArchiveError("archive", archive_path, str(e)) from e

    try:
        with tarfile.open(tmp_name, "w") as tar:
            for path, arcname in iter_archive_members(source_dir):
                tar.add(path, arcname=arcname, recursive=False)
        if archive_path.exists():
            shutil.copymode(archive_path, tmp_name)
        os.replace(tmp_name, archive_path)
    except (tarfile.TarError, OSError) as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise ArchiveError("archive", archive_path, str(e)) from e

    logger.debug("Archived %s into %s", source_dir, archive_path)
