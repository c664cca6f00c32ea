"""Source archive validation for image archives."""

from pathlib import Path

from ..core.types import COMPRESSED_SUFFIXES
from ..exceptions import NotFoundError, UnsupportedFormatError


def is_path_exists(path: Path) -> bool:
    """Check if file path exists."""
    return path.exists()


def is_compressed_path(path: Path, suffixes: tuple[str, ...] = COMPRESSED_SUFFIXES) -> bool:
    """Check if the path's extension names a compressed format."""
    return path.suffix.lower() in suffixes


def validate_source_archive(
    path: str | Path, suffixes: tuple[str, ...] = COMPRESSED_SUFFIXES
) -> Path:
    """Check that an image archive can be opened.

    Args:
        path: Archive path
        suffixes: Extensions rejected as compressed

    Returns:
        The archive path as a Path

    Raises:
        NotFoundError: If nothing exists at path
        UnsupportedFormatError: If the archive is compressed
    """
    path = Path(path)

    if not is_path_exists(path):
        raise NotFoundError("open", path, "no image found")

    if is_compressed_path(path, suffixes):
        raise UnsupportedFormatError(
            "open", path, "image must be an uncompressed tar file"
        )

    return path
