"""Configuration types for image archive operations."""

import tempfile
from dataclasses import dataclass
from pathlib import Path

LAYER_CONFIG_FILENAME = "json"
REPOSITORIES_FILENAME = "repositories"
DEFAULT_TAG = "latest"
COMPRESSED_SUFFIXES = (".gz", ".tgz", ".bz2", ".xz", ".zst")


@dataclass(frozen=True)
class WorkspaceConfig:
    """Settings shared by every Image opened with this config.

    Attributes:
        working_directory: Parent directory for per-image working copies
            (None uses the system temp directory)
        lock_timeout: Seconds to wait for the archive lock, -1 waits forever
        layer_config_filename: Name of the per-layer config file
        repositories_filename: Name of the top-level repository mapping file
        default_tag: Tag created when an image is tagged for the first time
        compressed_suffixes: Archive suffixes rejected as compressed
    """

    working_directory: Path | None = None
    lock_timeout: float = -1
    layer_config_filename: str = LAYER_CONFIG_FILENAME
    repositories_filename: str = REPOSITORIES_FILENAME
    default_tag: str = DEFAULT_TAG
    compressed_suffixes: tuple[str, ...] = COMPRESSED_SUFFIXES

    @property
    def temp_root(self) -> Path:
        """Directory under which working copies are created."""
        if self.working_directory is None:
            return Path(tempfile.gettempdir())
        return Path(self.working_directory)
