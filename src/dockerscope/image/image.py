"""Image archive working copy and retagging."""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from ..core.lock import archive_lock
from ..core.types import WorkspaceConfig
from ..exceptions import WorkspaceError
from ..models import Layer, latest_layer, sort_by_recency
from ..tar import codec
from ..tar.tags import extract_repo_tags
from ..utils.validator import validate_source_archive
from .discovery import discover_layers
from .repositories import (
    Repositories,
    create_repositories,
    read_repositories,
    rename_repository,
    serialize_repositories,
    write_repositories,
)

logger = logging.getLogger(__name__)

WORKING_COPY_PREFIX = "dockerscope-"


class Image:
    """A Docker image archive opened for modification.

    Opening an image validates the archive and creates a private working
    directory; the archive itself is only extracted when a mutating
    operation runs. The working directory is removed by close(), or on
    leaving a ``with`` block.
    """

    def __init__(self, source_path: str | Path, config: Optional[WorkspaceConfig] = None) -> None:
        """Initialize image.

        Args:
            source_path: Path to an uncompressed image tar file
            config: Workspace settings (defaults to WorkspaceConfig())

        Raises:
            NotFoundError: If no file exists at source_path
            UnsupportedFormatError: If the archive is compressed
            WorkspaceError: If the working directory cannot be created
        """
        self.config = config or WorkspaceConfig()
        self.source_path = validate_source_archive(source_path, self.config.compressed_suffixes)
        self.layers: List[Layer] = []
        temp_root = self.config.temp_root
        try:
            self.working_copy = Path(tempfile.mkdtemp(prefix=WORKING_COPY_PREFIX, dir=temp_root))
        except OSError as e:
            raise WorkspaceError("open", temp_root, f"cannot create working copy: {e}") from e
        self._closed = False

    def __enter__(self) -> "Image":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Image(source_path={str(self.source_path)!r}, working_copy={str(self.working_copy)!r})"

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def repositories_path(self) -> Path:
        """Location of the repository mapping inside the working copy."""
        return self.working_copy / self.config.repositories_filename

    def close(self) -> None:
        """Remove the working copy and forget discovered layers."""
        shutil.rmtree(self.working_copy, ignore_errors=True)
        self.layers = []
        self._closed = True

    def read_layers(self) -> List[Layer]:
        """Rescan the working copy for layers, replacing self.layers.

        Raises:
            SchemaError: If any layer config is malformed
        """
        self.layers = discover_layers(self.working_copy, self.config.layer_config_filename)
        logger.debug("Found %d layers in %s", len(self.layers), self.working_copy)
        return self.layers

    def latest_layer(self) -> Layer:
        """Return the most recently created layer, sorting self.layers.

        Raises:
            NoLayersError: If no layers have been discovered
        """
        self.layers = sort_by_recency(self.layers)
        return latest_layer(self.layers, self.source_path)

    def repo_tags(self) -> List[str]:
        """Return the ``name:tag`` entries recorded in the source archive."""
        return extract_repo_tags(self.source_path, self.config.repositories_filename)

    def set_name(self, new_name: str) -> Repositories:
        """Rename the image in place.

        The source archive is locked, extracted into the working copy, its
        repository mapping rewritten under new_name and the archive rebuilt
        over the source path. An archive without a mapping gets a new one
        tagging its most recent layer.

        Args:
            new_name: New repository name

        Returns:
            The repository mapping written to the archive

        Raises:
            ValueError: If new_name is empty
            WorkspaceError: If the image has been closed
            LockError: If the archive lock cannot be acquired
            ExtractionError: If the archive cannot be extracted
            SchemaError: If layer configs or the mapping are malformed
            NoLayersError: If a first tag is needed and there are no layers
            SerializationError: If the mapping cannot be encoded
            WriteError: If the mapping cannot be written
            ArchiveError: If the archive cannot be rebuilt
        """
        if not new_name:
            raise ValueError("new_name must be a non-empty string")
        if self._closed:
            raise WorkspaceError("set name", self.working_copy, "image has been closed")

        with archive_lock(self.source_path, self.config.lock_timeout):
            codec.clear_directory(self.working_copy)
            codec.extract(self.source_path, self.working_copy)

            repositories_path = self.repositories_path
            existing = None
            if repositories_path.exists():
                existing = read_repositories(repositories_path)

            if existing:
                logger.debug("Renaming existing repository in %s", repositories_path)
                repositories = rename_repository(existing, new_name)
            else:
                logger.debug("No repository entry in %s, tagging latest layer", self.source_path)
                self.read_layers()
                layer = self.latest_layer()
                repositories = create_repositories(new_name, layer.id, self.config.default_tag)

            data = serialize_repositories(repositories, repositories_path)
            write_repositories(repositories_path, data)
            codec.archive(self.working_copy, self.source_path)

        logger.info("Renamed image %s to %s", self.source_path, new_name)
        return repositories


def open_image(source_path: str | Path, config: Optional[WorkspaceConfig] = None) -> Image:
    """Open an image archive for modification.

    Args:
        source_path: Path to an uncompressed image tar file
        config: Workspace settings

    Returns:
        Image bound to source_path and a fresh working directory

    Raises:
        NotFoundError: If no file exists at source_path
        UnsupportedFormatError: If the archive is compressed
        WorkspaceError: If the working directory cannot be created
    """
    return Image(source_path, config)
