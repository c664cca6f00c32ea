"""Async wrapper around Image for use from event loops."""

import asyncio
from functools import partial
from pathlib import Path
from typing import List, Optional

import aiofiles

from .core.types import WorkspaceConfig
from .exceptions import SchemaError
from .image import Image
from .image.repositories import Repositories, parse_repositories
from .models import Layer


class AsyncImage:
    """Async image archive handle.

    Blocking archive work runs in the default executor. The archive lock
    still serializes renames across processes.
    """

    def __init__(self, source_path: str | Path, config: Optional[WorkspaceConfig] = None) -> None:
        """Initialize async image.

        Args:
            source_path: Path to an uncompressed image tar file
            config: Workspace settings
        """
        self.source_path = Path(source_path)
        self.config = config
        self._image: Optional[Image] = None

    async def __aenter__(self) -> "AsyncImage":
        """Enter async context manager."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    @property
    def image(self) -> Image:
        if self._image is None:
            raise RuntimeError("AsyncImage is not open")
        return self._image

    async def open(self) -> None:
        """Validate the archive and create the working copy."""
        if self._image is None:
            loop = asyncio.get_event_loop()
            self._image = await loop.run_in_executor(
                None, Image, self.source_path, self.config
            )

    async def close(self) -> None:
        """Remove the working copy."""
        if self._image:
            loop = asyncio.get_event_loop()
            await loop.run_in_executor(None, self._image.close)
            self._image = None

    async def set_name(self, new_name: str) -> Repositories:
        """Rename the image; see Image.set_name."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            None, partial(self.image.set_name, new_name)
        )

    async def read_layers(self) -> List[Layer]:
        """Rescan the working copy for layers; see Image.read_layers."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.image.read_layers)

    async def read_repositories(self) -> Repositories:
        """Read the repository mapping from the working copy.

        Returns:
            Repository mapping, or an empty dict if the working copy has none

        Raises:
            SchemaError: If the mapping is malformed
        """
        path = self.image.repositories_path
        try:
            async with aiofiles.open(path, "rb") as f:
                content = await f.read()
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise SchemaError("read repositories", path, str(e)) from e
        return parse_repositories(content, path)
