"""dockerscope - inspect and retag Docker image tar archives in place."""

__version__ = "0.1.0"

from .aio import AsyncImage
from .core.types import WorkspaceConfig
from .exceptions import (
    ArchiveError,
    DockerScopeError,
    ExtractionError,
    LockError,
    NoLayersError,
    NotFoundError,
    SchemaError,
    SerializationError,
    TarReadError,
    UnsupportedFormatError,
    WorkspaceError,
    WriteError,
)
from .image import Image, discover_layers, open_image
from .models import Layer, latest_layer, sort_by_recency
from .tar.tags import extract_repo_tags, get_primary_tag, parse_repository_tag

__all__ = [
    "AsyncImage",
    "Image",
    "Layer",
    "WorkspaceConfig",
    "discover_layers",
    "extract_repo_tags",
    "get_primary_tag",
    "latest_layer",
    "open_image",
    "parse_repository_tag",
    "sort_by_recency",
    "DockerScopeError",
    "NotFoundError",
    "UnsupportedFormatError",
    "LockError",
    "ExtractionError",
    "ArchiveError",
    "SchemaError",
    "NoLayersError",
    "SerializationError",
    "WriteError",
    "TarReadError",
    "WorkspaceError",
]
