"""Layer discovery in an extracted image archive."""

import json
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

from ..core.types import LAYER_CONFIG_FILENAME
from ..exceptions import SchemaError
from ..models import Layer

# RFC 3339 date-time: full date, full time with seconds, mandatory offset
RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$", re.ASCII
)


def iter_layer_config_paths(
    root: str | Path, filename: str = LAYER_CONFIG_FILENAME
) -> Iterator[Path]:
    """Yield every layer config file under root.

    The tree is walked lazily, directories in sorted order, without following
    symlinks. Only regular files named filename are yielded.

    Args:
        root: Top of the extracted archive
        filename: Name of the per-layer config file
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        if filename in filenames:
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def parse_created_timestamp(value: Any, path: str | Path) -> datetime:
    """Parse an RFC 3339 `created` value into an aware datetime."""
    if not isinstance(value, str):
        raise SchemaError(
            "read layer", path, f"'created' must be a string, got {type(value).__name__}"
        )

    # Docker uses RFC3339 format
    if not RFC3339_PATTERN.fullmatch(value):
        raise SchemaError("read layer", path, f"'created' timestamp {value!r} is not RFC 3339")

    normalized = value[:10] + "T" + value[11:]
    if normalized[-1] in ("Z", "z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        created = datetime.fromisoformat(normalized)
    except ValueError as e:
        raise SchemaError("read layer", path, f"invalid 'created' timestamp {value!r}") from e

    return created


def parse_layer_config(path: str | Path) -> Layer:
    """Build a Layer from its config file.

    The layer id is the name of the directory containing the file.

    Raises:
        SchemaError: If the file is not a JSON object with a valid `created`
    """
    path = Path(path)
    try:
        config = json.loads(path.read_bytes())
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchemaError("read layer", path, str(e)) from e

    if not isinstance(config, dict):
        raise SchemaError("read layer", path, "layer config must be a JSON object")
    if "created" not in config:
        raise SchemaError("read layer", path, "missing 'created' field")

    return Layer(id=path.parent.name, created=parse_created_timestamp(config["created"], path))


def discover_layers(
    root: str | Path, filename: str = LAYER_CONFIG_FILENAME
) -> list[Layer]:
    """Parse every layer config under root.

    A single malformed config aborts discovery.

    Raises:
        SchemaError: If any layer config is malformed
    """
    return [parse_layer_config(path) for path in iter_layer_config_paths(root, filename)]
