"""Repository mapping file handling.

The mapping has the shape ``{"repository": {"tag": "layer id"}}``. Only
archives holding exactly one repository entry can be renamed.
"""

import json
from pathlib import Path
from typing import Any, Dict

from ..core.types import DEFAULT_TAG
from ..exceptions import SchemaError, SerializationError, WriteError

Repositories = Dict[str, Any]


def create_repositories(
    name: str, layer_id: str, tag: str = DEFAULT_TAG
) -> Repositories:
    """Build the mapping for an image tagged for the first time."""
    return {name: {tag: layer_id}}


def validate_repositories(data: Any, path: str | Path) -> Repositories:
    """Check that data is a mapping with at most one repository entry.

    Raises:
        SchemaError: If data is not an object or names several repositories
    """
    if not isinstance(data, dict):
        raise SchemaError("read repositories", path, "expected a JSON object")
    if len(data) > 1:
        raise SchemaError(
            "read repositories",
            path,
            f"expected a single repository, found {len(data)}: {sorted(data)}",
        )
    return data


def parse_repositories(content: str | bytes, path: str | Path) -> Repositories:
    """Parse and validate repository mapping content."""
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchemaError("read repositories", path, f"invalid JSON: {e}") from e
    return validate_repositories(data, path)


def read_repositories(path: str | Path) -> Repositories:
    """Read the repository mapping file at path.

    Raises:
        SchemaError: If the file cannot be read or is malformed
    """
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise SchemaError("read repositories", path, str(e)) from e
    return parse_repositories(content, path)


def rename_repository(repositories: Repositories, new_name: str) -> Repositories:
    """Re-key the single repository entry under new_name.

    The tag mapping of the entry is carried over untouched.
    """
    return {new_name: tags for tags in repositories.values()}


def serialize_repositories(repositories: Repositories, path: str | Path) -> bytes:
    """Encode the mapping as JSON bytes.

    Raises:
        SerializationError: If the mapping holds values JSON cannot encode
    """
    try:
        return json.dumps(repositories).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError("serialize repositories", path, str(e)) from e


def write_repositories(path: str | Path, data: bytes) -> None:
    """Write serialized mapping bytes to path, replacing prior content.

    Raises:
        WriteError: If the file cannot be written
    """
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise WriteError("write repositories", path, str(e)) from e
