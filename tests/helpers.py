"""Test helpers for building synthetic image archives."""

import json
import tarfile
from pathlib import Path


def add_bytes(tar: tarfile.TarFile, name: str, content: bytes) -> None:
    """Add an in-memory file to an open tar."""
    info = tarfile.TarInfo(name)
    info.size = len(content)
    tar.addfile(info, fileobj=tarfile.io.BytesIO(content))


def add_directory(tar: tarfile.TarFile, name: str) -> None:
    """Add a directory entry to an open tar."""
    info = tarfile.TarInfo(name)
    info.type = tarfile.DIRTYPE
    info.mode = 0o755
    tar.addfile(info)


def create_image_tar(tar_path, layers=None, repositories=None, extra_files=None):
    """Create a docker-save style tar with one directory per layer.

    Args:
        tar_path: Where to write the archive
        layers: Mapping of layer id to `created` value (or full config dict)
        repositories: Optional repositories mapping, written as-is if str/bytes
        extra_files: Optional mapping of member name to bytes

    Returns:
        Path to the archive
    """
    tar_path = Path(tar_path)

    with tarfile.open(tar_path, "w") as tar:
        for layer_id, created in (layers or {}).items():
            config = created if isinstance(created, dict) else {"id": layer_id, "created": created}
            add_directory(tar, layer_id)
            add_bytes(tar, f"{layer_id}/json", json.dumps(config).encode("utf-8"))
            add_bytes(tar, f"{layer_id}/VERSION", b"1.0")
            add_bytes(tar, f"{layer_id}/layer.tar", b"dummy layer data")

        if repositories is not None:
            if isinstance(repositories, str):
                repositories = repositories.encode("utf-8")
            if not isinstance(repositories, bytes):
                repositories = json.dumps(repositories).encode("utf-8")
            add_bytes(tar, "repositories", repositories)

        for name, content in (extra_files or {}).items():
            add_bytes(tar, name, content)

    return tar_path


def read_member(tar_path, name: str) -> bytes | None:
    """Return the content of a tar member, or None if absent."""
    with tarfile.open(tar_path, "r") as tar:
        try:
            member = tar.extractfile(name)
        except KeyError:
            return None
        return member.read() if member else None


def read_member_json(tar_path, name: str):
    """Return the parsed JSON content of a tar member, or None if absent."""
    content = read_member(tar_path, name)
    return json.loads(content) if content is not None else None
