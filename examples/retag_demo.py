"""Demonstration of retagging a Docker image archive in place."""

import json
import logging
import sys
import tarfile
import tempfile
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, "src")

from dockerscope import DockerScopeError, extract_repo_tags, open_image

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def add_file(tar: tarfile.TarFile, name: str, content: bytes) -> None:
    info = tarfile.TarInfo(name)
    info.size = len(content)
    tar.addfile(info, fileobj=tarfile.io.BytesIO(content))


def create_legacy_tar(directory: Path) -> Path:
    """Create an untagged docker-save style tar with two layers."""
    tar_path = directory / "demo.tar"
    layers = {
        "5f70bf18a0860070": "2020-01-01T00:00:00Z",
        "a3ed95caeb02ffe6": "2020-06-01T00:00:00Z",
    }

    with tarfile.open(tar_path, "w") as tar:
        for layer_id, created in layers.items():
            config = {"id": layer_id, "created": created}
            add_file(tar, f"{layer_id}/json", json.dumps(config).encode("utf-8"))
            add_file(tar, f"{layer_id}/VERSION", b"1.0")
            add_file(tar, f"{layer_id}/layer.tar", b"dummy layer data")

    return tar_path


def main():
    """Tag an untagged archive, then rename it."""
    with tempfile.TemporaryDirectory() as tmp:
        tar_path = create_legacy_tar(Path(tmp))
        logger.info(f"Created {tar_path}, tags: {extract_repo_tags(tar_path)}")

        try:
            with open_image(tar_path) as image:
                logger.info(f"First tag: {image.set_name('demo')}")
                logger.info(f"Renamed: {image.set_name('mycompany/demo')}")
                for layer in image.layers:
                    logger.info(f"  layer {layer.id} created {layer.created.isoformat()}")
        except DockerScopeError as e:
            logger.error(f"Demo failed: {e}")
            return 1

        logger.info(f"Final tags: {extract_repo_tags(tar_path)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
