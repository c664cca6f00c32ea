"""Tag extraction from Docker image tar files."""

import tarfile
from pathlib import Path

from ..core.types import DEFAULT_TAG, REPOSITORIES_FILENAME
from ..exceptions import TarReadError
from ..image.repositories import Repositories, parse_repositories


def read_repositories_from_tar(
    tar_path: str | Path, filename: str = REPOSITORIES_FILENAME
) -> Repositories:
    """Read the repository mapping from a tar file without extracting it.

    Args:
        tar_path: Path to Docker tar file
        filename: Name of the repository mapping member

    Returns:
        Repository mapping, or an empty dict if the archive has none

    Raises:
        TarReadError: If tar file cannot be read
        SchemaError: If the repository mapping is malformed
    """
    try:
        with tarfile.open(tar_path, "r:") as tar:
            try:
                repos_member = tar.extractfile(filename)
            except KeyError:
                return {}
            if repos_member is None:
                return {}
            repos_content = repos_member.read()
    except (tarfile.TarError, OSError) as e:
        raise TarReadError("read tags", tar_path, f"cannot read tar file: {e}") from e

    return parse_repositories(repos_content, f"{tar_path}:{filename}")


def extract_repo_tags(
    tar_path: str | Path, filename: str = REPOSITORIES_FILENAME
) -> list[str]:
    """Extract repository tags from the repository mapping in a tar file.

    Args:
        tar_path: Path to Docker tar file
        filename: Name of the repository mapping member

    Returns:
        List of repository tags (e.g., ["myapp:latest", "myapp:v1"])

    Raises:
        TarReadError: If tar file cannot be read
        SchemaError: If the repository mapping is malformed
    """
    repos_data = read_repositories_from_tar(tar_path, filename)

    # Extract tags from repositories structure: {"repo": {"tag": "layer_id"}}
    repo_tags = []
    for repo_name, tag_dict in repos_data.items():
        if isinstance(tag_dict, dict):
            for tag_name in tag_dict:
                repo_tags.append(f"{repo_name}:{tag_name}")

    return repo_tags


def parse_repository_tag(repo_tag: str) -> tuple[str, str]:
    """Split a repository:tag string into repository and tag.

    Args:
        repo_tag: e.g. "nginx:alpine" or "localhost:5000/myapp:latest"

    Returns:
        (repository, tag); the tag defaults to "latest"

    Examples:
        >>> parse_repository_tag("localhost:5000/myapp:latest")
        ('localhost:5000/myapp', 'latest')
        >>> parse_repository_tag("myapp")
        ('myapp', 'latest')
    """
    if ":" in repo_tag:
        # Split only on the last ':' to handle registry URLs like localhost:5000/repo:tag
        repository, tag = repo_tag.rsplit(":", 1)
        if "/" not in tag:
            return repository, tag or DEFAULT_TAG

    return repo_tag, DEFAULT_TAG


def get_primary_tag(
    tar_path: str | Path, filename: str = REPOSITORIES_FILENAME
) -> tuple[str, str] | None:
    """Return the first (repository, tag) recorded in a tar file, if any."""
    repo_tags = extract_repo_tags(tar_path, filename)
    if repo_tags:
        return parse_repository_tag(repo_tags[0])
    return None
