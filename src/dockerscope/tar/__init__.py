"""Tar archive codec and inspection."""

from .codec import archive, extract
from .tags import (
    extract_repo_tags,
    get_primary_tag,
    parse_repository_tag,
    read_repositories_from_tar,
)

__all__ = [
    "archive",
    "extract",
    "extract_repo_tags",
    "get_primary_tag",
    "parse_repository_tag",
    "read_repositories_from_tar",
]
