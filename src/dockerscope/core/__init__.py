"""Core configuration and locking primitives."""

from .lock import archive_lock, lock_path_for
from .types import WorkspaceConfig

__all__ = ["WorkspaceConfig", "archive_lock", "lock_path_for"]
