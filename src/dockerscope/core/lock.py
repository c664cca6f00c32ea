"""Cross-process exclusive lock over an image archive."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from ..exceptions import LockError

logger = logging.getLogger(__name__)

LOCK_SUFFIX = ".lock"


def lock_path_for(archive_path: str | Path) -> Path:
    """Return the sidecar lock file used for an archive.

    The lock lives next to the archive rather than on it: the lock file is
    opened for writing and truncated by the locking library.
    """
    archive_path = Path(archive_path)
    return archive_path.with_name(archive_path.name + LOCK_SUFFIX)


@contextmanager
def archive_lock(archive_path: str | Path, timeout: float = -1) -> Iterator[FileLock]:
    """Hold an exclusive advisory lock keyed on archive_path.

    Args:
        archive_path: Archive the lock protects
        timeout: Seconds to wait for the lock, -1 blocks until acquired

    Yields:
        The acquired lock

    Raises:
        LockError: If the lock cannot be acquired
    """
    lock_path = lock_path_for(archive_path)
    lock = FileLock(str(lock_path), timeout=timeout)

    try:
        lock.acquire()
    except Timeout as e:
        raise LockError(
            "lock", archive_path, f"timed out after {timeout}s waiting for {lock_path}"
        ) from e
    except OSError as e:
        raise LockError("lock", archive_path, str(e)) from e

    logger.debug("Acquired lock %s", lock_path)
    try:
        yield lock
    finally:
        lock.release()
        logger.debug("Released lock %s", lock_path)
