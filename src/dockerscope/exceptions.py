"""Custom exceptions for dockerscope."""

from pathlib import Path


class DockerScopeError(Exception):
    """Base exception for all image archive errors.

    Args:
        operation: Name of the operation that failed (e.g. "extract")
        path: Path the operation was working on
        detail: Optional extra context appended to the message
    """

    def __init__(
        self, operation: str, path: str | Path, detail: str | None = None
    ) -> None:
        self.operation = operation
        self.path = str(path)
        self.detail = detail
        message = f"{operation} failed for {self.path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NotFoundError(DockerScopeError):
    """Raised when no archive exists at the source path."""

    pass


class UnsupportedFormatError(DockerScopeError):
    """Raised when the archive is compressed."""

    pass


class LockError(DockerScopeError):
    """Raised when exclusive access to the archive cannot be acquired."""

    pass


class ExtractionError(DockerScopeError):
    """Raised when the archive cannot be extracted."""

    pass


class ArchiveError(DockerScopeError):
    """Raised when the working copy cannot be written back to an archive."""

    pass


class SchemaError(DockerScopeError):
    """Raised when layer config or repository JSON is malformed or ambiguous."""

    pass


class NoLayersError(DockerScopeError):
    """Raised when an image has no layers to tag."""

    pass


class SerializationError(DockerScopeError):
    """Raised when the repository mapping cannot be serialized."""

    pass


class WriteError(DockerScopeError):
    """Raised when the repository mapping cannot be written."""

    pass


class TarReadError(DockerScopeError):
    """Raised when unable to read or parse tar file."""

    pass


class WorkspaceError(DockerScopeError):
    """Raised when the image working copy cannot be created or has been closed."""

    pass
