"""Custom exceptions for safefs.

This module defines the typed exceptions raised by every filesystem
operation. Each carries the path (or paths) involved and the verbatim OS
message captured when the underlying call failed.
"""

from typing import Any


class FilesystemError(Exception):
    """Base exception for all safefs errors.

    All custom exceptions inherit from this base class to allow broad
    exception handling by callers that only need to know an operation failed.

    Attributes:
        path: The path the failing operation was acting on, if any
    """

    kind = "filesystem_error"

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize FilesystemError.

        Args:
            message: Human-readable description, including any OS message
            path: Path involved in the failure (optional)
        """
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured logging.

        Returns:
            Dictionary representation of the failure
        """
        result: dict[str, Any] = {"error": self.kind, "message": str(self)}
        if self.path is not None:
            result["path"] = self.path
        return result

    def __repr__(self) -> str:
        """Return repr string for debugging."""
        return f"{type(self).__name__}({str(self)!r}, path={self.path!r})"


class FileNotFound(FilesystemError):
    """Raised when a required source path does not exist."""

    kind = "not_found"

    def __init__(self, path: str | None, message: str | None = None) -> None:
        if message is None:
            message = f"File not found: {path}." if path else "File not found."
        super().__init__(message, path)


class AlreadyExists(FilesystemError):
    """Raised when a rename target exists and overwriting was not requested."""

    kind = "already_exists"


class WriteFailed(FilesystemError):
    """Raised when content could not be written to a file."""

    kind = "write_failed"


class IncompleteCopy(WriteFailed):
    """Raised when fewer bytes were copied than the origin holds.

    Attributes:
        copied: Number of bytes written to the target
        expected: Size of the origin in bytes
    """

    kind = "incomplete_copy"

    def __init__(
        self, message: str, path: str | None, copied: int, expected: int
    ) -> None:
        self.copied = copied
        self.expected = expected
        super().__init__(message, path)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["copied"] = self.copied
        result["expected"] = self.expected
        return result


class RemovalFailed(FilesystemError):
    """Raised when a file, link or directory could not be removed."""

    kind = "removal_failed"


class RenameFailed(FilesystemError):
    """Raised when a rename could not be performed."""

    kind = "rename_failed"


class LinkFailed(FilesystemError):
    """Raised when a symbolic or hard link could not be created.

    Attributes:
        origin: The path the link should point to
        target: The path where the link should be created
    """

    kind = "link_failed"

    def __init__(self, message: str, origin: str, target: str) -> None:
        self.origin = origin
        self.target = target
        super().__init__(message, target)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["origin"] = self.origin
        result["target"] = self.target
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(origin={self.origin!r}, "
            f"target={self.target!r})"
        )


class PrivilegeRequired(LinkFailed):
    """Raised when Windows refuses to create a link without admin rights."""

    kind = "privilege_required"


class PathTooLong(FilesystemError):
    """Raised when a path exceeds the platform maximum length.

    Attributes:
        max_length: The limit that was exceeded
    """

    kind = "path_too_long"

    def __init__(self, path: str, max_length: int) -> None:
        self.max_length = max_length
        super().__init__(
            "Could not check if the file exists; the path length exceeds "
            f"the maximum length of {max_length}.",
            path,
        )


class UnsupportedType(FilesystemError):
    """Raised when mirroring meets an entry that is not a file, dir or link."""

    kind = "unsupported_type"


class NotDetermined(FilesystemError):
    """Raised when a property such as the mime type cannot be determined."""

    kind = "not_determined"


class InvalidArgument(FilesystemError, ValueError):
    """Raised for malformed path arguments (empty or non-absolute bases)."""

    kind = "invalid_argument"
