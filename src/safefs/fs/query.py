"""Read-only queries: existence, size, content and mime type."""

from __future__ import annotations

import os

from safefs.core.capture import boxed
from safefs.core.constants import EXTENSION_TYPES, MIME_TYPES
from safefs.core.errors import FilesystemError, NotDetermined
from safefs.fs.paths import PathArg, StrPath, as_path_list, guard_max_length


def exists(paths: PathArg) -> bool:
    """Check the existence of files or directories.

    Every path is checked against the platform length limit before it is
    probed, so an overlong path fails loudly instead of being truncated.

    Args:
        paths: Path or paths that must all exist

    Returns:
        True if every path exists

    Raises:
        PathTooLong: If a path exceeds the platform maximum
    """
    for file in as_path_list(paths):
        guard_max_length(file)
        if not os.path.exists(file):
            return False
    return True


def is_readable(path: StrPath) -> bool:
    """Tell whether a file exists and is readable."""
    path = os.fspath(path)
    guard_max_length(path)
    return os.access(path, os.R_OK)


def size(path: StrPath) -> int:
    """Return the size of a file in bytes.

    Raises:
        FilesystemError: If the size cannot be determined
    """
    path = os.fspath(path)
    outcome = boxed(os.path.getsize, path)
    if not outcome.ok:
        raise FilesystemError(
            f"Could not determine file size for provided path: {outcome.message}",
            path,
        )
    return int(outcome.value)


def _read(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


def read_bytes(path: StrPath) -> bytes:
    """Return the raw content of a file.

    Raises:
        FilesystemError: If the path is a directory or cannot be read
    """
    path = os.fspath(path)
    if os.path.isdir(path):
        raise FilesystemError(
            f"Failed to read file '{path}'; the path points to a directory.", path
        )

    outcome = boxed(_read, path)
    if not outcome.ok:
        raise FilesystemError(f"Failed to read file '{path}': {outcome.message}", path)
    return outcome.value


def read_file(path: StrPath, encoding: str = "utf-8") -> str:
    """Return the content of a file as a string.

    Raises:
        FilesystemError: If the file cannot be read or decoded
    """
    data = read_bytes(path)
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise FilesystemError(
            f"Failed to decode file '{os.fspath(path)}' as {encoding}: {exc}",
            os.fspath(path),
        ) from exc


def mime_type(path: StrPath) -> str:
    """Look up the media type of a path from its extension.

    The lookup is case sensitive on the extension.

    Raises:
        NotDetermined: If the extension is not in the table
    """
    path = os.fspath(path)
    name = os.path.basename(path)
    extension = name.rpartition(".")[2] if "." in name else ""

    found = EXTENSION_TYPES.get(extension)
    if found is None:
        raise NotDetermined(
            f"Could not determine mime type for provided path: {path}", path
        )
    return found


def extension_for(media_type: str) -> str:
    """Return the first declared extension for a media type.

    Raises:
        NotDetermined: If the media type is not in the table
    """
    extensions = MIME_TYPES.get(media_type)
    if not extensions:
        raise NotDetermined(f"No extension is known for media type '{media_type}'")
    return extensions[0]
