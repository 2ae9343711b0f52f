"""Recursive removal of files, links and directory trees.

A top-level directory is first renamed to a hidden sibling name and deleted
from there. If deletion fails part-way, the sibling is renamed back so the
caller sees either the original tree under its original name or nothing at
all, never a half-emptied directory under the original name.
"""

from __future__ import annotations

import errno
import os

import structlog

from safefs.core.capture import boxed
from safefs.core.constants import TEMP_NAME_ATTEMPTS
from safefs.core.errors import FilesystemError, RemovalFailed
from safefs.core.platform import current_platform
from safefs.fs.attributes import list_children
from safefs.fs.paths import PathArg, as_path_list, temp_name

_log = structlog.get_logger(__name__)

_PERMISSION_ERRNOS = (errno.EACCES, errno.EPERM)


def remove(paths: PathArg) -> None:
    """Remove files, links or directories.

    Directories are removed recursively; links are removed themselves and
    never followed. Removing a path that does not exist is a no-op.

    Args:
        paths: Path or paths to remove, processed in reverse order

    Raises:
        RemovalFailed: If an entry could not be removed
    """
    _remove_all(as_path_list(paths), recursive=False)


def _claim_temp_name(path: str) -> str | None:
    """Draw hidden sibling names until one is free (names are short)."""
    for _ in range(TEMP_NAME_ATTEMPTS):
        candidate = temp_name(path)
        if not os.path.lexists(candidate):
            return candidate
    return None


def _remove_all(files: list[str], recursive: bool) -> None:
    for file in reversed(files):
        if os.path.islink(file):
            _remove_link(file)
        elif os.path.isdir(file):
            _remove_directory(file, recursive)
        else:
            _remove_file(file)


def _remove_link(file: str) -> None:
    outcome = boxed(os.unlink, file)
    if not outcome.ok and current_platform().link_rmdir_fallback:
        outcome = boxed(os.rmdir, file)
    if not outcome.ok and os.path.lexists(file):
        raise RemovalFailed(
            f"Failed to remove symlink '{file}': {outcome.message}", file
        )


def _remove_file(file: str) -> None:
    outcome = boxed(os.unlink, file)
    if outcome.ok:
        return
    # A concurrent removal is fine; a permission error is not
    if outcome.errno in _PERMISSION_ERRNOS or os.path.lexists(file):
        raise RemovalFailed(f"Failed to remove file '{file}': {outcome.message}", file)


def _remove_directory(directory: str, recursive: bool) -> None:
    original: str | None = None
    current = directory

    if not recursive:
        hidden = _claim_temp_name(directory)
        if hidden is not None and boxed(os.rename, directory, hidden).ok:
            original, current = directory, hidden

    try:
        _remove_all(list_children(current), recursive=True)
        outcome = boxed(os.rmdir, current)
        if not outcome.ok and os.path.lexists(current):
            raise RemovalFailed(
                f"Failed to remove directory '{current}': {outcome.message}", current
            )
    except FilesystemError as exc:
        if recursive:
            raise
        if original is not None:
            if boxed(os.rename, current, original).ok:
                _log.warning(
                    "fs.remove.rolled_back", path=original, hidden=current
                )
            else:
                _log.error(
                    "fs.remove.rollback_failed", path=original, hidden=current
                )
        raise RemovalFailed(
            f"Failed to remove directory '{directory}': {exc}", directory
        ) from exc
