"""Directory creation and file attribute changes.

mkdir, touch, chmod, chown and chgrp accept a single path or an iterable of
paths and raise :class:`FilesystemError` carrying the captured OS message on
the first failure.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from safefs.core.capture import boxed
from safefs.core.errors import FilesystemError
from safefs.core.platform import current_platform
from safefs.fs.paths import PathArg, StrPath, as_path_list


def list_children(directory: StrPath) -> list[str]:
    """Return the immediate children of ``directory``, sorted by name.

    Raises:
        FilesystemError: If the directory cannot be listed
    """
    directory = os.fspath(directory)
    outcome = boxed(os.listdir, directory)
    if not outcome.ok:
        raise FilesystemError(
            f"Failed to list directory '{directory}': {outcome.message}", directory
        )
    return [os.path.join(directory, name) for name in sorted(outcome.value)]


def mkdir(paths: PathArg, mode: int = 0o777) -> None:
    """Create directories recursively.

    Existing directories are skipped; losing a race against another creator
    is not an error.

    Args:
        paths: Directory or directories to create
        mode: Permission bits for created directories (before umask)

    Raises:
        FilesystemError: If a directory cannot be created
    """
    for directory in as_path_list(paths):
        if not directory or os.path.isdir(directory):
            continue

        outcome = boxed(os.makedirs, directory, mode)
        if not outcome.ok and not os.path.isdir(directory):
            raise FilesystemError(
                f"Failed to create directory '{directory}': {outcome.message}",
                directory,
            )


def _touch(path: str, time: float | None, atime: float | None) -> None:
    with open(path, "ab"):
        pass
    if time is None:
        os.utime(path, None)
    else:
        os.utime(path, (atime if atime is not None else time, time))


def touch(
    paths: PathArg, time: float | None = None, atime: float | None = None
) -> None:
    """Set access and modification time, creating missing files.

    Args:
        paths: File or files to touch
        time: Modification time as a Unix timestamp (default: now)
        atime: Access time as a Unix timestamp (default: ``time``)

    Raises:
        FilesystemError: When touching fails
    """
    for file in as_path_list(paths):
        outcome = boxed(_touch, file, time, atime)
        if not outcome.ok:
            raise FilesystemError(f"Failed to touch '{file}': {outcome.message}", file)


def chmod(paths: PathArg, mode: int, umask: int = 0o000, recursive: bool = False) -> None:
    """Change the mode of files or directories.

    Args:
        paths: File(s) or directory(ies) to change
        mode: New mode (octal)
        umask: Bits removed from ``mode``
        recursive: Also change everything below directories (links to
            directories are not descended into)

    Raises:
        FilesystemError: When a change fails
    """
    for file in as_path_list(paths):
        outcome = boxed(os.chmod, file, mode & ~umask)
        if not outcome.ok:
            raise FilesystemError(f"Failed to chmod '{file}': {outcome.message}", file)
        if recursive and os.path.isdir(file) and not os.path.islink(file):
            chmod(list_children(file), mode, umask, True)


def _resolve_id(resolver: Callable[[str | int], int], name: str | int, what: str) -> int:
    try:
        return resolver(name)
    except KeyError as exc:
        raise FilesystemError(f"Unknown {what} '{name}'") from exc
    except NotImplementedError as exc:
        raise FilesystemError(str(exc)) from exc


def _change_owner(
    paths: PathArg, uid: int, gid: int, recursive: bool, verb: str
) -> None:
    for file in as_path_list(paths):
        if recursive and os.path.isdir(file) and not os.path.islink(file):
            _change_owner(list_children(file), uid, gid, True, verb)

        if os.path.islink(file) and hasattr(os, "lchown"):
            outcome = boxed(os.lchown, file, uid, gid)
            action = f"l{verb}"
        else:
            outcome = boxed(os.chown, file, uid, gid)
            action = verb

        if not outcome.ok:
            raise FilesystemError(
                f"Failed to {action} '{file}': {outcome.message}", file
            )


def chown(paths: PathArg, user: str | int, recursive: bool = False) -> None:
    """Change the owner of files or directories.

    Links are changed themselves, not their targets. Always fails on Windows.

    Args:
        paths: File(s) or directory(ies) to change
        user: User name or uid
        recursive: Also change everything below directories

    Raises:
        FilesystemError: When the user is unknown or a change fails
    """
    uid = _resolve_id(current_platform().resolve_uid, user, "user")
    _change_owner(paths, uid, -1, recursive, "chown")


def chgrp(paths: PathArg, group: str | int, recursive: bool = False) -> None:
    """Change the group of files or directories.

    Links are changed themselves, not their targets. Always fails on Windows.

    Args:
        paths: File(s) or directory(ies) to change
        group: Group name or gid
        recursive: Also change everything below directories

    Raises:
        FilesystemError: When the group is unknown or a change fails
    """
    gid = _resolve_id(current_platform().resolve_gid, group, "group")
    _change_owner(paths, -1, gid, recursive, "chgrp")
