"""Symbolic and hard link creation."""

from __future__ import annotations

import os
from typing import NoReturn

import structlog

from safefs.core.capture import OperationOutcome, boxed
from safefs.core.errors import FileNotFound, LinkFailed, PrivilegeRequired
from safefs.core.platform import current_platform
from safefs.fs.attributes import mkdir
from safefs.fs.paths import PathArg, StrPath, as_path_list
from safefs.fs.remover import remove

_log = structlog.get_logger(__name__)


def _link_error(
    outcome: OperationOutcome, origin: str, target: str, kind: str
) -> NoReturn:
    if current_platform().is_privilege_error(outcome):
        raise PrivilegeRequired(
            f"Unable to create {kind} link: error code(1314): 'A required "
            "privilege is not held by the client'. Do you have the required "
            "Administrator permissions?",
            origin,
            target,
        )
    raise LinkFailed(
        f"Failed to create {kind} link from {origin} to {target}: {outcome.message}",
        origin,
        target,
    )


def symlink(
    origin_dir: StrPath, target_dir: StrPath, copy_on_windows: bool = False
) -> None:
    """Create a symbolic link, or copy a directory where links need privileges.

    An existing link at ``target_dir`` that already points at ``origin_dir``
    is kept; a link pointing elsewhere is replaced.

    Args:
        origin_dir: What the link points to (kept verbatim, may be relative)
        target_dir: Where the link is created
        copy_on_windows: Mirror the directory instead on platforms where
            creating symlinks requires elevated rights

    Raises:
        PrivilegeRequired: If the OS refused for missing privileges
        LinkFailed: If the link could not be created
    """
    platform = current_platform()
    origin = platform.native_path(os.fspath(origin_dir))
    target = platform.native_path(os.fspath(target_dir))

    if platform.symlinks_privileged and copy_on_windows:
        from safefs.fs.sync import mirror

        mirror(origin, target)
        return

    mkdir(os.path.dirname(target))

    if os.path.islink(target):
        if os.readlink(target) == origin:
            return
        remove(target)

    resolved = os.path.join(os.path.dirname(target), origin)
    outcome = boxed(
        os.symlink, origin, target, target_is_directory=os.path.isdir(resolved)
    )
    if not outcome.ok:
        _link_error(outcome, origin, target, "symbolic")
    _log.debug("fs.symlink", origin=origin, target=target)


def hardlink(origin_file: StrPath, target_files: PathArg) -> None:
    """Create one or more hard links to a file.

    Targets already linked to the origin (same inode) are left alone; any
    other existing target is removed first.

    Raises:
        FileNotFound: If the origin is missing or not a regular file
        LinkFailed: If a link could not be created
    """
    origin = os.fspath(origin_file)
    if not os.path.exists(origin):
        raise FileNotFound(origin)
    if not os.path.isfile(origin):
        raise FileNotFound(origin, f"Origin file '{origin}' is not a file.")

    origin_stat = os.stat(origin)
    for target in as_path_list(target_files):
        if os.path.lexists(target):
            target_stat = os.lstat(target)
            if (target_stat.st_ino, target_stat.st_dev) == (
                origin_stat.st_ino,
                origin_stat.st_dev,
            ):
                continue
            remove(target)

        outcome = boxed(os.link, origin, target)
        if not outcome.ok:
            _link_error(outcome, origin, target, "hard")


def readlink(path: StrPath, canonicalize: bool = False) -> str | None:
    """Read a link target.

    Args:
        path: Link to read
        canonicalize: Resolve every link level and return the final absolute
            path instead of the next target

    Returns:
        The next link target, the fully resolved path when canonicalizing,
        or None when ``path`` is not a link (or does not exist when
        canonicalizing)
    """
    path = os.fspath(path)
    if canonicalize:
        if not os.path.exists(path):
            return None
        return os.path.realpath(path)

    if not os.path.islink(path):
        return None
    outcome = boxed(os.readlink, path)
    return outcome.value if outcome.ok else None
