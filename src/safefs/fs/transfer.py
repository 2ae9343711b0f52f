"""Copy and rename operations with overwrite policies.

``copy`` streams an origin into a target and verifies the byte count.
``rename`` tries a direct OS rename first and only falls back to a
copy-based move when the OS refuses (typically across devices).
"""

from __future__ import annotations

import errno
import os
import stat
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO
from urllib.parse import urlsplit

import httpx
import structlog

from safefs.core.capture import boxed
from safefs.core.errors import (
    AlreadyExists,
    FileNotFound,
    FilesystemError,
    IncompleteCopy,
    RenameFailed,
)
from safefs.core.settings import resolve_copy_buffer_size, resolve_http_timeout
from safefs.fs.attributes import mkdir
from safefs.fs.paths import FsPath, StrPath
from safefs.fs.query import is_readable
from safefs.fs.remover import remove

_log = structlog.get_logger(__name__)

#: Schemes streamed over HTTP when used as a copy origin
_REMOTE_SCHEMES = ("http", "https")


def _is_remote(origin: str) -> bool:
    """Whether the origin is fetched over HTTP, e.g. ``https://example.com/a.txt``."""
    parsed = FsPath.parse(origin)
    return parsed.scheme in _REMOTE_SCHEMES and bool(urlsplit(origin).hostname)


@contextmanager
def _open_remote(url: str) -> Iterator[Iterator[bytes]]:
    with httpx.Client(
        follow_redirects=True, timeout=resolve_http_timeout()
    ) as client:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            yield response.iter_bytes(resolve_copy_buffer_size())


def _iter_local(handle: BinaryIO) -> Iterator[bytes]:
    buffer_size = resolve_copy_buffer_size()
    while chunk := handle.read(buffer_size):
        yield chunk


@contextmanager
def _open_origin(origin: str, local_path: str | None) -> Iterator[Iterator[bytes]]:
    if local_path is None:
        with _open_remote(origin) as chunks:
            yield chunks
    else:
        with open(local_path, "rb") as handle:
            yield _iter_local(handle)


def _stream(origin: str, local_path: str | None, target: str) -> int:
    copied = 0
    with _open_origin(origin, local_path) as chunks, open(target, "wb") as out:
        for chunk in chunks:
            out.write(chunk)
            copied += len(chunk)
    return copied


def copy(origin: StrPath, target: StrPath, overwrite_newer_files: bool = False) -> bool:
    """Copy a file.

    If the target is older than the origin it is always overwritten. If the
    target is newer (or as new), it is only overwritten when
    ``overwrite_newer_files`` is set. Remote origins are always fetched.

    Args:
        origin: Local path, ``file://`` URI or remote URL to copy from
        target: Local path to copy to
        overwrite_newer_files: Overwrite a target that is not older

    Returns:
        True if bytes were copied, False if the copy was skipped (newer
        target, or a target that is the origin itself)

    Raises:
        FileNotFound: If a local origin does not exist
        IncompleteCopy: If fewer bytes were written than the origin holds;
            the target then keeps its own modification time
        FilesystemError: If the origin or target cannot be opened
    """
    origin = os.fspath(origin)
    target = os.fspath(target)
    parsed = FsPath.parse(origin)
    local_path = parsed.hierarchy if parsed.is_local else None
    remote = _is_remote(origin)

    if local_path is not None and not os.path.isfile(local_path):
        raise FileNotFound(
            origin, f"Failed to copy '{origin}' because file does not exist."
        )

    if local_path is None and not remote:
        raise FilesystemError(
            f"Failed to copy '{origin}': no handler for scheme '{parsed.scheme}'.",
            origin,
        )

    mkdir(os.path.dirname(target))

    if (
        not overwrite_newer_files
        and local_path is not None
        and os.path.isfile(target)
        and os.stat(local_path).st_mtime <= os.stat(target).st_mtime
    ):
        _log.debug("fs.copy.skipped", origin=origin, target=target)
        return False

    # Opening the target for writing would truncate a shared inode
    if (
        local_path is not None
        and os.path.isfile(target)
        and os.path.samefile(local_path, target)
    ):
        _log.debug("fs.copy.same_file", origin=origin, target=target)
        return False

    try:
        outcome = boxed(_stream, origin, local_path, target)
    except httpx.HTTPError as exc:
        raise FilesystemError(
            f"Failed to copy '{origin}' to '{target}': {exc}", target
        ) from exc
    if not outcome.ok:
        raise FilesystemError(
            f"Failed to copy '{origin}' to '{target}': {outcome.message}", target
        )
    copied: int = outcome.value

    if not os.path.isfile(target):
        raise FilesystemError(f"Failed to copy '{origin}' to '{target}'.", target)

    if local_path is not None:
        origin_stat = os.stat(local_path)
        if copied != origin_stat.st_size:
            raise IncompleteCopy(
                f"Failed to copy the whole content of '{origin}' to '{target}'; "
                f"{copied} out of {origin_stat.st_size} copied.",
                target,
                copied=copied,
                expected=origin_stat.st_size,
            )

        target_mode = stat.S_IMODE(os.stat(target).st_mode)
        # Like cp: keep executable bits and the modification time
        boxed(os.chmod, target, target_mode | (origin_stat.st_mode & 0o111))
        boxed(os.utime, target, (origin_stat.st_mtime, origin_stat.st_mtime))

    _log.debug("fs.copy", origin=origin, target=target, bytes=copied)
    return True


def rename(origin: StrPath, target: StrPath, overwrite: bool = False) -> None:
    """Rename a file or a directory.

    Args:
        origin: Existing path to move
        target: New path
        overwrite: Replace an existing target

    Raises:
        AlreadyExists: If the target exists and ``overwrite`` is False
        RenameFailed: If the origin cannot be renamed
    """
    origin = os.fspath(origin)
    target = os.fspath(target)

    if not overwrite and is_readable(target):
        raise AlreadyExists(
            f"Cannot rename '{origin}' to '{target}', because it already exists.",
            target,
        )

    outcome = boxed(os.replace if overwrite else os.rename, origin, target)
    if outcome.ok:
        return

    if os.path.isdir(origin):
        from safefs.fs.sync import MirrorOptions, mirror

        _log.info("fs.rename.mirror_fallback", origin=origin, target=target,
                  reason=outcome.message)
        options = MirrorOptions(override_newer=overwrite, delete_extraneous=overwrite)
        mirror(origin, target, options=options)
        remove(origin)
        return

    if outcome.errno == errno.EXDEV and os.path.isfile(origin):
        _log.info("fs.rename.cross_device", origin=origin, target=target)
        copy(origin, target, overwrite_newer_files=True)
        remove(origin)
        return

    raise RenameFailed(
        f"Cannot rename '{origin}' to '{target}': {outcome.message}", target
    )
