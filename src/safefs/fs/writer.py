"""Atomic content writes.

``dump_file`` never exposes a partially written target: content goes to an
exclusively created temp file next to the target, is flushed to disk, and
is then renamed over the target in one step. On any failure the target is
left untouched and the temp file is removed.
"""

from __future__ import annotations

import os
import stat
import tempfile
import uuid
from typing import IO, Any

import structlog

from safefs.core.capture import boxed
from safefs.core.constants import TEMP_NAME_ATTEMPTS
from safefs.core.errors import WriteFailed
from safefs.core.platform import current_platform
from safefs.core.settings import resolve_copy_buffer_size
from safefs.fs.attributes import mkdir
from safefs.fs.paths import StrPath, make_path_absolute, scheme_and_hierarchy
from safefs.fs.transfer import rename

_log = structlog.get_logger(__name__)

#: What can be written: text (UTF-8 encoded), bytes or a readable stream
Content = str | bytes | bytearray | memoryview | IO[Any]


def _check_content(content: Content) -> None:
    if isinstance(content, (str, bytes, bytearray, memoryview)):
        return
    if callable(getattr(content, "read", None)):
        return
    raise TypeError(
        "Content must be str, bytes or a readable stream, "
        f"got {type(content).__name__}"
    )


def _write_content(handle: IO[bytes], content: Content) -> int:
    if isinstance(content, str):
        return handle.write(content.encode("utf-8"))
    if isinstance(content, (bytes, bytearray, memoryview)):
        return handle.write(content)

    written = 0
    buffer_size = resolve_copy_buffer_size()
    while chunk := content.read(buffer_size):
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        written += handle.write(chunk)
    return written


#: Linux exposes the process umask without having to change it
_PROC_STATUS = "/proc/self/status"


def _current_umask() -> int:
    # os.umask() can only read the mask by replacing it, and any file another
    # thread creates in between gets the temporary mask
    try:
        with open(_PROC_STATUS, encoding="ascii") as status:
            lines = status.read().splitlines()
    except OSError:
        lines = []

    for line in lines:
        if line.startswith("Umask:"):
            return int(line.split()[1], 8)

    mask = os.umask(0)
    os.umask(mask)
    return mask


def tempnam(directory: StrPath, prefix: str, suffix: str = "") -> str:
    """Create a temporary file with a unique name and return its path.

    The file is created with exclusive-create semantics, so two callers can
    never be handed the same name.

    Args:
        directory: Directory the file is created in (may carry a scheme)
        prefix: Start of the file name
        suffix: End of the file name

    Returns:
        Path of the new, empty file

    Raises:
        WriteFailed: If no file could be created
    """
    directory = os.fspath(directory)
    scheme, hierarchy = scheme_and_hierarchy(directory)

    if scheme in (None, "file", "gs") and suffix == "":
        outcome = boxed(tempfile.mkstemp, prefix=prefix, dir=hierarchy)
        if outcome.ok:
            fd, path = outcome.value
            os.close(fd)
            if scheme is not None and scheme != "gs":
                return f"{scheme}://{path}"
            return path
        raise WriteFailed(
            f"A temporary file could not be created: {outcome.message}", directory
        )

    last_message = ""
    for _ in range(TEMP_NAME_ATTEMPTS):
        candidate = f"{directory}/{prefix}{uuid.uuid4().hex}{suffix}"
        outcome = boxed(os.open, candidate, os.O_CREAT | os.O_EXCL | os.O_RDWR, 0o600)
        if outcome.ok:
            os.close(outcome.value)
            return candidate
        last_message = outcome.message

    raise WriteFailed(
        f"A temporary file could not be created: {last_message}", directory
    )


def _write_temp(tmp_file: str, content: Content) -> int:
    with open(tmp_file, "wb") as handle:
        written = _write_content(handle, content)
        handle.flush()
        os.fsync(handle.fileno())
    return written


def dump_file(path: StrPath, content: Content) -> None:
    """Atomically dump content into a file.

    A symbolic link at ``path`` is followed and the write lands on the link
    target; the link itself is kept.

    Args:
        path: File to write
        content: Text, bytes or a readable stream

    Raises:
        TypeError: If content is of an unsupported type
        WriteFailed: If the content could not be written
        RenameFailed: If the temp file could not replace the target
    """
    _check_content(content)
    _dump(os.fspath(path), content, set())


def _dump(path: str, content: Content, seen: set[str]) -> None:
    scheme, hierarchy = scheme_and_hierarchy(path)
    if scheme == "file":
        path = hierarchy

    if os.path.islink(path):
        if path in seen:
            raise WriteFailed(
                f"Failed to write file '{path}': too many levels of symbolic links.",
                path,
            )
        seen.add(path)
        outcome = boxed(os.readlink, path)
        if not outcome.ok:
            raise WriteFailed(
                f"Failed to read symbolic link '{path}': {outcome.message}", path
            )
        base = os.path.dirname(os.path.abspath(path))
        _dump(make_path_absolute(outcome.value, base), content, seen)
        return

    directory = os.path.dirname(path) or "."
    if not os.path.isdir(directory):
        mkdir(directory)

    tmp_file = tempnam(directory, os.path.basename(path))
    try:
        outcome = boxed(_write_temp, tmp_file, content)
        if not outcome.ok:
            raise WriteFailed(
                f"Failed to write file '{tmp_file}': {outcome.message}", path
            )

        if os.path.isfile(path):
            mode = stat.S_IMODE(os.stat(path).st_mode)
        else:
            mode = 0o666 & ~_current_umask()
        if not boxed(os.chmod, tmp_file, mode).ok:
            _log.warning("fs.write.chmod_failed", path=path, mode=oct(mode))

        rename(tmp_file, path, overwrite=True)
        _log.debug("fs.write", path=path, bytes=outcome.value)
    finally:
        if os.path.lexists(tmp_file):
            boxed(current_platform().ensure_writable, tmp_file)
            boxed(os.unlink, tmp_file)


def _append(path: str, content: Content, lock: bool) -> int:
    platform = current_platform()
    with open(path, "ab") as handle:
        if lock:
            platform.lock_exclusive(handle)
        try:
            written = _write_content(handle, content)
            handle.flush()
        finally:
            if lock:
                platform.unlock(handle)
    return written


def append_to_file(path: StrPath, content: Content, lock: bool = False) -> None:
    """Append content to the end of a file, creating it when missing.

    Appending is not atomic. With ``lock`` an exclusive advisory lock is
    held while writing so cooperating appenders do not interleave.

    Raises:
        TypeError: If content is of an unsupported type
        WriteFailed: If the content could not be appended
    """
    _check_content(content)
    path = os.fspath(path)
    directory = os.path.dirname(path)
    if directory and not os.path.isdir(directory):
        mkdir(directory)

    outcome = boxed(_append, path, content, lock)
    if not outcome.ok:
        raise WriteFailed(f"Failed to write file '{path}': {outcome.message}", path)
