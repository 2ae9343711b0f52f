"""Path utilities for filesystem operations.

This module provides path normalization, absolute/relative conversion and
scheme handling. All functions are pure string manipulation except
:func:`temp_name`, which resolves the real path and draws random bytes.
Canonical paths always use ``/`` as separator.
"""

from __future__ import annotations

import base64
import os
import re
import string
from collections.abc import Iterable
from dataclasses import dataclass

from safefs.core.constants import TEMP_NAME_PREFIX
from safefs.core.errors import InvalidArgument, PathTooLong
from safefs.core.settings import resolve_max_path_length

StrPath = str | os.PathLike[str]
PathArg = StrPath | Iterable[StrPath]

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*)://")
_SEGMENT_JUNK = " \n\r\t\v\0"


def _is_drive(segment: str) -> bool:
    return (
        len(segment) == 2
        and segment[0] in string.ascii_letters
        and segment[1] == ":"
    )


def as_path_list(paths: PathArg) -> list[str]:
    """Turn a single path or an iterable of paths into a list of strings."""
    if isinstance(paths, (str, os.PathLike)):
        return [os.fspath(paths)]
    return [os.fspath(p) for p in paths]


def scheme_and_hierarchy(path: StrPath) -> tuple[str | None, str]:
    """Split ``scheme://hierarchy`` on the first ``://``.

    Args:
        path: Path or URI to split

    Returns:
        ``(scheme, hierarchy)``; scheme is ``None`` when there is none
    """
    scheme, sep, hierarchy = os.fspath(path).partition("://")
    if not sep:
        return None, scheme
    return scheme, hierarchy


def normalize_path(*parts: StrPath) -> str:
    """Join and normalize path parts into canonical form.

    Separators are unified to ``/`` and collapsed, each segment is trimmed
    of whitespace, ``.`` segments are dropped and ``..`` climbs one segment
    (never above a root or drive letter). A leading separator and a leading
    ``scheme://`` are preserved. The result is idempotent under this function.

    Args:
        *parts: Path fragments joined in order

    Returns:
        Canonical path string
    """
    joined = "/".join(os.fspath(part) for part in parts).replace("\\", "/")

    prefix = ""
    match = _SCHEME_RE.match(joined)
    if match:
        prefix = match.group(0)
        joined = joined[match.end() :]

    rooted = joined.startswith("/")
    segments: list[str] = []
    for raw in joined.split("/"):
        segment = raw.strip(_SEGMENT_JUNK)
        if segment in ("", "."):
            continue
        if segment == "..":
            anchored = rooted or (bool(segments) and _is_drive(segments[0]))
            climbable = bool(segments) and segments[-1] != ".."
            if climbable and not (len(segments) == 1 and _is_drive(segments[0])):
                segments.pop()
            elif not anchored:
                segments.append("..")
            continue
        segments.append(segment)

    path = "/".join(segments)
    if rooted:
        path = "/" + path
    elif len(segments) == 1 and _is_drive(segments[0]):
        path += "/"
    return prefix + path


def is_absolute_path(path: StrPath) -> bool:
    """Return whether ``path`` is absolute.

    POSIX roots (``/``), Windows roots (``\\``), drive letters (``C:/``,
    ``C:\\``) and ``scheme://`` URIs are all absolute.
    """
    path = os.fspath(path)
    if not path:
        return False
    if path[0] in "/\\":
        return True
    if (
        len(path) >= 3
        and path[0] in string.ascii_letters
        and path[1] == ":"
        and path[2] in "/\\"
    ):
        return True
    return _SCHEME_RE.match(path) is not None


def make_path_absolute(path: StrPath, base_path: StrPath) -> str:
    """Turn a relative path into an absolute path in canonical form.

    Args:
        path: Path to resolve; returned normalized if already absolute
        base_path: Absolute base the relative path is appended to

    Returns:
        Canonical absolute path

    Raises:
        InvalidArgument: If the base path is empty or not absolute

    Examples:
        >>> make_path_absolute("../style.css", "/app/public/css")
        '/app/public/style.css'
    """
    base = os.fspath(base_path)
    if base == "":
        raise InvalidArgument(
            f'The base path must be a non-empty string. Got: "{base}".'
        )
    if not is_absolute_path(base):
        raise InvalidArgument(f'The base path "{base}" is not an absolute path.')

    if is_absolute_path(path):
        return normalize_path(path)

    match = _SCHEME_RE.match(base)
    if match:
        return match.group(0) + normalize_path(base[match.end() :], path)
    return normalize_path(base, path)


def _split_drive(path: str) -> tuple[str, str | None]:
    if (
        len(path) > 2
        and path[1] == ":"
        and path[2] == "/"
        and path[0] in string.ascii_letters
    ):
        return path[2:], path[0].upper()
    return path, None


def _split_segments(path: str) -> list[str]:
    result: list[str] = []
    for segment in path.strip("/").split("/"):
        if segment == "..":
            if result:
                result.pop()
        elif segment not in (".", ""):
            result.append(segment)
    return result


def make_path_relative(end_path: StrPath, start_path: StrPath) -> str:
    """Express ``end_path`` relative to the directory ``start_path``.

    Args:
        end_path: Absolute path to reach
        start_path: Absolute directory to start from

    Returns:
        Relative path ending in ``/`` (``./`` when both are the same). When
        the paths live on different drives or schemes no relative path
        exists and the end path's absolute form is returned.

    Raises:
        InvalidArgument: If either path is not absolute

    Examples:
        >>> make_path_relative("/a/b/c", "/a/x/y")
        '../../b/c/'
    """
    start = os.fspath(start_path)
    end = os.fspath(end_path)
    if not is_absolute_path(start):
        raise InvalidArgument(f'The start path "{start}" is not absolute.')
    if not is_absolute_path(end):
        raise InvalidArgument(f'The end path "{end}" is not absolute.')

    end = end.replace("\\", "/")
    start = start.replace("\\", "/")

    end_scheme, end = _strip_scheme(end)
    start_scheme, start = _strip_scheme(start)
    if end_scheme != start_scheme:
        return normalize_path(end_path)

    end, end_drive = _split_drive(end)
    start, start_drive = _split_drive(start)

    start_segments = _split_segments(start)
    end_segments = _split_segments(end)

    if end_drive and start_drive and end_drive != start_drive:
        remainder = "/".join(end_segments) + "/" if end_segments else ""
        return f"{end_drive}:/{remainder}"

    index = 0
    while (
        index < len(start_segments)
        and index < len(end_segments)
        and start_segments[index] == end_segments[index]
    ):
        index += 1

    traverser = "../" * (len(start_segments) - index)
    remainder = "/".join(end_segments[index:])
    relative = traverser + (remainder + "/" if remainder else "")
    return relative or "./"


def _strip_scheme(path: str) -> tuple[str | None, str]:
    match = _SCHEME_RE.match(path)
    if match is None:
        return None, path
    return match.group(1), path[match.end() :]


def guard_max_length(path: StrPath, max_length: int | None = None) -> None:
    """Fail before probing a path longer than the platform allows.

    Args:
        path: Path about to be passed to an OS call
        max_length: Optional explicit limit (see ``resolve_max_path_length``)

    Raises:
        PathTooLong: If the path exceeds the limit
    """
    path = os.fspath(path)
    limit = resolve_max_path_length(max_length)
    if len(path) > limit:
        raise PathTooLong(path, limit)


def temp_name(path: StrPath) -> str:
    """Return a hidden sibling name for ``path``, salted with random bytes.

    The name lives next to the real path so a rename onto it stays on the
    same filesystem. Only two random bytes are drawn: callers must treat a
    collision with an existing entry as a reason to draw again.
    """
    real = os.path.realpath(os.fspath(path))
    seed = base64.b64encode(os.urandom(2)).decode("ascii")
    seed = seed.translate(str.maketrans("/=", "-!"))[::-1]
    return os.path.join(os.path.dirname(real), TEMP_NAME_PREFIX + seed)


@dataclass(frozen=True)
class FsPath:
    """A path value split into its scheme and hierarchical part.

    Attributes:
        raw: The path exactly as given
        scheme: URI scheme (``file``, ``gs``...) or ``None``
        hierarchy: Everything after ``scheme://`` (the whole path otherwise)
    """

    raw: str
    scheme: str | None
    hierarchy: str

    @classmethod
    def parse(cls, path: StrPath) -> FsPath:
        """Build an FsPath from a path string or path-like object."""
        raw = os.fspath(path)
        scheme, hierarchy = scheme_and_hierarchy(raw)
        return cls(raw=raw, scheme=scheme, hierarchy=hierarchy)

    @property
    def normalized(self) -> str:
        """Canonical form of the path."""
        return normalize_path(self.raw)

    @property
    def is_absolute(self) -> bool:
        """Whether the path is absolute (root, drive letter or scheme)."""
        return is_absolute_path(self.raw)

    @property
    def is_local(self) -> bool:
        """Whether the path addresses the local filesystem."""
        return self.scheme is None or self.scheme == "file"

    def __str__(self) -> str:
        return self.normalized
