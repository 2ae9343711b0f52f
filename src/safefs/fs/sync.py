"""Directory tree mirroring.

:func:`mirror` makes a target tree look like an origin tree: directories are
created, files copied with an overwrite policy, links recreated (or their
content copied) and, optionally, target entries missing from the origin
removed first.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import structlog
from pydantic import BaseModel

from safefs.core.capture import boxed
from safefs.core.errors import (
    FileNotFound,
    FilesystemError,
    InvalidArgument,
    UnsupportedType,
)
from safefs.fs.attributes import mkdir
from safefs.fs.links import symlink
from safefs.fs.paths import StrPath
from safefs.fs.remover import remove
from safefs.fs.transfer import copy

_log = structlog.get_logger(__name__)


class MirrorOptions(BaseModel):
    """Policy for one :func:`mirror` call.

    Attributes:
        override_newer: Overwrite target files that are not older than
            their origin
        copy_instead_of_link: Copy what links point to instead of
            recreating the links (and follow directory links while walking)
        delete_extraneous: Remove target entries with no origin counterpart
    """

    model_config = {"frozen": True}

    override_newer: bool = False
    copy_instead_of_link: bool = False
    delete_extraneous: bool = False


@dataclass
class MirrorReport:
    """What one :func:`mirror` call did to the target tree."""

    created_dirs: int = 0
    copied: int = 0
    linked: int = 0
    skipped: int = 0
    removed: int = 0


def _children(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda child: child.name)


def _walk(
    root: Path,
    child_first: bool = False,
    follow_symlinks: bool = False,
    prune: Path | None = None,
    _ancestors: frozenset[Path] | None = None,
) -> Iterator[str]:
    """Yield every entry below ``root`` in name order.

    Args:
        root: Directory to walk (not yielded itself)
        child_first: Yield a directory after its children instead of before
        follow_symlinks: Descend into links to directories
        prune: Real path of a directory that is yielded but not descended into
        _ancestors: Real paths of the directories above, guarding link cycles

    Raises:
        FilesystemError: If a directory cannot be listed
    """
    if _ancestors is None:
        _ancestors = frozenset({Path(os.path.realpath(root))})

    outcome = boxed(_children, root)
    if not outcome.ok:
        raise FilesystemError(f"Failed to list '{root}': {outcome.message}", str(root))

    for child in outcome.value:
        real = Path(os.path.realpath(child))
        is_dir = child.is_dir() and (follow_symlinks or not child.is_symlink())
        descend = is_dir and real != prune and real not in _ancestors

        if not child_first:
            yield str(child)
        if descend:
            yield from _walk(
                child, child_first, follow_symlinks, prune, _ancestors | {real}
            )
        if child_first:
            yield str(child)


def _is_inside(path: str, directory: str) -> bool:
    """Whether ``path`` is ``directory`` or below it, compared per component."""
    return path == directory or path.startswith(
        (directory + os.sep, directory + "/")
    )


def mirror(
    origin_dir: StrPath,
    target_dir: StrPath,
    entries: Iterable[StrPath] | None = None,
    options: MirrorOptions | None = None,
) -> MirrorReport:
    """Mirror a directory to another.

    Args:
        origin_dir: Directory to mirror from
        target_dir: Directory to mirror into (created when missing)
        entries: Origin paths to mirror, already filtered, in self-first
            order; defaults to every entry below ``origin_dir``
        options: Overwrite, link and deletion policy

    Returns:
        Counts of what was created, copied, linked, skipped and removed

    Raises:
        FileNotFound: If the origin directory does not exist
        InvalidArgument: If the origin is not a directory or an entry lies
            outside it
        FilesystemError: If a directory cannot be listed
        UnsupportedType: If an origin entry is not a file, dir or link
    """
    if options is None:
        options = MirrorOptions()
    origin = str(Path(origin_dir))
    target = str(Path(target_dir))
    report = MirrorReport()

    if not os.path.exists(origin):
        raise FileNotFound(origin, f"Origin directory '{origin}' does not exist.")
    if not os.path.isdir(origin):
        raise InvalidArgument(f"Origin '{origin}' is not a directory.", origin)

    log = _log.bind(origin=origin, target=target)

    if options.delete_extraneous and os.path.isdir(target):
        for path in _walk(Path(target), child_first=True):
            counterpart = origin + path[len(target) :]
            if not os.path.lexists(counterpart) and os.path.lexists(path):
                remove(path)
                report.removed += 1

    target_real = Path(os.path.realpath(target))
    if entries is None:
        entries = _walk(
            Path(origin),
            follow_symlinks=options.copy_instead_of_link,
            prune=target_real,
        )

    mkdir(target)
    created: set[Path] = set()

    for entry in entries:
        path = str(Path(entry))
        if not _is_inside(path, origin):
            raise InvalidArgument(
                f"Entry '{path}' is not inside the origin directory '{origin}'.", path
            )

        real = Path(os.path.realpath(path))
        if path == target or real == target_real or real in created:
            continue

        destination = target + path[len(origin) :]
        created.add(Path(os.path.realpath(destination)))

        if not options.copy_instead_of_link and os.path.islink(path):
            symlink(os.readlink(path), destination)
            report.linked += 1
        elif os.path.isdir(path):
            if not os.path.isdir(destination):
                report.created_dirs += 1
            mkdir(destination)
        elif os.path.isfile(path):
            if copy(path, destination, options.override_newer):
                report.copied += 1
            else:
                report.skipped += 1
        else:
            raise UnsupportedType(f"Unable to guess the {path} file type.", path)

    log.info(
        "fs.mirror.summary",
        created_dirs=report.created_dirs,
        copied=report.copied,
        linked=report.linked,
        skipped=report.skipped,
        removed=report.removed,
    )
    return report
