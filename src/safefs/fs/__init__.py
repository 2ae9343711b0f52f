"""Filesystem operations with atomic writes and rollback on removal.

This package provides the mutating operations (write, remove, copy, rename,
link, mirror) together with path handling, read-only queries and attribute
changes.
"""

from safefs.fs.attributes import chgrp, chmod, chown, mkdir, touch
from safefs.fs.links import hardlink, readlink, symlink
from safefs.fs.paths import (
    FsPath,
    is_absolute_path,
    make_path_absolute,
    make_path_relative,
    normalize_path,
)
from safefs.fs.query import (
    exists,
    extension_for,
    is_readable,
    mime_type,
    read_bytes,
    read_file,
    size,
)
from safefs.fs.remover import remove
from safefs.fs.sync import MirrorOptions, MirrorReport, mirror
from safefs.fs.transfer import copy, rename
from safefs.fs.writer import append_to_file, dump_file, tempnam

__all__ = [
    "FsPath",
    "MirrorOptions",
    "MirrorReport",
    "append_to_file",
    "chgrp",
    "chmod",
    "chown",
    "copy",
    "dump_file",
    "exists",
    "extension_for",
    "hardlink",
    "is_absolute_path",
    "is_readable",
    "make_path_absolute",
    "make_path_relative",
    "mime_type",
    "mirror",
    "mkdir",
    "normalize_path",
    "read_bytes",
    "read_file",
    "readlink",
    "remove",
    "rename",
    "size",
    "symlink",
    "tempnam",
    "touch",
]
