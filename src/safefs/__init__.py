"""Crash-safe filesystem primitives.

Atomic content writes, recursive removal with rollback, copy and rename with
overwrite policies, link creation with platform fallbacks and directory tree
mirroring. Every operation is a plain function raising a
:class:`~safefs.core.errors.FilesystemError` subclass on failure.
"""

from safefs.core.capture import OperationOutcome
from safefs.core.errors import (
    AlreadyExists,
    FileNotFound,
    FilesystemError,
    IncompleteCopy,
    InvalidArgument,
    LinkFailed,
    NotDetermined,
    PathTooLong,
    PrivilegeRequired,
    RemovalFailed,
    RenameFailed,
    UnsupportedType,
    WriteFailed,
)
from safefs.fs import (
    FsPath,
    MirrorOptions,
    MirrorReport,
    append_to_file,
    chgrp,
    chmod,
    chown,
    copy,
    dump_file,
    exists,
    extension_for,
    hardlink,
    is_absolute_path,
    is_readable,
    make_path_absolute,
    make_path_relative,
    mime_type,
    mirror,
    mkdir,
    normalize_path,
    read_bytes,
    read_file,
    readlink,
    remove,
    rename,
    size,
    symlink,
    tempnam,
    touch,
)

__version__ = "0.1.0"

__all__ = [
    "AlreadyExists",
    "FileNotFound",
    "FilesystemError",
    "FsPath",
    "IncompleteCopy",
    "InvalidArgument",
    "LinkFailed",
    "MirrorOptions",
    "MirrorReport",
    "NotDetermined",
    "OperationOutcome",
    "PathTooLong",
    "PrivilegeRequired",
    "RemovalFailed",
    "RenameFailed",
    "UnsupportedType",
    "WriteFailed",
    "__version__",
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
