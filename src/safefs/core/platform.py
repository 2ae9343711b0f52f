"""Platform abstraction for POSIX and Windows filesystem behaviour.

Everything that differs between the two families (separator translation,
symlink privileges, link removal quirks, read-only temp files, path length
limits, owner lookups and file locking) lives here so the operations in
``safefs.fs`` stay free of inline platform conditionals.
"""

from __future__ import annotations

import os
import stat
from functools import lru_cache
from typing import IO, Any

from safefs.core.capture import OperationOutcome

#: Windows ERROR_PRIVILEGE_NOT_HELD
ERROR_PRIVILEGE_NOT_HELD = 1314


class PosixPlatform:
    """Behaviour of Linux, macOS and other POSIX systems."""

    name = "posix"
    separator = "/"
    #: Symlink creation needs elevated rights (copy fallback is meaningful)
    symlinks_privileged = False
    #: Dangling directory links can only be removed with rmdir
    link_rmdir_fallback = False

    def native_path(self, path: str) -> str:
        """Return ``path`` with separators in the platform's native form."""
        return path

    def default_max_path_length(self) -> int:
        """Return the platform path length limit (PATH_MAX)."""
        try:
            return int(os.pathconf("/", "PC_PATH_MAX"))
        except (OSError, ValueError, AttributeError):
            return 4096

    def is_privilege_error(self, outcome: OperationOutcome) -> bool:
        """Whether a failed link call was refused for missing privileges."""
        return False

    def ensure_writable(self, path: str) -> None:
        """Make ``path`` deletable before unlinking it (no-op on POSIX)."""

    def resolve_uid(self, user: str | int) -> int:
        """Map a user name or id to a numeric uid."""
        if isinstance(user, int):
            return user
        import pwd

        return pwd.getpwnam(user).pw_uid

    def resolve_gid(self, group: str | int) -> int:
        """Map a group name or id to a numeric gid."""
        if isinstance(group, int):
            return group
        import grp

        return grp.getgrnam(group).gr_gid

    def lock_exclusive(self, handle: IO[Any]) -> None:
        """Take an exclusive advisory lock on an open file."""
        import fcntl

        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)

    def unlock(self, handle: IO[Any]) -> None:
        """Release a lock taken by :meth:`lock_exclusive`."""
        import fcntl

        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


class WindowsPlatform(PosixPlatform):
    """Behaviour of Windows (NTFS semantics, privileged symlinks)."""

    name = "windows"
    separator = "\\"
    symlinks_privileged = True
    link_rmdir_fallback = True

    def native_path(self, path: str) -> str:
        return path.replace("/", "\\")

    def default_max_path_length(self) -> int:
        return 260

    def is_privilege_error(self, outcome: OperationOutcome) -> bool:
        if outcome.winerror == ERROR_PRIVILEGE_NOT_HELD:
            return True
        return "error code(1314)" in outcome.message

    def ensure_writable(self, path: str) -> None:
        # Read-only files cannot be unlinked on Windows
        if os.access(path, os.W_OK):
            return
        mode = os.stat(path).st_mode
        os.chmod(path, stat.S_IMODE(mode) | stat.S_IWRITE)

    def resolve_uid(self, user: str | int) -> int:
        raise NotImplementedError("Changing file owners is not supported on Windows")

    def resolve_gid(self, group: str | int) -> int:
        raise NotImplementedError("Changing file groups is not supported on Windows")

    def lock_exclusive(self, handle: IO[Any]) -> None:
        import msvcrt

        handle.seek(0, os.SEEK_END)
        msvcrt.locking(handle.fileno(), msvcrt.LK_LOCK, 1)

    def unlock(self, handle: IO[Any]) -> None:
        import msvcrt

        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)


Platform = PosixPlatform


@lru_cache(maxsize=1)
def current_platform() -> Platform:
    """Return the platform implementation for the running interpreter."""
    if os.name == "nt":
        return WindowsPlatform()
    return PosixPlatform()
