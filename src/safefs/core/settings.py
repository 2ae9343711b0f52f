"""Helpers for resolving runtime settings.

Each resolver follows the same precedence: an explicit argument wins, then
the matching ``SAFEFS_*`` environment variable, then the built-in default.
"""

from __future__ import annotations

import os

from safefs.core.platform import current_platform

__all__ = [
    "DEFAULT_COPY_BUFFER_SIZE",
    "DEFAULT_HTTP_TIMEOUT",
    "resolve_copy_buffer_size",
    "resolve_http_timeout",
    "resolve_max_path_length",
]

#: Chunk size used when streaming an origin into a target
DEFAULT_COPY_BUFFER_SIZE = 65536

#: Seconds to wait on a remote origin before giving up
DEFAULT_HTTP_TIMEOUT = 30.0


def _env_number(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def resolve_max_path_length(max_length: int | None = None) -> int:
    """Resolve the longest path accepted before any existence probe.

    Args:
        max_length: Optional explicit limit.

    Returns:
        The limit, two characters short of the platform maximum when taken
        from the platform default.
    """

    if max_length is not None:
        return max_length
    env_value = _env_number("SAFEFS_MAX_PATH_LENGTH")
    if env_value is not None:
        return int(env_value)
    return current_platform().default_max_path_length() - 2


def resolve_copy_buffer_size(buffer_size: int | None = None) -> int:
    """Resolve the chunk size used by stream copies."""

    if buffer_size is not None:
        return buffer_size
    env_value = _env_number("SAFEFS_COPY_BUFFER_SIZE")
    if env_value is not None:
        return int(env_value)
    return DEFAULT_COPY_BUFFER_SIZE


def resolve_http_timeout(timeout: float | None = None) -> float:
    """Resolve the timeout applied to remote copy origins."""

    if timeout is not None:
        return timeout
    env_value = _env_number("SAFEFS_HTTP_TIMEOUT")
    if env_value is not None:
        return float(env_value)
    return DEFAULT_HTTP_TIMEOUT
