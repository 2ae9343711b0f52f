"""Capture of OS-level failures around a single call.

Every fallible OS call made by safefs goes through :func:`boxed` exactly
once per attempted operation. The wrapper never raises for OS errors; it
returns an :class:`OperationOutcome` the caller branches on, and whose
``error`` text is attached verbatim to the structured exception the caller
decides to raise.

The outcome is a plain value, so concurrent calls never read each other's
errors. The warnings interceptor is process-global, though: under threads a
warning may be recorded on the outcome of another call running at the same
time, so ``warnings`` is only a hint.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from safefs.utils.debug import trace_failure


@dataclass(frozen=True)
class OperationOutcome:
    """Result of one wrapped filesystem call.

    Attributes:
        ok: Whether the call completed without an OS error
        value: Return value of the call when it succeeded
        error: Captured OS message when it failed
        errno: POSIX error number, when the OS reported one
        winerror: Windows error code, when the OS reported one
        warnings: Messages of any warnings emitted during the call
    """

    ok: bool
    value: Any = None
    error: str | None = None
    errno: int | None = None
    winerror: int | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        """Best available description of what went wrong (may be empty)."""
        if self.error:
            return self.error
        if self.warnings:
            return self.warnings[-1]
        return ""


def boxed(call: Callable[..., Any], *args: Any, **kwargs: Any) -> OperationOutcome:
    """Invoke ``call`` with a temporary warnings interceptor installed.

    Args:
        call: The OS-level callable (``os.rename``, ``os.unlink``...)
        *args: Positional arguments for the call
        **kwargs: Keyword arguments for the call

    Returns:
        OperationOutcome describing success or the captured failure
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            value = call(*args, **kwargs)
        except OSError as exc:
            outcome = OperationOutcome(
                ok=False,
                error=str(exc),
                errno=exc.errno,
                winerror=getattr(exc, "winerror", None),
                warnings=tuple(str(w.message) for w in caught),
            )
            trace_failure(_call_name(call), outcome)
            return outcome

    return OperationOutcome(
        ok=True,
        value=value,
        warnings=tuple(str(w.message) for w in caught),
    )


def _call_name(call: Callable[..., Any]) -> str:
    return getattr(call, "__qualname__", None) or repr(call)
