"""Tracing of OS calls that failed inside :func:`safefs.core.capture.boxed`.

The structured ``fs.*`` events describe whole operations. This trace sits
below them and prints one line per failed OS call, with the symbolic errno
and the Windows error code when the OS gave them::

    [DEBUG] rename failed EXDEV(18): [Errno 18] Invalid cross-device link

Environment:
    SAFEFS_DEBUG: '1', 'true' or 'yes' (case-insensitive) turns the trace on.
        It is read when the module is imported.
"""

from __future__ import annotations

import errno as errno_codes
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from safefs.core.capture import OperationOutcome

_DEBUG_ENABLED = os.environ.get("SAFEFS_DEBUG", "").lower() in ("1", "true", "yes")


def describe_failure(call_name: str, outcome: OperationOutcome) -> str:
    """Render a failed outcome on one line, e.g. ``unlink failed ENOENT(2): gone``."""
    codes = []
    if outcome.errno is not None:
        name = errno_codes.errorcode.get(outcome.errno, "errno")
        codes.append(f"{name}({outcome.errno})")
    if outcome.winerror is not None:
        codes.append(f"winerror({outcome.winerror})")

    head = " ".join([f"{call_name} failed", *codes])
    return f"{head}: {outcome.message}" if outcome.message else head


def trace_failure(call_name: str, outcome: OperationOutcome) -> None:
    """Print a failed outcome to stderr when SAFEFS_DEBUG is on."""
    if _DEBUG_ENABLED:
        print(f"[DEBUG] {describe_failure(call_name, outcome)}", file=sys.stderr)
