"""Tests for the OS call capture wrapper."""

import errno
import os
import warnings
from pathlib import Path

from safefs.core.capture import OperationOutcome, boxed


class TestBoxed:
    """Test that boxed() turns OS failures into outcome values."""

    def test_success_returns_value(self, tmp_path: Path) -> None:
        """Test that a successful call reports ok with its return value."""
        (tmp_path / "a").write_text("x")

        outcome = boxed(os.listdir, tmp_path)

        assert outcome.ok
        assert outcome.value == ["a"]
        assert outcome.error is None
        assert outcome.message == ""

    def test_os_error_is_captured(self, tmp_path: Path) -> None:
        """Test that an OSError becomes a failed outcome, not an exception."""
        outcome = boxed(os.rmdir, tmp_path / "missing")

        assert not outcome.ok
        assert outcome.errno == errno.ENOENT
        assert "No such file or directory" in outcome.message
        assert outcome.winerror is None

    def test_keyword_arguments_are_forwarded(self, tmp_path: Path) -> None:
        """Test that keyword arguments reach the wrapped call."""
        target = tmp_path / "a" / "b"

        outcome = boxed(os.makedirs, target, exist_ok=True)

        assert outcome.ok
        assert target.is_dir()

    def test_warnings_are_recorded(self) -> None:
        """Test that warnings emitted by the call end up on the outcome."""

        def noisy() -> int:
            warnings.warn("disk almost full", stacklevel=1)
            return 1

        outcome = boxed(noisy)

        assert outcome.ok
        assert outcome.warnings == ("disk almost full",)
        assert outcome.message == "disk almost full"

    def test_non_os_errors_propagate(self) -> None:
        """Test that programming errors are not captured."""
        import pytest

        with pytest.raises(TypeError):
            boxed(os.rmdir)

    def test_interceptor_is_restored(self) -> None:
        """Test that the previous warnings filters are restored afterwards."""
        before = list(warnings.filters)

        boxed(lambda: None)

        assert list(warnings.filters) == before


def test_outcome_is_immutable() -> None:
    """Test that outcomes cannot be mutated after the call."""
    import dataclasses

    import pytest

    outcome = OperationOutcome(ok=False, error="denied")

    with pytest.raises(dataclasses.FrozenInstanceError):
        outcome.ok = True  # type: ignore[misc]
