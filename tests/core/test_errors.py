"""Tests for the typed filesystem exceptions.

Every failure carries the path involved and the captured OS message, and
serializes to a dictionary for structured logging.
"""

import pytest


def test_errors_import() -> None:
    """Test that errors module can be imported."""
    from safefs.core import errors

    assert errors is not None


def test_base_error_carries_path() -> None:
    """Test FilesystemError message, path and to_dict()."""
    from safefs.core.errors import FilesystemError

    exc = FilesystemError("Failed to chmod '/srv/a': [Errno 1]", "/srv/a")

    assert exc.path == "/srv/a"
    assert str(exc) == "Failed to chmod '/srv/a': [Errno 1]"
    assert exc.to_dict() == {
        "error": "filesystem_error",
        "message": "Failed to chmod '/srv/a': [Errno 1]",
        "path": "/srv/a",
    }


def test_base_error_without_path() -> None:
    """Test that to_dict() omits a missing path."""
    from safefs.core.errors import FilesystemError

    assert "path" not in FilesystemError("boom").to_dict()


def test_file_not_found_default_message() -> None:
    """Test FileNotFound builds a message from the path."""
    from safefs.core.errors import FileNotFound

    exc = FileNotFound("/data/missing.txt")

    assert str(exc) == "File not found: /data/missing.txt."
    assert exc.to_dict()["error"] == "not_found"


def test_file_not_found_custom_message() -> None:
    """Test FileNotFound keeps an explicit message."""
    from safefs.core.errors import FileNotFound

    exc = FileNotFound("/data", "Origin directory '/data' does not exist.")

    assert str(exc) == "Origin directory '/data' does not exist."
    assert exc.path == "/data"


def test_incomplete_copy_counts() -> None:
    """Test IncompleteCopy records copied and expected byte counts."""
    from safefs.core.errors import IncompleteCopy, WriteFailed

    exc = IncompleteCopy("short copy", "/t", copied=3, expected=10)

    assert isinstance(exc, WriteFailed)
    assert exc.to_dict()["copied"] == 3
    assert exc.to_dict()["expected"] == 10


def test_link_failed_carries_both_ends() -> None:
    """Test LinkFailed and PrivilegeRequired record origin and target."""
    from safefs.core.errors import LinkFailed, PrivilegeRequired

    exc = PrivilegeRequired("needs admin", "C:\\a", "C:\\b")

    assert isinstance(exc, LinkFailed)
    assert exc.origin == "C:\\a"
    assert exc.target == "C:\\b"
    assert exc.path == "C:\\b"
    assert exc.to_dict()["error"] == "privilege_required"
    assert "origin='C:\\\\a'" in repr(exc)


def test_path_too_long_message() -> None:
    """Test PathTooLong names the limit that was exceeded."""
    from safefs.core.errors import PathTooLong

    exc = PathTooLong("/x" * 10, 12)

    assert exc.max_length == 12
    assert "maximum length of 12" in str(exc)


def test_invalid_argument_is_value_error() -> None:
    """Test InvalidArgument can be caught as ValueError."""
    from safefs.core.errors import InvalidArgument

    with pytest.raises(ValueError):
        raise InvalidArgument("The base path \"a\" is not an absolute path.")


def test_repr_includes_path() -> None:
    """Test repr() for debugging output."""
    from safefs.core.errors import RemovalFailed

    exc = RemovalFailed("Failed to remove file '/x'", "/x")

    assert repr(exc) == "RemovalFailed(\"Failed to remove file '/x'\", path='/x')"


@pytest.mark.parametrize(
    "name",
    [
        "AlreadyExists",
        "WriteFailed",
        "RemovalFailed",
        "RenameFailed",
        "UnsupportedType",
        "NotDetermined",
    ],
)
def test_all_errors_share_the_base(name: str) -> None:
    """Test that every error kind is a FilesystemError."""
    from safefs.core import errors

    cls = getattr(errors, name)
    assert issubclass(cls, errors.FilesystemError)
    assert cls("msg", "/p").path == "/p"
