"""Tests for directory creation and attribute changes."""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from safefs.core.capture import OperationOutcome
from safefs.core.errors import FilesystemError
from safefs.core.platform import WindowsPlatform
from safefs.fs.attributes import chgrp, chmod, chown, list_children, mkdir, touch


class TestMkdir:
    """Test recursive directory creation."""

    def test_creates_nested(self, tmp_path: Path) -> None:
        """Test that missing parents are created."""
        mkdir(tmp_path / "a" / "b" / "c")

        assert (tmp_path / "a" / "b" / "c").is_dir()

    def test_existing_and_empty_are_skipped(self, tmp_path: Path) -> None:
        """Test that existing directories and empty names are no-ops."""
        mkdir([tmp_path, "", tmp_path / "new"])

        assert (tmp_path / "new").is_dir()

    def test_lost_race_is_tolerated(self, tmp_path: Path) -> None:
        """Test that a concurrent creator does not make mkdir fail."""
        target = tmp_path / "raced"

        def racing_makedirs(path: str, mode: int) -> None:
            os.mkdir(path)
            raise FileExistsError(17, "File exists", path)

        with patch("safefs.fs.attributes.os.makedirs", side_effect=racing_makedirs):
            mkdir(target)

        assert target.is_dir()

    def test_failure(self, tmp_path: Path) -> None:
        """Test that a file in the way makes mkdir fail."""
        (tmp_path / "file").write_text("x")

        with pytest.raises(FilesystemError, match="Failed to create directory"):
            mkdir(tmp_path / "file" / "sub")

    def test_mode(self, tmp_path: Path) -> None:
        """Test that the mode is applied (minus umask)."""
        mask = os.umask(0o022)
        try:
            mkdir(tmp_path / "m", 0o750)
        finally:
            os.umask(mask)

        assert stat.S_IMODE((tmp_path / "m").stat().st_mode) == 0o750


def test_list_children_sorted(tmp_path: Path) -> None:
    """Test that children come back sorted and joined to the directory."""
    for name in ("b", "a", "c"):
        (tmp_path / name).write_text(name)

    assert list_children(tmp_path) == [str(tmp_path / n) for n in ("a", "b", "c")]

    with pytest.raises(FilesystemError, match="Failed to list directory"):
        list_children(tmp_path / "missing")


class TestTouch:
    """Test touch()."""

    def test_creates_missing(self, tmp_path: Path) -> None:
        """Test that a missing file is created empty."""
        touch(tmp_path / "new.txt")

        assert (tmp_path / "new.txt").read_bytes() == b""

    def test_keeps_content_and_sets_times(self, tmp_path: Path) -> None:
        """Test explicit modification and access times."""
        target = tmp_path / "t.txt"
        target.write_text("keep")

        touch(target, time=1_000_000, atime=2_000_000)
        # Read the times first: reading the content may update atime
        stamps = target.stat()

        assert stamps.st_mtime == 1_000_000
        assert stamps.st_atime == 2_000_000
        assert target.read_text() == "keep"

    def test_atime_defaults_to_time(self, tmp_path: Path) -> None:
        """Test that atime follows time when omitted."""
        touch(tmp_path / "t", time=1_500_000)

        assert (tmp_path / "t").stat().st_atime == 1_500_000

    def test_failure(self, tmp_path: Path) -> None:
        """Test that touching inside a missing directory fails."""
        with pytest.raises(FilesystemError, match="Failed to touch"):
            touch(tmp_path / "missing" / "t")


class TestChmod:
    """Test mode changes."""

    def test_with_umask(self, tmp_path: Path) -> None:
        """Test that umask bits are removed."""
        target = tmp_path / "f"
        target.write_text("x")

        chmod(target, 0o777, umask=0o027)

        assert stat.S_IMODE(target.stat().st_mode) == 0o750

    def test_recursive(self, sample_tree: Path) -> None:
        """Test that everything below a directory is changed."""
        chmod(sample_tree, 0o700, recursive=True)

        deep = sample_tree / "docs" / "deep" / "notes.txt"
        assert stat.S_IMODE(deep.stat().st_mode) == 0o700

    def test_recursive_skips_directory_links(self, tmp_path: Path) -> None:
        """Test that a link to a directory is not descended into."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "f").write_text("x")
        (outside / "f").chmod(0o644)
        holder = tmp_path / "holder"
        holder.mkdir()
        (holder / "link").symlink_to(outside)

        with patch("safefs.fs.attributes.list_children", wraps=list_children) as spy:
            chmod(holder, 0o755, recursive=True)

        listed = [call.args[0] for call in spy.call_args_list]
        assert str(holder / "link") not in listed
        assert stat.S_IMODE((outside / "f").stat().st_mode) == 0o644

    def test_failure(self, tmp_path: Path) -> None:
        """Test that a missing path fails."""
        with pytest.raises(FilesystemError, match="Failed to chmod"):
            chmod(tmp_path / "missing", 0o644)


class TestOwnership:
    """Test chown and chgrp (OS calls are mocked, tests run as any user)."""

    def test_chown_by_id(self, tmp_path: Path) -> None:
        """Test that chown passes the uid and keeps the group."""
        target = tmp_path / "f"
        target.write_text("x")

        with patch("safefs.fs.attributes.os.chown") as fake_chown:
            chown(target, 1234)

        fake_chown.assert_called_once_with(str(target), 1234, -1)

    def test_chgrp_recursive_children_first(self, sample_tree: Path) -> None:
        """Test that recursive changes visit children before the parent."""
        with patch("safefs.fs.attributes.os.chown") as fake_chown:
            chgrp(sample_tree, 99, recursive=True)

        visited = [call.args[0] for call in fake_chown.call_args_list]
        assert visited[-1] == str(sample_tree)
        assert str(sample_tree / "docs" / "deep" / "notes.txt") in visited
        assert all(call.args[1:] == (-1, 99) for call in fake_chown.call_args_list)

    def test_links_use_lchown(self, tmp_path: Path) -> None:
        """Test that links are changed themselves."""
        (tmp_path / "real").write_text("x")
        (tmp_path / "link").symlink_to(tmp_path / "real")

        with patch("safefs.fs.attributes.os.lchown") as fake_lchown:
            chown(tmp_path / "link", 5)

        fake_lchown.assert_called_once_with(str(tmp_path / "link"), 5, -1)

    def test_unknown_user(self, tmp_path: Path) -> None:
        """Test that an unknown user name fails."""
        with pytest.raises(FilesystemError, match="Unknown user"):
            chown(tmp_path, "no-such-user-safefs")

    def test_failure_carries_message(self, tmp_path: Path) -> None:
        """Test that the captured OS message is attached."""
        with patch(
            "safefs.fs.attributes.boxed",
            return_value=OperationOutcome(ok=False, error="Operation not permitted"),
        ):
            with pytest.raises(FilesystemError, match="Failed to chgrp .*not permitted"):
                chgrp(tmp_path, 0)

    def test_unsupported_on_windows(self, tmp_path: Path) -> None:
        """Test that Windows refuses owner changes."""
        with patch("safefs.fs.attributes.current_platform", return_value=WindowsPlatform()):
            with pytest.raises(FilesystemError, match="not supported on Windows"):
                chown(tmp_path, "someone")
