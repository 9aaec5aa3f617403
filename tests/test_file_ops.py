"""
Unit Tests for File Operations

Author: Save Game Installer Project
License: MIT
"""

import shutil
import pytest

from save_installer.utils.file_ops import (
    path_exists,
    list_entries,
    ensure_directory,
    copy_file,
    remove_file,
    same_file
)


class TestListing:
    """Test suite for directory listing."""

    def test_sorted_entries(self, tmp_path):
        """Test entries come back sorted by name."""
        (tmp_path / "b.txt").write_text("b")
        (tmp_path / "a").mkdir()
        (tmp_path / "c.txt").write_text("c")

        names = [entry.name for entry in list_entries(str(tmp_path))]

        assert names == ["a", "b.txt", "c.txt"]

    def test_missing_directory_is_empty(self, tmp_path):
        """Test that a missing directory lists as empty."""
        assert list_entries(str(tmp_path / "missing")) == []

    def test_file_is_empty_listing(self, tmp_path):
        """Test that listing a file lists as empty."""
        f = tmp_path / "file.txt"
        f.write_text("x")

        assert list_entries(str(f)) == []

    def test_path_exists(self, tmp_path):
        """Test existence checks."""
        assert path_exists(str(tmp_path)) is True
        assert path_exists(str(tmp_path / "nope")) is False


class TestCopyFile:
    """Test suite for copying."""

    def test_copy_creates_parent(self, tmp_path):
        """Test the destination folder is created."""
        source = tmp_path / "a.ess"
        source.write_bytes(b"\x00\x01binary")
        dest = tmp_path / "x" / "y" / "a.ess"

        copy_file(str(source), str(dest))

        assert dest.read_bytes() == b"\x00\x01binary"

    def test_fallback_when_copyfile_fails(self, tmp_path, monkeypatch):
        """Test the read/write fallback when copyfile raises."""
        source = tmp_path / "a.ess"
        source.write_text("content")
        dest = tmp_path / "out" / "a.ess"

        def broken(src, dst):
            raise OSError("not supported")

        monkeypatch.setattr(shutil, "copyfile", broken)
        copy_file(str(source), str(dest))

        assert dest.read_text() == "content"

    def test_same_file_is_not_rewritten(self, tmp_path):
        """Test that copying a file onto itself raises instead of falling back."""
        source = tmp_path / "a.ess"
        source.write_text("content")

        with pytest.raises(shutil.SameFileError):
            copy_file(str(source), str(source))

        assert source.read_text() == "content"

    def test_permission_error_skips_fallback(self, tmp_path, monkeypatch):
        """Test that a permission failure is raised without a second attempt."""
        source = tmp_path / "a.ess"
        source.write_text("content")
        dest = tmp_path / "out" / "a.ess"

        def denied(src, dst):
            raise PermissionError("denied")

        monkeypatch.setattr(shutil, "copyfile", denied)

        with pytest.raises(PermissionError):
            copy_file(str(source), str(dest))
        assert not dest.exists()

    def test_same_file(self, tmp_path):
        """Test same-file detection."""
        a = tmp_path / "a.ess"
        a.write_text("x")
        b = tmp_path / "b.ess"
        b.write_text("x")

        assert same_file(str(a), str(tmp_path / "." / "a.ess"))
        assert not same_file(str(a), str(b))
        assert not same_file(str(a), str(tmp_path / "missing.ess"))

    def test_missing_source_raises(self, tmp_path):
        """Test that copying a missing file raises."""
        with pytest.raises(OSError):
            copy_file(str(tmp_path / "missing.ess"), str(tmp_path / "out" / "missing.ess"))


class TestRemoveAndEnsure:
    """Test suite for deletion and directory creation."""

    def test_remove_file(self, tmp_path):
        """Test deleting an existing file."""
        f = tmp_path / "a.ess"
        f.write_text("x")

        assert remove_file(str(f)) is True
        assert not f.exists()

    def test_remove_missing_is_noop(self, tmp_path):
        """Test deleting a file that is already gone."""
        assert remove_file(str(tmp_path / "gone.ess")) is False

    def test_ensure_directory(self, tmp_path):
        """Test nested directory creation is idempotent."""
        new_dir = tmp_path / "new" / "nested" / "directory"

        ensure_directory(str(new_dir))
        ensure_directory(str(new_dir))

        assert new_dir.is_dir()

    def test_ensure_directory_over_file_raises(self, tmp_path):
        """Test that a file in the way raises."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(OSError):
            ensure_directory(str(blocker / "Saves"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
