"""
Unit Tests for Save Relocation

Author: Save Game Installer Project
License: MIT
"""

import asyncio
import os
import pytest

from save_installer.relocation.relocator import Relocator


@pytest.fixture
def relocator():
    return Relocator()


class TestRelocate:
    """Test suite for batch relocation."""

    def test_move_files(self, relocator, tmp_path, make_file):
        """Test cut mode copies then removes sources."""
        a = make_file(tmp_path / "src" / "a.ess", "AAA")
        b = make_file(tmp_path / "src" / "deep" / "b.skse", "BBB")
        dest = tmp_path / "Saves"

        result = relocator.relocate([str(a), str(b)], str(dest), cut=True)

        assert result.moved == 2
        assert result.success is True
        assert (dest / "a.ess").read_text() == "AAA"
        assert (dest / "b.skse").read_text() == "BBB"
        assert not a.exists()
        assert not b.exists()

    def test_copy_mode_keeps_sources(self, relocator, tmp_path, make_file):
        """Test copy mode leaves sources in place."""
        a = make_file(tmp_path / "src" / "a.ess")
        dest = tmp_path / "Saves"

        result = relocator.relocate([str(a)], str(dest), cut=False)

        assert result.moved == 1
        assert a.exists()
        assert (dest / "a.ess").exists()

    def test_destination_created_for_first_file(self, relocator, tmp_path, make_file):
        """Test that a missing destination is created before placing files."""
        a = make_file(tmp_path / "a.ess")
        dest = tmp_path / "Documents" / "My Games" / "Skyrim" / "Saves"

        relocator.relocate([str(a)], str(dest), cut=True)

        assert dest.is_dir()
        assert (dest / "a.ess").exists()

    def test_overwrites_existing(self, relocator, tmp_path, make_file):
        """Test that the last relocation wins."""
        dest = tmp_path / "Saves"
        make_file(dest / "slot.ess", "old")
        new = make_file(tmp_path / "mod" / "slot.ess", "new")

        result = relocator.relocate([str(new)], str(dest), cut=True)

        assert result.moved == 1
        assert (dest / "slot.ess").read_text() == "new"

    def test_one_bad_file_does_not_stop_batch(self, relocator, tmp_path, make_file):
        """Test that a failing copy is recorded and the rest continue."""
        missing = tmp_path / "src" / "a.ess"
        b = make_file(tmp_path / "src" / "b.ess")
        dest = tmp_path / "Saves"

        result = relocator.relocate([str(missing), str(b)], str(dest), cut=True)

        assert result.moved == 1
        assert len(result.errors) == 1
        assert result.errors[0].stage == "copy"
        assert result.errors[0].source == str(missing)
        assert (dest / "b.ess").exists()

    def test_permission_failure_on_copy(self, relocator, tmp_path, make_file, monkeypatch):
        """Test a copy failure raised by the filesystem."""
        a = make_file(tmp_path / "src" / "a.ess")
        b = make_file(tmp_path / "src" / "b.ess")
        dest = tmp_path / "Saves"

        import save_installer.relocation.relocator as relocator_module
        real_copy = relocator_module.copy_file

        def copy(source, destination):
            if source.endswith("a.ess"):
                raise PermissionError("permission denied")
            real_copy(source, destination)

        monkeypatch.setattr(relocator_module, "copy_file", copy)

        result = relocator.relocate([str(a), str(b)], str(dest), cut=True)

        assert result.moved == 1
        assert a.exists()
        assert not b.exists()
        assert "permission denied" in result.errors[0].message

    def test_delete_failure_recorded(self, relocator, tmp_path, make_file, monkeypatch):
        """Test that a failed delete is recorded but still counts as placed."""
        a = make_file(tmp_path / "src" / "a.ess")
        dest = tmp_path / "Saves"

        import save_installer.relocation.relocator as relocator_module

        def remove(path):
            raise PermissionError("locked")

        monkeypatch.setattr(relocator_module, "remove_file", remove)

        result = relocator.relocate([str(a)], str(dest), cut=True)

        assert result.moved == 1
        assert result.errors[0].stage == "delete"
        assert (dest / "a.ess").exists()

    def test_file_already_in_destination_is_kept(self, relocator, tmp_path, make_file):
        """Test that a save sitting in the save folder is never deleted in cut mode."""
        dest = tmp_path / "My Games" / "Skyrim" / "Saves"
        keep = make_file(dest / "keep.ess", "only copy")

        result = relocator.relocate([str(keep)], str(dest), cut=True)

        assert result.moved == 0
        assert result.skipped == [str(keep)]
        assert result.success is True
        assert keep.read_text() == "only copy"

    def test_same_file_through_other_path_is_kept(self, relocator, tmp_path, make_file):
        """Test that a hard link to the destination is treated as already in place."""
        dest = tmp_path / "Saves"
        keep = make_file(dest / "keep.ess", "only copy")
        alias = tmp_path / "mod" / "keep.ess"
        alias.parent.mkdir()
        os.link(str(keep), str(alias))

        result = relocator.relocate([str(alias)], str(dest), cut=True)

        assert result.moved == 0
        assert keep.read_text() == "only copy"

    def test_relocate_async(self, relocator, tmp_path, make_file):
        """Test the event-loop friendly variant."""
        a = make_file(tmp_path / "src" / "a.ess")
        dest = tmp_path / "Saves"

        result = asyncio.run(relocator.relocate_async([str(a)], str(dest), cut=True))

        assert result.moved == 1
        assert result.relocated == [(str(a), str(dest / "a.ess"))]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
