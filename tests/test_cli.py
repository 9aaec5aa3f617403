"""
Tests for the command line interface.

Author: Save Game Installer Project
License: MIT
"""

import os

import pytest
import yaml

from save_installer.cli import build_parser, main

ENV_VARS = (
    "CONFIG_PATH", "APP_LOG_LEVEL", "SGI_DEBUG", "SGI_MOVE",
    "SGI_DOCUMENTS", "SGI_APP_DATA", "SGI_INSTALL", "SGI_PERIODIC_SWEEP",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path, documents, app_data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "app": {"log_level": "WARNING"},
        "sweep": {"startup_delay": 0, "install_retry_delay": 0},
        "paths": {"documents": str(documents), "app_data": str(app_data)},
    }))
    return str(path)


class TestParser:
    """Test argument parsing."""

    def test_install_path_is_optional(self):
        args = build_parser().parse_args(["install", "skyrimse"])
        assert args.game == "skyrimse"
        assert args.path is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """Test commands end to end against temporary folders."""

    def test_games_lists_destinations(self, config_file, documents, capsys):
        assert main(["--config", config_file, "games"]) == 0

        out = capsys.readouterr().out
        assert "fallout4" in out
        assert os.path.join(str(documents), "My Games", "Fallout4", "Saves") in out

    def test_sweep_moves_saves(self, config_file, documents, app_data, make_file, capsys):
        make_file(app_data / "skyrimse" / "mods" / "SaveMod" / "Data" / "Saves" / "quick.ess")

        assert main(["--config", config_file, "sweep"]) == 0

        target = documents / "My Games" / "Skyrim Special Edition" / "Saves" / "quick.ess"
        assert target.exists()
        assert not (app_data / "skyrimse" / "mods" / "SaveMod" / "Data" / "Saves" / "quick.ess").exists()
        assert "startup: moved 1 file(s)" in capsys.readouterr().out

    def test_copy_flag_keeps_source(self, config_file, documents, app_data, make_file):
        source = make_file(app_data / "fallout4" / "mods" / "SaveMod" / "Saves" / "Save1.fos")

        assert main(["--config", config_file, "--copy", "sweep", "--game", "fallout4"]) == 0

        assert source.exists()
        assert (documents / "My Games" / "Fallout4" / "Saves" / "Save1.fos").exists()

    def test_install_with_path(self, config_file, documents, tmp_path, make_file, capsys):
        mod = tmp_path / "Downloads" / "Mod"
        make_file(mod / "Data" / "a.ess")
        make_file(mod / "Data" / "a.skse")

        assert main(["--config", config_file, "install", "skyrimse", str(mod)]) == 0

        saves = documents / "My Games" / "Skyrim Special Edition" / "Saves"
        assert sorted(p.name for p in saves.iterdir()) == ["a.ess", "a.skse"]
        assert "did-install-mod: moved 2 file(s)" in capsys.readouterr().out

    def test_install_unknown_game(self, config_file, documents, capsys):
        assert main(["--config", config_file, "install", "witcher3", "/nowhere"]) == 0

        assert "moved 0 file(s)" in capsys.readouterr().out
        assert not (documents / "My Games").exists()

    def test_deploy(self, config_file, capsys):
        assert main(["--config", config_file, "deploy"]) == 0
        assert "did-deploy: moved 0 file(s)" in capsys.readouterr().out

    def test_invalid_config(self, tmp_path, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text("sweep:\n  startup_delay: -1\n")

        assert main(["--config", str(bad), "games"]) == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_unknown_log_level(self, config_file, capsys):
        assert main(["--config", config_file, "--log-level", "chatty", "games"]) == 2
        assert "Unknown log level" in capsys.readouterr().err
