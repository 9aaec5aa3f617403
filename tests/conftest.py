"""
Shared fixtures for the save installer tests.

Author: Save Game Installer Project
License: MIT
"""

import pytest

from save_installer.config.schema import Config
from save_installer.core.orchestrator import SweepOrchestrator
from save_installer.core.paths import PathResolver, StaticFolderProvider
from save_installer.notifications.notifier import CallbackNotifier


class RecordingNotifier(CallbackNotifier):
    """Notifier that keeps every delivered notification."""

    def __init__(self, config=None):
        self.sent = []
        super().__init__(lambda kind, message, ms: self.sent.append((kind, message)), config)

    def kinds(self):
        return [kind for kind, _ in self.sent]


@pytest.fixture
def documents(tmp_path):
    path = tmp_path / "Documents"
    path.mkdir()
    return path


@pytest.fixture
def app_data(tmp_path):
    path = tmp_path / "AppData" / "Vortex"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def config():
    cfg = Config()
    cfg.sweep.startup_delay = 0
    cfg.sweep.install_retry_delay = 0
    return cfg


@pytest.fixture
def resolver(config, documents, app_data):
    provider = StaticFolderProvider({
        "documents": str(documents),
        "app_data": str(app_data),
    })
    return PathResolver(provider=provider, config=config.paths, environ={})


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def orchestrator(config, resolver, notifier):
    return SweepOrchestrator(config=config, resolver=resolver, notifier=notifier)


def _make_file(path, content="save data"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def make_file():
    """Create a file (and its parents) with text content."""
    return _make_file
