"""Pytest configuration and shared fixtures."""

import sys
import tempfile
import pytest
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.fixtures.sample_changes import (
    FakeGit,
    RecordingNotifier,
    get_sample_config,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_home(temp_dir, monkeypatch):
    """Point CODE_PUSHER_HOME at an empty directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("CODE_PUSHER_HOME", str(home))
    return home


@pytest.fixture
def log_dir(temp_dir):
    """Existing directory for the attempt log."""
    path = temp_dir / "logs"
    path.mkdir()
    return path


@pytest.fixture
def repo_dir(temp_dir):
    """Directory that looks like a git working tree."""
    path = temp_dir / "workspace"
    (path / ".git").mkdir(parents=True)
    return path


@pytest.fixture
def notifier():
    """Notifier that records notices."""
    return RecordingNotifier()


@pytest.fixture
def fake_git():
    """Dirty working tree with two changed files."""
    return FakeGit(
        files=["src/a.ts", "src/b.ts"],
        size_summary=" 2 files changed, 4 insertions(+)\n"
    )


@pytest.fixture
def sample_config(log_dir):
    """Sample configuration logging into log_dir."""
    return get_sample_config(log_dir=str(log_dir))
