"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
import tempfile
from pathlib import Path

import pytest
from rich.console import Console


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing (symlink-free path)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def capture_console() -> Console:
    """Console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), highlight=False, width=200)


@pytest.fixture
def isolated_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Environment whose config sources all live under temp_dir.

    The system-wide file is redirected as well so that a real
    /etc/safe-rm.conf on the test host has no effect.
    """
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setattr("safe_rm.config.GLOBAL_CONFIG_FILE", str(temp_dir / "safe-rm.conf"))
    env = {"HOME": str(home)}
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    for name in ("SAFE_RM_TARGET", "SAFE_RM_DRY_RUN", "SAFE_RM_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    return env


@pytest.fixture
def protected_structure(temp_dir: Path):
    """Create a data directory with a secret, a hidden entry and a symlink."""
    data = temp_dir / "data"
    data.mkdir()
    (data / "secrets").mkdir()
    (data / "secrets" / "key.pem").write_text("private key")
    (data / ".hidden").write_text("hidden")

    elsewhere = temp_dir / "elsewhere"
    elsewhere.mkdir()
    (data / "link").symlink_to(elsewhere)

    yield data
