"""Shared fixtures for buildlib tests."""

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from buildlib.config import BuildConfig, get_config
from buildlib.shell.types import CommandResult


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep tests away from any buildlib.yaml in the developer's environment."""
    monkeypatch.setenv("BUILDLIB_CONFIG", str(tmp_path / "missing-buildlib.yaml"))
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def config() -> BuildConfig:
    return BuildConfig()


@pytest.fixture
def result() -> Callable[..., CommandResult]:
    """Factory for CommandResult values."""

    def make(
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        cmd: list[str] | None = None,
        raw_stdout: bytes = b"",
    ) -> CommandResult:
        return CommandResult(
            success=returncode == 0,
            stdout=stdout,
            stderr=stderr,
            returncode=returncode,
            cmd=cmd or [],
            raw_stdout=raw_stdout,
        )

    return make


@pytest.fixture
def completed() -> Callable[..., subprocess.CompletedProcess[str]]:
    """Factory for subprocess.CompletedProcess values."""

    def make(
        returncode: int = 0, stdout: str = "", stderr: str = ""
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(
            args=[], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return make


@pytest.fixture
def mock_runner() -> MagicMock:
    """A CommandRunner stand-in with no configured behaviour."""
    return MagicMock()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A real git repository with one commit on ``main``."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)

    git("init", "-q")
    git("checkout", "-q", "-b", "main")
    git("config", "user.email", "ci@example.com")
    git("config", "user.name", "CI")
    git("config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("hello\n")
    git("add", "README.md")
    git("commit", "-q", "-m", "initial")
    return repo
