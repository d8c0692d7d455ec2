from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest
from git import Repo

from gitshell.config import GitShellConfig


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    Logs go to stderr at WARNING level so they neither mix with test stdout
    nor flood the output.
    """
    from gitshell.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture(autouse=True)
def isolated_git_env(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Isolate git and gitshell from the developer's configuration.

    Points HOME at an empty directory, disables the system gitconfig and
    supplies a commit identity through the environment.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_MERGE_AUTOEDIT", "no")
    return home


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all GITSHELL_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("GITSHELL_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def config(clean_env: None, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> GitShellConfig:
    """Default settings, unaffected by any gitshell.yaml in the test cwd."""
    monkeypatch.chdir(tmp_path)
    return GitShellConfig()


@pytest.fixture
def worktree_repo(tmp_path: Path) -> Path:
    """Create a worktree repository with one commit.

    Returns:
        Path to the repository root.
    """
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path)

    readme = repo_path / "README.md"
    readme.write_text("# Test Repo\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.close()

    return repo_path


@pytest.fixture
def bare_repo(tmp_path: Path) -> Path:
    """Create an empty bare repository.

    Returns:
        Path to the bare repository.
    """
    remote_path = tmp_path / "remote.git"
    Repo.init(remote_path, bare=True).close()
    return remote_path


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory so tests that
    call os.chdir() do not affect other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)
