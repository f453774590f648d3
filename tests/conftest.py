"""Pytest configuration and fixtures."""

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from repo_hygiene.config.settings import Settings, get_settings


def run_git(cwd: Path, *args: str) -> str:
    """Run a git command for test setup and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(
    repo: Path, name: str = "README.md", content: str = "content\n", message: str | None = None
) -> str:
    """Write a file, commit it and return the new HEAD commit."""
    file_path = repo / name
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    run_git(repo, "add", name)
    run_git(repo, "commit", "-q", "-m", message or f"Update {name}")
    return run_git(repo, "rev-parse", "HEAD")


@pytest.fixture(autouse=True)
def isolated_git(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep git away from the user's configuration and identity."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_CONFIG_GLOBAL", raising=False)
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    for role in ("AUTHOR", "COMMITTER"):
        monkeypatch.setenv(f"GIT_{role}_NAME", "Test")
        monkeypatch.setenv(f"GIT_{role}_EMAIL", "test@test.com")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing SSH lookups at an empty directory."""
    ssh_dir = tmp_path / "ssh"
    ssh_dir.mkdir()
    return Settings(ssh_dir=str(ssh_dir))


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Root directory to crawl."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def make_repo(workspace: Path) -> Callable[..., Path]:
    """Create an empty repository below the workspace."""

    def _make(name: str = "repo") -> Path:
        repo_path = workspace / name
        repo_path.mkdir(parents=True)
        run_git(repo_path, "init", "-q", "-b", "main")
        return repo_path

    return _make


@pytest.fixture
def git_repo(make_repo: Callable[..., Path]) -> Path:
    """A repository with one commit and a clean working tree."""
    repo_path = make_repo("test-repo")
    commit_file(repo_path, "README.md", "# Test Repo\n", "Initial commit")
    return repo_path


@pytest.fixture
def make_origin(tmp_path: Path) -> Callable[[Path], Path]:
    """Attach a bare ``origin`` (outside the workspace) and push main to it."""

    def _make(repo_path: Path) -> Path:
        origin = tmp_path / "remotes" / f"{repo_path.name}.git"
        origin.mkdir(parents=True)
        run_git(origin, "init", "-q", "--bare", "-b", "main")
        run_git(repo_path, "remote", "add", "origin", str(origin))
        run_git(repo_path, "push", "-q", "-u", "origin", "main")
        return origin

    return _make
