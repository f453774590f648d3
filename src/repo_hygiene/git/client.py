"""Thin wrapper around the git command-line tool."""

import os
import subprocess
from pathlib import Path

import structlog

from repo_hygiene.core.exceptions import GitCommandError

logger = structlog.get_logger(__name__)

# Variables that would redirect git away from the repository in ``cwd``
_REPOSITORY_ENV_VARS = (
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_OBJECT_DIRECTORY",
    "GIT_ALTERNATE_OBJECT_DIRECTORIES",
    "GIT_COMMON_DIR",
    "GIT_NAMESPACE",
    "GIT_PREFIX",
)


def git_environment(extra: dict[str, str] | None = None) -> dict[str, str]:
    """Build the environment for a git subprocess."""
    env = {k: v for k, v in os.environ.items() if k not in _REPOSITORY_ENV_VARS}
    env["LC_ALL"] = "C"
    if extra:
        env.update(extra)
    return env


class GitClient:
    """Runs git commands against a single directory.

    Uses subprocess + git CLI directly (no gitpython dependency).
    """

    def __init__(self, path: Path | str, git_executable: str = "git") -> None:
        self._path = Path(path)
        self._git = git_executable

    @property
    def path(self) -> Path:
        return self._path

    def run(
        self,
        *args: str,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        strip: bool = True,
    ) -> str:
        """Run a git command and return stdout.

        Raises:
            GitCommandError: git could not be started, timed out or exited
                with a non-zero status.
        """
        command = [self._git, *args]
        try:
            result = subprocess.run(
                command,
                cwd=self._path,
                capture_output=True,
                # Paths in git output are raw bytes; keep undecodable ones intact
                encoding="utf-8",
                errors="surrogateescape",
                env=git_environment(env),
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise GitCommandError(
                f"git executable not found: {self._git}", command=command
            ) from e
        except NotADirectoryError as e:
            raise GitCommandError(f"not a directory: {self._path}", command=command) from e
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(
                f"git {args[0]} timed out after {timeout}s", command=command
            ) from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise GitCommandError(
                _first_error_line(stderr) or f"git {args[0]} exited with status {result.returncode}",
                command=command,
                returncode=result.returncode,
                stderr=stderr,
            )
        return result.stdout.strip() if strip else result.stdout

    def try_run(self, *args: str) -> str | None:
        """Run a git command, returning None instead of raising on failure."""
        try:
            return self.run(*args)
        except GitCommandError as e:
            logger.debug("git command failed", args=list(args), path=str(self._path), error=str(e))
            return None


def _first_error_line(stderr: str) -> str:
    """Pick the most useful line of git's stderr as an error message."""
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    for line in lines:
        for prefix in ("fatal: ", "error: "):
            if line.startswith(prefix):
                return line[len(prefix):]
    return lines[0] if lines else ""
