"""Directory walking and repository discovery."""

import os
from collections.abc import Iterator
from pathlib import Path

import structlog

from repo_hygiene.core.exceptions import RepositoryNotFoundError
from repo_hygiene.git.repository import GIT_METADATA_DIR, Repository

logger = structlog.get_logger(__name__)


def walk_directories(root: Path | str) -> Iterator[Path]:
    """Yield ``root`` and every directory below it, depth first.

    Directories come in filesystem enumeration order. ``.git`` directories
    are not descended into and unreadable directories are skipped.
    """
    for dirpath, dirnames, _ in os.walk(root, topdown=True, onerror=_skip_unreadable):
        dirnames[:] = [name for name in dirnames if name != GIT_METADATA_DIR]
        yield Path(dirpath)


def _skip_unreadable(error: OSError) -> None:
    logger.debug("Skipping unreadable directory", path=error.filename, error=str(error))


def locate_repositories(root: Path | str, git_executable: str = "git") -> Iterator[Repository]:
    """Yield a handle for every non-bare repository at or below ``root``.

    Handles are produced one at a time; a caller should be done with one
    before asking for the next.
    """
    for candidate in walk_directories(root):
        try:
            repo = Repository.open(candidate, git_executable)
        except RepositoryNotFoundError as e:
            if (candidate / GIT_METADATA_DIR).exists():
                logger.debug("Skipping candidate", path=str(candidate), reason=str(e))
            continue
        yield repo
