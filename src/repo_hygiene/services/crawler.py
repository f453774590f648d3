"""Crawling service."""

import os
from collections.abc import Iterator
from pathlib import Path

import structlog

from repo_hygiene.config.settings import Settings, get_settings
from repo_hygiene.core.models.config import CrawlConfig
from repo_hygiene.core.models.report import CrawlResult
from repo_hygiene.git.walker import locate_repositories
from repo_hygiene.pipelines.inspection import InspectionPipeline

logger = structlog.get_logger(__name__)


class Crawler:
    """Crawls a directory tree and reports the state of each repository found.

    Iterating a crawler starts a fresh walk every time. Each walk is lazy:
    a repository is inspected only when the next result is requested, so
    stopping early skips the remaining repositories.

    Progress is logged with structlog; call
    :func:`repo_hygiene.config.logging.configure_logging` first, or structlog
    falls back to printing every event on stdout.
    """

    def __init__(
        self,
        root: Path | str = ".",
        config: CrawlConfig | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._root = Path(root).expanduser()
        self._config = config or CrawlConfig()
        self._settings = settings or get_settings()
        self._pipeline = InspectionPipeline(self._config, self._settings)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config(self) -> CrawlConfig:
        return self._config

    def crawl(self) -> Iterator[CrawlResult]:
        """Yield one result per reported repository, in discovery order."""
        logger.debug("Starting crawl", root=str(self._root), config=self._config.model_dump())
        for repo in locate_repositories(self._root, self._settings.git_executable):
            result = self._pipeline.inspect(repo, self.render_path(repo.workdir))
            if result is not None:
                yield result

    def __iter__(self) -> Iterator[CrawlResult]:
        return self.crawl()

    def render_path(self, workdir: Path) -> str:
        """Render a working tree path the way it is reported."""
        absolute = Path(os.path.abspath(workdir))
        if self._config.absolute_paths:
            return str(absolute)
        return make_relative(absolute, Path(os.path.abspath(self._root)))


def make_relative(path: Path, root: Path) -> str:
    """Express ``path`` relative to ``root``; ``.`` for the root itself.

    Paths outside ``root`` are returned unchanged.
    """
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    return str(relative) if relative.parts else "."
