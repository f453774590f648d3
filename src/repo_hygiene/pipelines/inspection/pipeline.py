"""Per-repository inspection pipeline."""

import structlog

from repo_hygiene.config.settings import Settings
from repo_hygiene.core.exceptions import (
    GitCommandError,
    RepoHygieneError,
    RepositorySkipped,
    UnbornBranchError,
)
from repo_hygiene.core.models.config import CrawlConfig
from repo_hygiene.core.models.report import CrawlResult, PendingLabel
from repo_hygiene.git.remote import RemoteSynchronizer
from repo_hygiene.git.repository import Head, Repository
from repo_hygiene.git.status import classify_entries

logger = structlog.get_logger(__name__)


class InspectionPipeline:
    """Pipeline classifying the pending actions of one repository.

    Runs the inspection steps in order:
    1. Classify the working tree status
    2. Resolve HEAD (unborn branches handled by policy)
    3. Check whether HEAD is tagged (optional)
    4. Compare the branch with its upstream
    5. Compare with the origin remote (optional, network bound)

    Errors end the inspection and become part of the result; they never
    propagate to the caller.
    """

    def __init__(self, config: CrawlConfig, settings: Settings) -> None:
        self._config = config
        self._remote = (
            RemoteSynchronizer(config.remote_access, settings)
            if config.remote_access is not None
            else None
        )

    def inspect(self, repo: Repository, path: str) -> CrawlResult | None:
        """Inspect ``repo`` and build its result, reported under ``path``.

        Returns None when the repository is filtered out.
        """
        try:
            labels = self._collect_labels(repo)
        except RepositorySkipped as e:
            logger.debug("Repository skipped", path=path, reason=str(e))
            return None
        except UnbornBranchError as e:
            if self._config.ignore_uncommitted_repos:
                logger.debug("Ignoring repository without commits", path=path)
                return None
            return self._failed(path, e)
        except RepoHygieneError as e:
            return self._failed(path, e)

        if labels:
            return CrawlResult(path=path, pending=labels)
        if not self._config.pending_only:
            return CrawlResult(path=path)
        return None

    def _collect_labels(self, repo: Repository) -> list[PendingLabel]:
        labels: dict[PendingLabel, None] = dict.fromkeys(
            classify_entries(repo.status(), self._config.ignore_untracked)
        )

        head = repo.resolve_head()
        if head.commit is None:
            raise RepositorySkipped(f"HEAD does not point at a commit ({head.oid})")

        if self._config.untagged_heads and not self._check_head_tagged(repo, head):
            labels.setdefault(PendingLabel.UNTAGGED_HEAD)

        for label in self._compare_upstream(repo, head):
            labels.setdefault(label)

        if self._remote is not None:
            for label in self._remote.sync(repo, head):
                labels.setdefault(label)

        return list(labels)

    def _check_head_tagged(self, repo: Repository, head: Head) -> bool:
        """Whether any tag points at HEAD's commit.

        Tags that cannot be listed count as a match so no label is added.
        """
        try:
            tags = repo.tags()
        except GitCommandError as e:
            logger.debug("Could not list tags", path=str(repo.workdir), error=str(e))
            return True
        return any(tag.points_at(head.commit) for tag in tags)

    def _compare_upstream(self, repo: Repository, head: Head) -> list[PendingLabel]:
        if head.ref_name is None:
            return []
        upstream = repo.upstream(head.ref_name)
        if upstream is None:
            return []
        if upstream.commit is None:
            raise RepositorySkipped(f"upstream {upstream.name} does not point at a commit")
        if upstream.commit == head.commit:
            return []

        try:
            ahead, behind = repo.ahead_behind(head.commit, upstream.commit)
        except (GitCommandError, ValueError) as e:
            logger.debug("Could not count commits", path=str(repo.workdir), error=str(e))
            return []

        labels = []
        if ahead > 0:
            labels.append(PendingLabel.UNPUSHED_COMMITS)
        if behind > 0:
            labels.append(PendingLabel.OUTDATED_BRANCH)
        return labels

    @staticmethod
    def _failed(path: str, error: RepoHygieneError) -> CrawlResult:
        logger.info(
            "Repository inspection failed",
            path=path,
            error=str(error),
            error_type=type(error).__name__,
        )
        return CrawlResult(path=path, error=str(error))
