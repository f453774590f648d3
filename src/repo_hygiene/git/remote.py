"""Comparison of local state against the ``origin`` remote."""

from dataclasses import dataclass, field

import structlog

from repo_hygiene.config.settings import Settings
from repo_hygiene.core.exceptions import GitCommandError, RemoteAccessError
from repo_hygiene.core.models.config import RemoteAccess
from repo_hygiene.core.models.report import PendingLabel
from repo_hygiene.git.credentials import select_credentials
from repo_hygiene.git.repository import Head, Repository, TagRef

logger = structlog.get_logger(__name__)

REMOTE_NAME = "origin"
TAGS_PREFIX = "refs/tags/"
HEADS_PREFIX = "refs/heads/"
PEELED_SUFFIX = "^{}"


@dataclass
class RemoteRefSet:
    """References advertised by a remote, split by namespace."""

    tags: dict[str, str] = field(default_factory=dict)
    heads: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_ls_remote(cls, output: str) -> "RemoteRefSet":
        """Build from ``git ls-remote`` output (``<oid>\\t<refname>`` lines)."""
        refs = cls()
        for line in output.splitlines():
            if "\t" not in line:
                continue
            oid, name = line.split("\t", 1)
            if name.startswith(TAGS_PREFIX):
                if not name.endswith(PEELED_SUFFIX):
                    refs.tags[name] = oid
            elif name.startswith(HEADS_PREFIX):
                refs.heads[name] = oid
        return refs

    @property
    def tag_set(self) -> set[tuple[str, str]]:
        return set(self.tags.items())


def compare_with_remote(
    remote: RemoteRefSet,
    head_oid: str,
    branch_tips: set[str],
    local_tags: list[TagRef],
) -> list[PendingLabel]:
    """Diff remote branch heads and tags against local state."""
    labels: list[PendingLabel] = []

    for oid in remote.heads.values():
        if oid != head_oid and oid not in branch_tips:
            labels.append(PendingLabel.UNFETCHED_COMMITS)
            break

    local_tag_set = {(tag.name, tag.oid) for tag in local_tags}
    remote_tag_set = remote.tag_set
    if not local_tag_set <= remote_tag_set:
        labels.append(PendingLabel.UNPUSHED_TAGS)
    if not remote_tag_set <= local_tag_set:
        labels.append(PendingLabel.UNPULLED_TAGS)
    return labels


class RemoteSynchronizer:
    """Lists ``origin``'s references and compares them with the repository.

    This is the only step that touches the network.
    """

    def __init__(self, strategy: RemoteAccess, settings: Settings) -> None:
        self._strategy = strategy
        self._settings = settings

    def list_remote_refs(self, repo: Repository, url: str) -> RemoteRefSet:
        """Run ``git ls-remote`` against origin.

        Raises:
            RemoteAccessError: connecting or authenticating failed.
        """
        env = {"GIT_TERMINAL_PROMPT": "0"}
        provider = select_credentials(url, self._strategy, self._settings)
        if provider is not None:
            env.update(provider.environment())
        logger.debug(
            "Listing remote references",
            path=str(repo.workdir),
            url=url,
            credentials=type(provider).__name__ if provider else None,
        )
        try:
            output = repo.git.run(
                "ls-remote", REMOTE_NAME, env=env, timeout=self._settings.remote_timeout
            )
        except GitCommandError as e:
            raise RemoteAccessError(str(e), details={"url": url, **e.details}) from e
        return RemoteRefSet.from_ls_remote(output)

    def sync(self, repo: Repository, head: Head) -> list[PendingLabel]:
        """Return the labels describing how the repository differs from origin.

        A repository without an ``origin`` remote yields no labels.
        """
        url = repo.remote_url(REMOTE_NAME)
        if url is None:
            logger.debug("No origin remote", path=str(repo.workdir))
            return []

        remote = self.list_remote_refs(repo, url)
        return compare_with_remote(remote, head.oid, repo.branch_tips(), repo.tags())
