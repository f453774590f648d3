"""Crawl result models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class PendingLabel(str, Enum):
    """A category of outstanding action on a repository.

    The values are the strings shown to users and written to JSON output.
    """

    UNCOMMITTED_CHANGES = "uncommitted changes"
    UNTRACKED_FILES = "untracked files"
    ADDED_FILES = "added files"
    DELETED_FILES = "deleted files"
    RENAMED_FILES = "renamed files"
    UNPUSHED_COMMITS = "unpushed commits"
    OUTDATED_BRANCH = "outdated branch"
    UNTAGGED_HEAD = "untagged HEAD"
    UNFETCHED_COMMITS = "unfetched commits"
    UNPUSHED_TAGS = "unpushed tags"
    UNPULLED_TAGS = "unpulled tags"


class CrawlResult(BaseModel):
    """Outcome of inspecting one repository.

    A result is in exactly one of three states:

    - clean: neither ``pending`` nor ``error`` is set
    - pending: ``pending`` holds at least one label
    - failed: ``error`` holds the message, ``pending`` is always ``None``
    """

    path: str
    pending: list[PendingLabel] | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_state(self) -> "CrawlResult":
        if self.pending is not None:
            if not self.pending:
                raise ValueError("pending must be None or non-empty")
            if len(set(self.pending)) != len(self.pending):
                raise ValueError("pending must not contain duplicate labels")
            if self.error is not None:
                raise ValueError("a failed result cannot carry pending labels")
        return self

    @property
    def is_clean(self) -> bool:
        return self.pending is None and self.error is None

    @property
    def has_pending(self) -> bool:
        return self.pending is not None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with labels rendered as their display strings."""
        return self.model_dump(mode="json")
