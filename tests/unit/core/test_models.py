"""Tests for core domain models."""

import pytest
from pydantic import ValidationError

from factories import (
    CrawlConfigFactory,
    CrawlResultFactory,
    FailedResultFactory,
    PendingResultFactory,
)
from repo_hygiene.core.models.config import CrawlConfig, RemoteAccess
from repo_hygiene.core.models.report import CrawlResult, PendingLabel


@pytest.mark.unit
class TestPendingLabel:
    """Tests for PendingLabel."""

    def test_display_values(self) -> None:
        assert PendingLabel.UNTRACKED_FILES.value == "untracked files"
        assert PendingLabel.UNTAGGED_HEAD.value == "untagged HEAD"
        assert PendingLabel.OUTDATED_BRANCH.value == "outdated branch"

    def test_vocabulary_is_closed(self) -> None:
        assert len(PendingLabel) == 11
        with pytest.raises(ValueError):
            PendingLabel("unknown state")


@pytest.mark.unit
class TestCrawlConfig:
    """Tests for CrawlConfig."""

    def test_defaults(self) -> None:
        config = CrawlConfig()
        assert config.pending_only is False
        assert config.ignore_untracked is False
        assert config.remote_access is None
        assert config.checks_remote is False

    def test_remote_access_from_string(self) -> None:
        config = CrawlConfig(remote_access="ssh-agent")
        assert config.remote_access is RemoteAccess.SSH_AGENT
        assert config.checks_remote is True

    def test_config_is_frozen(self) -> None:
        config = CrawlConfigFactory()
        with pytest.raises(ValidationError):
            config.pending_only = True

    def test_invalid_remote_access(self) -> None:
        with pytest.raises(ValidationError):
            CrawlConfig(remote_access="password")


@pytest.mark.unit
class TestCrawlResult:
    """Tests for CrawlResult."""

    def test_clean_result(self) -> None:
        result = CrawlResultFactory(path=".")
        assert result.is_clean
        assert not result.has_pending
        assert not result.failed

    def test_pending_result(self) -> None:
        result = PendingResultFactory()
        assert result.has_pending
        assert not result.is_clean
        assert result.pending == [
            PendingLabel.UNCOMMITTED_CHANGES,
            PendingLabel.UNTRACKED_FILES,
        ]

    def test_failed_result(self) -> None:
        result = FailedResultFactory()
        assert result.failed
        assert result.pending is None

    def test_pending_from_strings(self) -> None:
        result = CrawlResult(path="a", pending=["untracked files"])
        assert result.pending == [PendingLabel.UNTRACKED_FILES]

    def test_empty_pending_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CrawlResult(path="a", pending=[])

    def test_duplicate_labels_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CrawlResult(
                path="a",
                pending=[PendingLabel.ADDED_FILES, PendingLabel.ADDED_FILES],
            )

    def test_error_with_pending_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CrawlResult(path="a", pending=[PendingLabel.ADDED_FILES], error="boom")

    def test_to_dict_uses_label_strings(self) -> None:
        result = CrawlResult(
            path="src/app",
            pending=[PendingLabel.UNPUSHED_COMMITS, PendingLabel.UNTAGGED_HEAD],
        )
        assert result.to_dict() == {
            "path": "src/app",
            "pending": ["unpushed commits", "untagged HEAD"],
            "error": None,
        }

    def test_to_dict_error(self) -> None:
        result = CrawlResult(path=".", error="reference 'refs/heads/main' not found")
        assert result.to_dict() == {
            "path": ".",
            "pending": None,
            "error": "reference 'refs/heads/main' not found",
        }
