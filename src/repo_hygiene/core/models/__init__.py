"""Domain models for repo-hygiene."""

from repo_hygiene.core.models.config import CrawlConfig, RemoteAccess
from repo_hygiene.core.models.report import CrawlResult, PendingLabel

__all__ = [
    "CrawlConfig",
    "RemoteAccess",
    "CrawlResult",
    "PendingLabel",
]
