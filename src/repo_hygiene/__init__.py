"""repo-hygiene: find git repositories with pending actions."""

from repo_hygiene.core.models import CrawlConfig, CrawlResult, PendingLabel, RemoteAccess
from repo_hygiene.services.crawler import Crawler

__version__ = "0.1.0"

__all__ = [
    "Crawler",
    "CrawlConfig",
    "CrawlResult",
    "PendingLabel",
    "RemoteAccess",
]
