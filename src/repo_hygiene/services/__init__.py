"""Application services for repo-hygiene."""

from repo_hygiene.services.crawler import Crawler

__all__ = ["Crawler"]
