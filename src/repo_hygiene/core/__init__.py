"""Core domain models and exceptions for repo-hygiene."""

from repo_hygiene.core.exceptions import (
    ConfigurationError,
    GitCommandError,
    HeadResolutionError,
    RemoteAccessError,
    RepoHygieneError,
    RepositoryNotFoundError,
    RepositorySkipped,
    StatusError,
    UnbornBranchError,
)
from repo_hygiene.core.models import (
    CrawlConfig,
    CrawlResult,
    PendingLabel,
    RemoteAccess,
)

__all__ = [
    # Models
    "CrawlConfig",
    "CrawlResult",
    "PendingLabel",
    "RemoteAccess",
    # Exceptions
    "RepoHygieneError",
    "ConfigurationError",
    "GitCommandError",
    "RepositoryNotFoundError",
    "StatusError",
    "HeadResolutionError",
    "UnbornBranchError",
    "RemoteAccessError",
    "RepositorySkipped",
]
