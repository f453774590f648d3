"""Git integration module for repo-hygiene."""

from repo_hygiene.git.client import GitClient
from repo_hygiene.git.remote import RemoteRefSet, RemoteSynchronizer
from repo_hygiene.git.repository import Head, Repository
from repo_hygiene.git.walker import locate_repositories, walk_directories

__all__ = [
    "GitClient",
    "Head",
    "RemoteRefSet",
    "RemoteSynchronizer",
    "Repository",
    "locate_repositories",
    "walk_directories",
]
