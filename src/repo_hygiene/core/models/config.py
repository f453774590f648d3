"""Crawl configuration models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RemoteAccess(str, Enum):
    """How to authenticate when comparing against the ``origin`` remote.

    HTTP(S) remotes always go through git's credential helpers; the
    strategy only decides what happens for SSH remotes.
    """

    CREDENTIAL_HELPER = "credential-helper"
    SSH_KEY = "ssh-key"
    SSH_AGENT = "ssh-agent"


class CrawlConfig(BaseModel):
    """Options shared by every repository inspection of a crawl."""

    model_config = ConfigDict(frozen=True)

    # Only report repositories with pending actions (or errors)
    pending_only: bool = False
    ignore_untracked: bool = False
    # Drop repositories whose branch has no commits yet
    ignore_uncommitted_repos: bool = False
    absolute_paths: bool = False
    # Report HEAD commits that no tag points at
    untagged_heads: bool = False
    # None disables the comparison against origin
    remote_access: RemoteAccess | None = None

    @property
    def checks_remote(self) -> bool:
        return self.remote_access is not None
