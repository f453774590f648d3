"""Credential selection for talking to remotes.

The choice is an explicit function of the remote URL's scheme and the
configured :class:`RemoteAccess` strategy. A provider only contributes
environment variables to the ``git ls-remote`` subprocess; git and ssh do
the actual authentication.
"""

import os
import re
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from repo_hygiene.config.settings import Settings
from repo_hygiene.core.exceptions import RemoteAccessError
from repo_hygiene.core.models.config import RemoteAccess

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*)://")
# scp-like syntax: [user@]host:path, where host has no slash before the colon
_SCP_RE = re.compile(r"^(?:[^@/]+@)?[^@/:]+:(?!//)")

_SSH_SCHEMES = {"ssh", "git+ssh", "ssh+git"}
_HTTP_SCHEMES = {"http", "https"}


class UrlScheme(str, Enum):
    HTTP = "http"
    SSH = "ssh"
    OTHER = "other"


def url_scheme(url: str) -> UrlScheme:
    """Classify a remote URL by transport.

    Handles:
    - https://github.com/org/repo.git -> HTTP
    - ssh://git@github.com/org/repo.git -> SSH
    - git@github.com:org/repo.git -> SSH
    - /srv/git/repo.git, file:///srv/git/repo.git, git://host/repo -> OTHER
    """
    match = _SCHEME_RE.match(url)
    if match:
        scheme = match.group(1).lower()
        if scheme in _HTTP_SCHEMES:
            return UrlScheme.HTTP
        if scheme in _SSH_SCHEMES:
            return UrlScheme.SSH
        return UrlScheme.OTHER
    if _SCP_RE.match(url) and not _looks_like_windows_path(url):
        return UrlScheme.SSH
    return UrlScheme.OTHER


def _looks_like_windows_path(url: str) -> bool:
    return len(url) >= 2 and url[1] == ":" and url[0].isalpha()


@dataclass(frozen=True)
class CredentialHelper:
    """Defer to git's configured credential helpers (HTTP remotes)."""

    def environment(self) -> dict[str, str]:
        return {}


@dataclass(frozen=True)
class SshKeyFile:
    """Authenticate with one private key file, ignoring any agent."""

    key_path: Path
    ssh_command: str = "ssh"

    def environment(self) -> dict[str, str]:
        command = [
            self.ssh_command,
            "-i",
            str(self.key_path),
            "-o",
            "IdentitiesOnly=yes",
            "-o",
            "IdentityAgent=none",
            "-o",
            "BatchMode=yes",
        ]
        return {"GIT_SSH_COMMAND": shlex.join(command)}


@dataclass(frozen=True)
class SshAgent:
    """Authenticate through the running SSH agent."""

    ssh_command: str = "ssh"

    def environment(self) -> dict[str, str]:
        if not os.environ.get("SSH_AUTH_SOCK"):
            raise RemoteAccessError("no SSH agent available (SSH_AUTH_SOCK is not set)")
        return {"GIT_SSH_COMMAND": shlex.join([self.ssh_command, "-o", "BatchMode=yes"])}


CredentialProvider = CredentialHelper | SshKeyFile | SshAgent


def find_ssh_key(candidates: list[Path]) -> Path | None:
    """Return the first existing private key file."""
    for path in candidates:
        if path.is_file():
            return path
    return None


def select_credentials(
    url: str, strategy: RemoteAccess, settings: Settings
) -> CredentialProvider | None:
    """Pick the credential provider for ``url`` under ``strategy``.

    HTTP(S) remotes always use the credential helper. SSH remotes use a key
    file or the agent depending on the strategy. None means no provider is
    installed and git runs with its own defaults.
    """
    scheme = url_scheme(url)
    if scheme is UrlScheme.HTTP:
        return CredentialHelper()
    if scheme is not UrlScheme.SSH:
        return None
    if strategy is RemoteAccess.SSH_KEY:
        key = find_ssh_key(settings.ssh_key_candidates)
        return SshKeyFile(key, settings.ssh_command) if key else None
    if strategy is RemoteAccess.SSH_AGENT:
        return SshAgent(settings.ssh_command)
    return None
