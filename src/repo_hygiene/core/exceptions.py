"""Exception hierarchy for repo-hygiene."""

from typing import Any


class RepoHygieneError(Exception):
    """Base class for all repo-hygiene errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(RepoHygieneError):
    """Invalid or incomplete configuration."""


class GitCommandError(RepoHygieneError):
    """A git subprocess could not be run or exited with a failure."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(
            message,
            details={"command": command or [], "returncode": returncode, "stderr": stderr},
        )
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr


class RepositoryNotFoundError(RepoHygieneError):
    """The path is not the working tree of a non-bare repository."""


class StatusError(RepoHygieneError):
    """The working tree status could not be computed."""


class HeadResolutionError(RepoHygieneError):
    """HEAD could not be resolved to a commit."""


class UnbornBranchError(HeadResolutionError):
    """HEAD names a branch that has no commits yet."""


class RemoteAccessError(RepoHygieneError):
    """Connecting to or authenticating against a remote failed."""


class RepositorySkipped(RepoHygieneError):
    """The repository is dropped from the results without an error."""
