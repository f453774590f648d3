"""Read-only access to a single non-bare git repository."""

import os
from dataclasses import dataclass
from pathlib import Path

from repo_hygiene.core.exceptions import (
    GitCommandError,
    HeadResolutionError,
    RepositoryNotFoundError,
    StatusError,
    UnbornBranchError,
)
from repo_hygiene.git.client import GitClient
from repo_hygiene.git.status import STATUS_ARGS, StatusEntry, parse_porcelain_v2

GIT_METADATA_DIR = ".git"


@dataclass(frozen=True)
class Head:
    """The resolved HEAD of a repository.

    ``ref_name`` is the branch HEAD points at (``None`` when detached) and
    ``commit`` the commit it resolves to (``None`` when HEAD resolves to an
    object that is not a commit).
    """

    ref_name: str | None
    oid: str
    commit: str | None


@dataclass(frozen=True)
class TagRef:
    name: str
    oid: str
    # Object an annotated tag points at; None for lightweight tags
    peeled: str | None = None

    def points_at(self, oid: str) -> bool:
        return oid in (self.oid, self.peeled)


@dataclass(frozen=True)
class Upstream:
    name: str
    commit: str | None


class Repository:
    """Handle on one repository, owned by a single inspection.

    Open with :meth:`open`; the constructor does no validation.
    """

    def __init__(self, workdir: Path, git_dir: Path, client: GitClient) -> None:
        self._workdir = workdir
        self._git_dir = git_dir
        self._git = client

    @classmethod
    def open(cls, path: Path | str, git_executable: str = "git") -> "Repository":
        """Open the repository whose working tree is ``path``.

        Raises:
            RepositoryNotFoundError: ``path`` is not the top of a working
                tree, or the repository is bare.
        """
        path = Path(path)
        if not (path / GIT_METADATA_DIR).exists():
            raise RepositoryNotFoundError(f"no {GIT_METADATA_DIR} in {path}")

        client = GitClient(path, git_executable)
        try:
            is_bare, git_dir = client.run(
                "rev-parse", "--is-bare-repository", "--absolute-git-dir"
            ).splitlines()
        except (GitCommandError, ValueError) as e:
            raise RepositoryNotFoundError(f"could not open repository at {path}: {e}") from e
        if is_bare == "true":
            raise RepositoryNotFoundError(f"bare repository at {path}")

        # Discovery from the working tree has to lead back to this same
        # repository; anything else is a directory nested inside another one.
        toplevel = client.try_run("rev-parse", "--show-toplevel")
        if toplevel is None or not _same_path(toplevel, path):
            raise RepositoryNotFoundError(
                f"{path} is not the top of a working tree",
                details={"toplevel": toplevel},
            )
        return cls(path, Path(git_dir), client)

    @property
    def workdir(self) -> Path:
        return self._workdir

    @property
    def git_dir(self) -> Path:
        return self._git_dir

    @property
    def git(self) -> GitClient:
        return self._git

    def status(self) -> list[StatusEntry]:
        """Return the working tree status entries.

        Raises:
            StatusError: git status failed.
        """
        try:
            output = self._git.run(*STATUS_ARGS, strip=False)
        except GitCommandError as e:
            raise StatusError(str(e), details=e.details) from e
        return parse_porcelain_v2(output)

    def resolve_head(self) -> Head:
        """Resolve HEAD.

        Raises:
            UnbornBranchError: HEAD names a branch without commits.
            HeadResolutionError: HEAD could not be resolved otherwise.
        """
        ref_name = self._git.try_run("symbolic-ref", "-q", "HEAD") or None
        try:
            oid = self._git.run("rev-parse", "-q", "--verify", "HEAD")
        except GitCommandError as e:
            if ref_name and not self._ref_exists(ref_name):
                raise UnbornBranchError(
                    f"reference '{ref_name}' not found",
                    details={"ref": ref_name},
                ) from e
            raise HeadResolutionError(
                str(e) if e.stderr else "could not resolve HEAD",
                details=e.details,
            ) from e
        commit = self._git.try_run("rev-parse", "-q", "--verify", "HEAD^{commit}")
        return Head(ref_name=ref_name, oid=oid, commit=commit or None)

    def tags(self) -> list[TagRef]:
        """List local tags with their target (and peeled) object ids."""
        output = self._git.run(
            "for-each-ref",
            "--format=%(refname)%00%(objectname)%00%(*objectname)",
            "refs/tags",
        )
        tags = []
        for line in output.splitlines():
            name, oid, peeled = line.split("\0")
            tags.append(TagRef(name=name, oid=oid, peeled=peeled or None))
        return tags

    def upstream(self, ref_name: str) -> Upstream | None:
        """Return the upstream of branch ``ref_name``.

        None when no upstream is configured or its reference does not exist
        locally (for example, it was never fetched).
        """
        name = self._git.try_run("for-each-ref", "--format=%(upstream)", ref_name)
        if not name or not self._ref_exists(name):
            return None
        commit = self._git.try_run("rev-parse", "-q", "--verify", f"{name}^{{commit}}")
        return Upstream(name=name, commit=commit or None)

    def ahead_behind(self, local: str, upstream: str) -> tuple[int, int]:
        """Count commits reachable only from ``local`` and only from ``upstream``."""
        output = self._git.run("rev-list", "--left-right", "--count", f"{local}...{upstream}")
        ahead, behind = output.split()
        return int(ahead), int(behind)

    def branch_tips(self) -> set[str]:
        """Object ids at the tip of every local and remote-tracking branch."""
        output = self._git.run("for-each-ref", "--format=%(objectname)", "refs/heads", "refs/remotes")
        return set(output.split())

    def remote_url(self, remote: str) -> str | None:
        """Return the URL of ``remote``, or None if it is not configured."""
        return self._git.try_run("remote", "get-url", remote) or None

    def _ref_exists(self, ref_name: str) -> bool:
        return self._git.try_run("show-ref", "--verify", "-q", ref_name) is not None


def _same_path(a: Path | str, b: Path | str) -> bool:
    return os.path.normcase(os.path.realpath(a)) == os.path.normcase(os.path.realpath(b))
