"""Tests for the command-line interface."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import commit_file
from repo_hygiene.cli import cli, format_human
from repo_hygiene.core.models.report import CrawlResult, PendingLabel


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.mark.unit
class TestFormatHuman:
    """Tests for format_human."""

    def test_clean(self) -> None:
        assert format_human(CrawlResult(path="repo"), color=False) == "repo"

    def test_pending(self) -> None:
        result = CrawlResult(
            path="repo",
            pending=[PendingLabel.UNCOMMITTED_CHANGES, PendingLabel.UNTRACKED_FILES],
        )
        assert format_human(result, color=False) == "repo (uncommitted changes, untracked files)"

    def test_error(self) -> None:
        result = CrawlResult(path="repo", error="reference 'refs/heads/main' not found")
        assert (
            format_human(result, color=False)
            == "repo (error: reference 'refs/heads/main' not found)"
        )

    def test_color(self) -> None:
        result = CrawlResult(path="repo", pending=[PendingLabel.ADDED_FILES])
        assert "\x1b[" in format_human(result, color=True)


@pytest.mark.unit
class TestCli:
    """Tests for the cli command."""

    def test_human_output(
        self, runner: CliRunner, workspace: Path, make_repo: Callable[..., Path]
    ) -> None:
        repo_path = make_repo("project")
        commit_file(repo_path)
        (repo_path / "notes.txt").write_text("todo\n")

        result = runner.invoke(cli, [str(workspace)])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["project (untracked files)"]

    def test_json_output(
        self, runner: CliRunner, workspace: Path, make_repo: Callable[..., Path]
    ) -> None:
        commit_file(make_repo("clean"))
        make_repo("empty")

        result = runner.invoke(cli, [str(workspace), "--output-json"])

        assert result.exit_code == 0
        records = {r["path"]: r for r in map(json.loads, result.output.splitlines())}
        assert records["clean"] == {"path": "clean", "pending": None, "error": None}
        assert records["empty"]["pending"] is None
        assert records["empty"]["error"]

    def test_flags(
        self, runner: CliRunner, workspace: Path, make_repo: Callable[..., Path]
    ) -> None:
        commit_file(make_repo("clean"))
        make_repo("empty")
        untracked = make_repo("untracked")
        commit_file(untracked)
        (untracked / "tmp.txt").write_text("x\n")

        result = runner.invoke(
            cli,
            [str(workspace), "--pending", "--ignore-untracked", "--ignore-uncommitted-repos"],
        )

        assert result.exit_code == 0
        assert result.output == ""

    def test_untagged_heads_flag(self, runner: CliRunner, git_repo: Path) -> None:
        result = runner.invoke(cli, [str(git_repo), "--untagged-heads", "--output-json"])
        assert json.loads(result.output)["pending"] == ["untagged HEAD"]

    def test_invalid_remote_strategy(self, runner: CliRunner, git_repo: Path) -> None:
        result = runner.invoke(cli, [str(git_repo), "--access-remote", "password"])
        assert result.exit_code == 2

    def test_missing_root(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, [str(tmp_path / "missing")])
        assert result.exit_code == 1

    def test_closed_pipe_exits_quietly(
        self, runner: CliRunner, git_repo: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        class ClosedPipeCrawler:
            def __init__(self, *args, **kwargs) -> None:
                pass

            def __iter__(self):
                raise BrokenPipeError

        monkeypatch.setattr("repo_hygiene.cli.Crawler", ClosedPipeCrawler)

        result = runner.invoke(cli, [str(git_repo)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
