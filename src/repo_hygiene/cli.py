"""CLI for repo-hygiene."""

import json
import os
import sys
from pathlib import Path

import click

from repo_hygiene.config.logging import configure_logging
from repo_hygiene.config.settings import get_settings
from repo_hygiene.core.models.config import CrawlConfig, RemoteAccess
from repo_hygiene.core.models.report import CrawlResult
from repo_hygiene.services.crawler import Crawler


def format_human(result: CrawlResult, color: bool = True) -> str:
    """Render a result as ``path (labels)`` or ``path (error: message)``."""
    output = result.path
    if result.pending:
        labels = ", ".join(label.value for label in result.pending)
        output += f" ({click.style(labels, fg='cyan') if color else labels})"
    if result.error is not None:
        if color:
            output += f" ({click.style('error', fg='bright_red')}: {click.style(result.error, fg='bright_black')})"
        else:
            output += f" (error: {result.error})"
    return output


def format_json(result: CrawlResult) -> str:
    return json.dumps(result.to_dict())


@click.command()
@click.argument("root", default=".", type=click.Path(file_okay=False, path_type=Path))
@click.option("--pending", is_flag=True, help="Only show repos with pending action")
@click.option("--ignore-untracked", is_flag=True, help="Do not include untracked files in output")
@click.option("--ignore-uncommitted-repos", is_flag=True, help="Do not include repos that have no commits")
@click.option("--absolute-paths", is_flag=True, help="Display absolute paths for repos")
@click.option("--untagged-heads", is_flag=True, help="Check if HEAD is untagged")
@click.option(
    "--access-remote",
    type=click.Choice([strategy.value for strategy in RemoteAccess]),
    default=None,
    help="Compare against the origin remote, most likely over the network",
)
@click.option("--output-json", is_flag=True, help="Display output as JSON lines")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(package_name="repo-hygiene")
def cli(
    root: Path,
    pending: bool,
    ignore_untracked: bool,
    ignore_uncommitted_repos: bool,
    absolute_paths: bool,
    untagged_heads: bool,
    access_remote: str | None,
    output_json: bool,
    verbose: bool,
) -> None:
    """Crawl ROOT and display the pending status of each git repo found."""
    settings = get_settings()
    configure_logging(log_level="DEBUG" if verbose else settings.log_level)

    if not root.is_dir():
        click.echo(f"{click.style('error', fg='bright_red')}: Path does not exist: {root}", err=True)
        sys.exit(1)

    config = CrawlConfig(
        pending_only=pending,
        ignore_untracked=ignore_untracked,
        ignore_uncommitted_repos=ignore_uncommitted_repos,
        absolute_paths=absolute_paths,
        untagged_heads=untagged_heads,
        remote_access=RemoteAccess(access_remote) if access_remote else None,
    )
    color = not output_json and sys.stdout.isatty()

    try:
        for result in Crawler(root, config, settings):
            click.echo(format_json(result) if output_json else format_human(result, color=color))
    except BrokenPipeError:
        # The reader went away. Point stdout at devnull so the flush at
        # interpreter exit does not fail again.
        try:
            os.dup2(os.open(os.devnull, os.O_WRONLY), sys.stdout.fileno())
        except (OSError, ValueError):
            # stdout has no file descriptor to redirect
            pass
        sys.exit(1)


if __name__ == "__main__":
    cli()
