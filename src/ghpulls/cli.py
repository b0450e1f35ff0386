from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .client import PullRequestsClient
from .config import ClientConfig
from .errors import GhPullsError
from .formatters import get_formatter
from .repository import Repository

_stderr = Console(stderr=True)


load_dotenv()


def _repository(ctx: click.Context, param: click.Parameter, value: str) -> Repository:
    try:
        return Repository.parse(value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not a valid OWNER/REPO format.", param_hint="REPO") from None


def _config() -> ClientConfig:
    try:
        config = ClientConfig.from_env()
    except ValueError as exc:
        _stderr.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    if not config.token:
        _stderr.print("[red]Error:[/red] GITHUB_TOKEN environment variable is not set.")
        sys.exit(1)
    return config


def _run(action: Callable[[PullRequestsClient], Any]) -> Any:
    config = _config()
    try:
        with PullRequestsClient(config) as client:
            return action(client)
    except GhPullsError as exc:
        _stderr.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


def _emit(records: Sequence[Any], output_format: str, repo: Repository, heading: str, output_path: Path | None = None) -> None:
    formatter = get_formatter(output_format, owner_repo=repo.full_name, heading=heading)
    output = formatter(records)
    if output_path is not None:
        output_path.write_text(output, encoding="utf-8")
        _stderr.print(f"[green]Wrote {len(records)} records to {output_path}[/green]")
    else:
        click.echo(output)


repo_argument = click.argument("repo", metavar="OWNER/REPO", callback=_repository)
number_argument = click.argument("number", type=click.IntRange(min=1))
format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "markdown"]),
    default="json",
    show_default=True,
    help="Output format.",
)
output_option = click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write output to a file instead of stdout.",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every API request to stderr.")
def cli(verbose: bool) -> None:
    """ghpulls — work with GitHub pull requests from the command line."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=_stderr, show_path=False)],
            force=True,
        )
        # Keep httpx/httpcore internals out of the request log.
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


@cli.command("list")
@repo_argument
@click.option(
    "--state",
    type=click.Choice(["open", "closed", "all"]),
    default="open",
    show_default=True,
    help="Filter pull requests by state.",
)
@click.option(
    "--sort",
    type=click.Choice(["created", "updated", "popularity", "long-running"]),
    default=None,
    help="Sort order requested from the API.",
)
@click.option("--direction", type=click.Choice(["asc", "desc"]), default=None, help="Sort direction.")
@format_option
@output_option
def list_pulls(
    repo: Repository,
    state: str,
    sort: str | None,
    direction: str | None,
    output_format: str,
    output_path: Path | None,
) -> None:
    """List pull requests of OWNER/REPO."""
    pulls = _run(lambda client: client.pull_requests(repo, state=state, sort=sort, direction=direction))
    _emit(pulls, output_format, repo, "Pull Requests", output_path)


@cli.command()
@repo_argument
@number_argument
@format_option
def show(repo: Repository, number: int, output_format: str) -> None:
    """Show one pull request."""
    pull = _run(lambda client: client.pull_request(repo, number))
    _emit([pull], output_format, repo, "Pull Requests")


@cli.command()
@repo_argument
@number_argument
@format_option
@output_option
def files(repo: Repository, number: int, output_format: str, output_path: Path | None) -> None:
    """List the files changed by a pull request."""
    entries = _run(lambda client: client.pull_request_files(repo, number))
    _emit(entries, output_format, repo, f"Files of PR #{number}", output_path)


@cli.command()
@repo_argument
@number_argument
@format_option
@output_option
def commits(repo: Repository, number: int, output_format: str, output_path: Path | None) -> None:
    """List the commits of a pull request."""
    entries = _run(lambda client: client.pull_request_commits(repo, number))
    _emit(entries, output_format, repo, f"Commits of PR #{number}", output_path)


@cli.command()
@repo_argument
@click.argument("number", type=click.IntRange(min=1), required=False)
@format_option
@output_option
def comments(repo: Repository, number: int | None, output_format: str, output_path: Path | None) -> None:
    """List review comments, on one pull request or on all of them."""
    if number is None:
        entries = _run(lambda client: client.pull_requests_comments(repo))
        heading = "Review Comments"
    else:
        entries = _run(lambda client: client.pull_request_comments(repo, number))
        heading = f"Review Comments on PR #{number}"
    _emit(entries, output_format, repo, heading, output_path)


@cli.command()
@repo_argument
@number_argument
def merged(repo: Repository, number: int) -> None:
    """Exit 0 if the pull request is merged, 1 otherwise."""
    is_merged = _run(lambda client: client.pull_merged(repo, number))
    click.echo("merged" if is_merged else "not merged")
    sys.exit(0 if is_merged else 1)


@cli.command()
@repo_argument
@number_argument
@click.option("--message", "-m", default=None, help="Extra detail for the merge commit message.")
@format_option
def merge(repo: Repository, number: int, message: str | None, output_format: str) -> None:
    """Merge a pull request."""
    result = _run(lambda client: client.merge_pull_request(repo, number, commit_message=message))
    _emit([result], output_format, repo, f"Merge of PR #{number}")
