from __future__ import annotations

import os
import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .auth import authenticate
from .client import BitbucketClient, as_utc
from .endpoints import PR_STATES
from .errors import BbLensError
from .formatters import FORMATS, get_formatter
from .models import PullRequest, Repository, User

_stderr = Console(stderr=True)


load_dotenv()


def _fetch_options(func: Callable) -> Callable:
    options = [
        click.option(
            "--host",
            envvar="BITBUCKET_HOST",
            default=None,
            help="Bitbucket Server host name, e.g. bitbucket.example.com. [env: BITBUCKET_HOST]",
        ),
        click.option(
            "--state",
            type=click.Choice(list(PR_STATES)),
            default="ALL",
            show_default=True,
            help="Filter PRs by state.",
        ),
        click.option(
            "--since",
            "start_date",
            type=click.DateTime(),
            default=None,
            help="Only PRs updated after this UTC date. Defaults to four weeks ago.",
        ),
        click.option(
            "--until",
            "end_date",
            type=click.DateTime(),
            default=None,
            help="Only PRs updated before this UTC date. Defaults to now.",
        ),
        click.option(
            "--all",
            "fetch_all",
            is_flag=True,
            default=False,
            help="Fetch every page and skip date filtering.",
        ),
        click.option(
            "--page-size",
            type=click.IntRange(min=1),
            default=50,
            show_default=True,
            help="Number of PRs requested per page.",
        ),
        click.option(
            "--format",
            "output_format",
            type=click.Choice(list(FORMATS)),
            default="json",
            show_default=True,
            help="Output format.",
        ),
        click.option(
            "--output",
            "output_path",
            type=click.Path(path_type=Path),
            default=None,
            help="Write output to a file instead of stdout.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _credentials() -> User:
    username = os.environ.get("BITBUCKET_USERNAME")
    token = os.environ.get("BITBUCKET_TOKEN")
    if not username or not token:
        _stderr.print(
            "[red]Error:[/red] BITBUCKET_USERNAME and BITBUCKET_TOKEN environment variables must be set."
        )
        sys.exit(1)
    return User(username=username, token=token)


def _run(
    description: str,
    fetch: Callable[[BitbucketClient], list[PullRequest]],
    host: str | None,
    output_format: str,
    output_path: Path | None,
    title: str,
) -> None:
    if not host:
        _stderr.print("[red]Error:[/red] pass --host or set BITBUCKET_HOST.")
        sys.exit(1)
    user = authenticate(_credentials())

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=_stderr,
            transient=True,
        ) as progress:
            progress.add_task(description, total=None)
            with BitbucketClient(user, host) as client:
                prs = fetch(client)
    except (BbLensError, httpx.HTTPError) as exc:
        _stderr.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    formatter = get_formatter(output_format, title=title)
    output = formatter(prs)

    if output_path is not None:
        output_path.write_text(output, encoding="utf-8")
        _stderr.print(f"[green]Wrote {len(prs)} PRs to {output_path}[/green]")
    else:
        click.echo(output)


@click.group()
def cli() -> None:
    """bblens — fetch pull requests from a Bitbucket Server."""


@cli.command("user-prs")
@_fetch_options
def user_prs(
    host: str | None,
    state: str,
    start_date: datetime | None,
    end_date: datetime | None,
    fetch_all: bool,
    page_size: int,
    output_format: str,
    output_path: Path | None,
) -> None:
    """Fetch the pull requests on your dashboard."""
    _run(
        "Fetching dashboard PRs…",
        lambda client: client.fetch_user_prs(
            state=state,
            start_date=as_utc(start_date),
            end_date=as_utc(end_date),
            fetch_all=fetch_all,
            page_size=page_size,
        ),
        host,
        output_format,
        output_path,
        title="dashboard",
    )


@cli.command("repo-prs")
@click.argument("repo", metavar="PROJECT/SLUG")
@_fetch_options
def repo_prs(
    repo: str,
    host: str | None,
    state: str,
    start_date: datetime | None,
    end_date: datetime | None,
    fetch_all: bool,
    page_size: int,
    output_format: str,
    output_path: Path | None,
) -> None:
    """Fetch the pull requests of repository PROJECT/SLUG."""
    if repo.count("/") != 1:
        raise click.BadParameter(
            f"{repo!r} is not a valid PROJECT/SLUG format.",
            param_hint="REPO",
        )
    project_key, slug = repo.split("/", 1)
    if not project_key or not slug:
        raise click.BadParameter(
            f"{repo!r} is not a valid PROJECT/SLUG format.",
            param_hint="REPO",
        )
    repository = Repository(slug=slug, project_key=project_key)

    _run(
        f"Fetching PRs from {repo}…",
        lambda client: client.fetch_repo_prs(
            repository,
            state=state,
            start_date=as_utc(start_date),
            end_date=as_utc(end_date),
            fetch_all=fetch_all,
            page_size=page_size,
        ),
        host,
        output_format,
        output_path,
        title=repo,
    )
