from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

import httpx
from rich.console import Console

from .decoding import parse_page
from .endpoints import PR_STATES, Endpoint, dashboard_pull_requests, repo_pull_requests
from .errors import InvalidStateFilterError
from .models import AuthenticatedUser, PullRequest, Repository

DEFAULT_PAGE_SIZE = 50
DEFAULT_LOOKBACK = timedelta(weeks=4)
_stderr = Console(stderr=True)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def as_utc(value: date | datetime | None) -> datetime | None:
    """Treat a bare date as midnight UTC and a naive datetime as UTC."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def check_pr_state(state: str) -> None:
    if state not in PR_STATES:
        raise InvalidStateFilterError(
            f"{state!r} is not a valid state; expected one of {', '.join(PR_STATES)}"
        )


class BitbucketClient:
    """Read-only client for the pull-request listings of a Bitbucket Server.

    Dates passed to the fetch methods may be ``date`` or ``datetime`` values. A
    ``date`` means midnight UTC and a naive ``datetime`` is read as UTC.
    ``clock`` supplies "now" for the default date window.
    """

    def __init__(
        self,
        user: AuthenticatedUser,
        host: str,
        *,
        clock: Clock | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._clock = clock or utc_now
        self._client = httpx.Client(
            base_url=f"https://{host}",
            headers={
                "Authorization": f"Basic {user.auth}",
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(30.0),
            transport=transport,
        )

    def __enter__(self) -> BitbucketClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_user_prs(
        self,
        *,
        state: str = "ALL",
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
        fetch_all: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[PullRequest]:
        """Pull requests on the authenticated user's dashboard.

        Only the last four weeks are returned unless dates or ``fetch_all`` say otherwise.
        """
        return self._paginate(
            dashboard_pull_requests(),
            state=state,
            start_date=start_date,
            end_date=end_date,
            fetch_all=fetch_all,
            page_size=page_size,
        )

    def fetch_repo_prs(
        self,
        repository: Repository,
        *,
        state: str = "ALL",
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
        fetch_all: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[PullRequest]:
        """Pull requests targeting ``repository``. Same filtering as :meth:`fetch_user_prs`."""
        return self._paginate(
            repo_pull_requests(repository),
            state=state,
            start_date=start_date,
            end_date=end_date,
            fetch_all=fetch_all,
            page_size=page_size,
        )

    def _paginate(
        self,
        endpoint: Endpoint,
        *,
        state: str,
        start_date: date | datetime | None,
        end_date: date | datetime | None,
        fetch_all: bool,
        page_size: int,
    ) -> list[PullRequest]:
        check_pr_state(state)
        now = self._clock()
        start_date = as_utc(start_date) or now - DEFAULT_LOOKBACK
        end_date = as_utc(end_date) or now
        if not fetch_all and start_date >= end_date:
            _stderr.print(
                f"[yellow]Warning:[/yellow] start date {start_date.isoformat()} is not before "
                f"end date {end_date.isoformat()}; no pull requests can match."
            )

        prs: list[PullRequest] = []
        start = 0
        last_updated = now
        there_is_more = True

        # Pages arrive newest-updated first, so once a page ends before the
        # window there is nothing left to find.
        while (last_updated > start_date or fetch_all) and there_is_more:
            response = self._client.get(endpoint.path, params=endpoint.params(start, page_size, state))
            response.raise_for_status()
            page, is_last_page = parse_page(response.json())
            prs.extend(page)
            there_is_more = not is_last_page
            if prs:
                last_updated = prs[-1].updated_date
            start += page_size

        if fetch_all:
            return prs
        return [pr for pr in prs if start_date < pr.updated_date < end_date]


def fetch_user_prs(user: AuthenticatedUser, host: str, **options: Any) -> list[PullRequest]:
    with BitbucketClient(user, host) as client:
        return client.fetch_user_prs(**options)


def fetch_repo_prs(
    user: AuthenticatedUser, host: str, repository: Repository, **options: Any
) -> list[PullRequest]:
    with BitbucketClient(user, host) as client:
        return client.fetch_repo_prs(repository, **options)
