from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .models import Repository

API_ROOT = "/rest/api/latest"

PR_STATES = ("ALL", "OPEN", "DECLINED", "MERGED")


@dataclass(frozen=True)
class Endpoint:
    """A paged pull-request listing.

    ``always_send_state`` controls whether ``state=ALL`` goes on the query
    string. The dashboard endpoint omits it; the repository endpoint sends it.
    """

    path: str
    always_send_state: bool

    def params(self, start: int, limit: int, state: str) -> dict[str, Any]:
        params: dict[str, Any] = {"start": start, "limit": limit}
        if self.always_send_state or state != "ALL":
            params["state"] = state
        return params


def dashboard_pull_requests() -> Endpoint:
    return Endpoint(path=f"{API_ROOT}/dashboard/pull-requests", always_send_state=False)


def repo_pull_requests(repository: Repository) -> Endpoint:
    return Endpoint(
        path=(
            f"{API_ROOT}/projects/{quote(repository.project_key, safe='')}"
            f"/repos/{quote(repository.slug, safe='')}/pull-requests"
        ),
        always_send_state=True,
    )
