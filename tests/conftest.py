"""Shared factories and fixtures for the test suite."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from bblens.auth import authenticate
from bblens.models import (
    Person,
    PullRequest,
    PullRequestStatus,
    Repository,
    ReviewStatus,
    User,
)

HOST = "bitbucket.example.com"
BASE_URL = f"https://{HOST}"
DASHBOARD_URL = f"{BASE_URL}/rest/api/latest/dashboard/pull-requests"
REPO_URL = f"{BASE_URL}/rest/api/latest/projects/PROJ/repos/widgets/pull-requests"

# Frozen "now" used by the injected clock.
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


# ---------------------------------------------------------------------------
# JSON factories — return raw dicts that mirror API responses
# ---------------------------------------------------------------------------


def user_node(
    name: str = "alice",
    display_name: str = "Alice Smith",
    email: str | None = "alice@example.com",
) -> dict:
    node = {"name": name, "displayName": display_name}
    if email is not None:
        node["emailAddress"] = email
    return node


def reviewer_node(name: str = "bob", status: str = "APPROVED", **kwargs) -> dict:
    return {"user": user_node(name=name, **kwargs), "status": status}


def participant_node(name: str = "carol", **kwargs) -> dict:
    return {"user": user_node(name=name, **kwargs)}


def pr_node(
    id: int = 1,
    title: str = "Fix bug",
    state: str = "OPEN",
    author: dict | None = None,
    reviewers: list[dict] | None = None,
    participants: list[dict] | None = None,
    created: datetime | None = None,
    updated: datetime | None = None,
    slug: str = "widgets",
    project_key: str = "PROJ",
) -> dict:
    updated = updated or NOW - timedelta(days=1)
    created = created or updated - timedelta(days=1)
    return {
        "id": id,
        "title": title,
        "state": state,
        "links": {
            "self": [
                {"href": f"{BASE_URL}/projects/{project_key}/repos/{slug}/pull-requests/{id}"}
            ]
        },
        "author": {"user": author or user_node()},
        "reviewers": reviewers if reviewers is not None else [reviewer_node()],
        "participants": participants if participants is not None else [],
        "createdDate": to_millis(created),
        "updatedDate": to_millis(updated),
        "toRef": {
            "id": "refs/heads/main",
            "repository": {"slug": slug, "project": {"key": project_key}},
        },
    }


def page_response(nodes: list[dict], is_last_page: bool = True, start: int = 0) -> dict:
    return {
        "size": len(nodes),
        "start": start,
        "values": nodes,
        "isLastPage": is_last_page,
    }


# ---------------------------------------------------------------------------
# Model object factories — construct typed model instances
# ---------------------------------------------------------------------------


def make_person(
    name: str = "alice",
    email: str = "alice@example.com",
    display_name: str = "Alice Smith",
) -> Person:
    return Person(name=name, email=email, display_name=display_name)


def make_pull_request(
    title: str = "Fix bug",
    link: str = f"{BASE_URL}/projects/PROJ/repos/widgets/pull-requests/1",
    author: Person | None = None,
    reviewers: dict[Person, ReviewStatus] | None = None,
    participants: tuple[Person, ...] = (),
    state: PullRequestStatus = PullRequestStatus.OPEN,
    created_date: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc),
    updated_date: datetime = datetime(2024, 1, 2, tzinfo=timezone.utc),
    repository: Repository | None = None,
) -> PullRequest:
    return PullRequest(
        title=title,
        link=link,
        author=author or make_person(),
        reviewers=reviewers or {},
        participants=participants,
        state=state,
        created_date=created_date,
        updated_date=updated_date,
        repository=repository or Repository(slug="widgets", project_key="PROJ"),
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def auth_user():
    return authenticate(User(username="alice", token="s3cret"))


@pytest.fixture(autouse=True)
def no_dotenv(mocker):
    """Prevent tests from loading a real .env file."""
    mocker.patch("bblens.cli.load_dotenv")
