"""Turn Bitbucket Server REST payloads into model objects.

Required fields are read with plain indexing, so a missing or malformed field
raises ``KeyError``/``TypeError``/``IndexError`` and aborts the page.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .errors import InvalidReviewStatusError
from .models import Person, PullRequest, PullRequestStatus, Repository, ReviewStatus

_MISSING_EMAIL = "N/A"

_REVIEW_STATUS_BY_INITIAL = {
    "A": ReviewStatus.APPROVED,
    "U": ReviewStatus.UNAPPROVED,
    "N": ReviewStatus.NEEDS_WORK,
}


def parse_person(node: dict[str, Any]) -> Person:
    return Person(
        name=node["name"],
        email=node.get("emailAddress", _MISSING_EMAIL),
        display_name=node["displayName"],
    )


def parse_review_status(status: str) -> ReviewStatus:
    # Only the first character is significant.
    review_status = _REVIEW_STATUS_BY_INITIAL.get(status[:1])
    if review_status is None:
        raise InvalidReviewStatusError(f"{status!r} is not a review status")
    return review_status


def parse_reviewers(node: dict[str, Any]) -> Mapping[Person, ReviewStatus]:
    reviewers: dict[Person, ReviewStatus] = {}
    for entry in node["reviewers"]:
        person = parse_person(entry["user"])
        # Person hashes on name, so pop first to keep the latest details as the key.
        reviewers.pop(person, None)
        reviewers[person] = parse_review_status(entry["status"])
    return MappingProxyType(reviewers)


def parse_participants(node: dict[str, Any]) -> tuple[Person, ...]:
    return tuple(parse_person(entry["user"]) for entry in node["participants"])


def parse_author(node: dict[str, Any]) -> Person:
    return parse_person(node["author"]["user"])


def parse_repository(node: dict[str, Any]) -> Repository:
    repo = node["toRef"]["repository"]
    return Repository(slug=repo["slug"], project_key=repo["project"]["key"])


def parse_timestamp(millis: int | float) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def parse_pull_request(node: dict[str, Any]) -> PullRequest:
    return PullRequest(
        title=node["title"],
        link=node["links"]["self"][0]["href"],
        author=parse_author(node),
        reviewers=parse_reviewers(node),
        participants=parse_participants(node),
        state=PullRequestStatus.parse(node["state"]),
        created_date=parse_timestamp(node["createdDate"]),
        updated_date=parse_timestamp(node["updatedDate"]),
        repository=parse_repository(node),
    )


def parse_page(body: dict[str, Any]) -> tuple[list[PullRequest], bool]:
    """Decode one paged response into its pull requests and its ``isLastPage`` flag."""
    prs = [parse_pull_request(node) for node in body["values"]]
    return prs, bool(body["isLastPage"])
