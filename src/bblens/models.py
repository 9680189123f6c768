from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from .errors import InvalidPullRequestStatusError


@dataclass(frozen=True)
class User:
    """The person running the queries.

    ``token`` is an HTTP access token or the user's password. A token is
    preferable since its permissions can be scoped.
    """

    username: str
    token: str = field(repr=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    user: User
    auth: str = field(repr=False)


@dataclass(frozen=True)
class Person:
    """Someone who appears on a pull request. Identified by ``name`` alone."""

    name: str
    email: str = field(compare=False)
    display_name: str = field(compare=False)

    @property
    def short_name(self) -> str:
        names = self.display_name.split()
        if len(names) > 1:
            return f"{names[0]} {names[-1][0].upper()}."
        return self.display_name


@dataclass(frozen=True)
class Repository:
    slug: str
    project_key: str


class ReviewStatus(Enum):
    APPROVED = "APPROVED"
    UNAPPROVED = "UNAPPROVED"
    NEEDS_WORK = "NEEDS_WORK"


class ParticipationType(Enum):
    AUTHOR = "AUTHOR"
    REVIEWER = "REVIEWER"
    PARTICIPANT = "PARTICIPANT"
    NOT_ON_PR = "NOT_ON_PR"


class PullRequestStatus(Enum):
    OPEN = "OPEN"
    DECLINED = "DECLINED"
    MERGED = "MERGED"

    @classmethod
    def parse(cls, value: str) -> "PullRequestStatus":
        status = cls.try_parse(value)
        if status is None:
            raise InvalidPullRequestStatusError(f"{value!r} is not a valid PR status")
        return status

    @classmethod
    def try_parse(cls, value: str) -> "PullRequestStatus | None":
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class PullRequest:
    title: str
    link: str
    author: Person
    # Read-only view; left out of the hash so decoded PRs can go in sets.
    reviewers: Mapping[Person, ReviewStatus] = field(hash=False)
    participants: tuple[Person, ...]
    state: PullRequestStatus
    created_date: datetime
    updated_date: datetime
    repository: Repository

    def __post_init__(self) -> None:
        if not isinstance(self.reviewers, MappingProxyType):
            object.__setattr__(self, "reviewers", MappingProxyType(dict(self.reviewers)))
