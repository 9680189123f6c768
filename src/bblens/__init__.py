"""Read pull requests from a Bitbucket Server REST API."""
from .auth import authenticate
from .client import BitbucketClient, check_pr_state, fetch_repo_prs, fetch_user_prs
from .errors import (
    BbLensError,
    InvalidPullRequestStatusError,
    InvalidReviewStatusError,
    InvalidStateFilterError,
)
from .models import (
    AuthenticatedUser,
    ParticipationType,
    Person,
    PullRequest,
    PullRequestStatus,
    Repository,
    ReviewStatus,
    User,
)
from .roles import get_all_people_on_pr, get_role

__all__ = [
    "AuthenticatedUser",
    "BbLensError",
    "BitbucketClient",
    "InvalidPullRequestStatusError",
    "InvalidReviewStatusError",
    "InvalidStateFilterError",
    "ParticipationType",
    "Person",
    "PullRequest",
    "PullRequestStatus",
    "Repository",
    "ReviewStatus",
    "User",
    "authenticate",
    "check_pr_state",
    "fetch_repo_prs",
    "fetch_user_prs",
    "get_all_people_on_pr",
    "get_role",
]
