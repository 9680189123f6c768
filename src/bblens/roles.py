from __future__ import annotations

from .models import ParticipationType, Person, PullRequest


def get_role(identity: str | Person, pr: PullRequest) -> ParticipationType:
    """Return how ``identity`` appears on ``pr``.

    ``identity`` is a username or a :class:`Person`. Reviewers are checked
    first, then participants, then the author, so an author who also reviews
    comes back as ``REVIEWER``.
    """
    name = identity.name if isinstance(identity, Person) else identity
    if any(reviewer.name == name for reviewer in pr.reviewers):
        return ParticipationType.REVIEWER
    if any(participant.name == name for participant in pr.participants):
        return ParticipationType.PARTICIPANT
    if pr.author.name == name:
        return ParticipationType.AUTHOR
    return ParticipationType.NOT_ON_PR


def get_all_people_on_pr(pr: PullRequest) -> list[Person]:
    """Reviewers, then participants, then the author. Duplicates are kept."""
    return [*pr.reviewers, *pr.participants, pr.author]
