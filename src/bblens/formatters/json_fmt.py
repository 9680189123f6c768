from __future__ import annotations

import json
from typing import Any

from ..models import Person, PullRequest


def _person(person: Person) -> dict[str, str]:
    return {"name": person.name, "email": person.email, "display_name": person.display_name}


def pull_request_to_dict(pr: PullRequest) -> dict[str, Any]:
    return {
        "title": pr.title,
        "link": pr.link,
        "author": _person(pr.author),
        "reviewers": [
            {**_person(person), "status": status.value} for person, status in pr.reviewers.items()
        ],
        "participants": [_person(person) for person in pr.participants],
        "state": pr.state.value,
        "created_date": pr.created_date.isoformat(),
        "updated_date": pr.updated_date.isoformat(),
        "repository": {"slug": pr.repository.slug, "project_key": pr.repository.project_key},
    }


def format_json(prs: list[PullRequest]) -> str:
    return json.dumps([pull_request_to_dict(pr) for pr in prs], indent=2)
