from __future__ import annotations

from datetime import datetime, timezone

from ..models import PullRequest

_DATE_FMT = "%Y-%m-%dT%H:%M:%SZ"


def format_markdown(prs: list[PullRequest], title: str = "") -> str:
    now = datetime.now(tz=timezone.utc).strftime(_DATE_FMT)
    state_label = prs[0].state.value if len({pr.state for pr in prs}) == 1 else "ALL"
    lines: list[str] = []

    heading = f"Pull Requests: {title}" if title else "Pull Requests"
    lines.append(f"# {heading}")
    lines.append(f"> Fetched {len(prs)} PRs · State: {state_label} · Generated: {now}")
    lines.append("")

    for pr in prs:
        repo = f"{pr.repository.project_key}/{pr.repository.slug}"
        lines.append(f"## {repo} — {pr.title}")
        lines.append("")
        lines.append("| Field | Value |")
        lines.append("| --- | --- |")
        lines.append(f"| Author | {pr.author.short_name} ({pr.author.name}) |")
        lines.append(f"| State | {pr.state.value} |")
        lines.append(f"| Created | {pr.created_date.strftime(_DATE_FMT)} |")
        lines.append(f"| Updated | {pr.updated_date.strftime(_DATE_FMT)} |")
        if pr.participants:
            names = ", ".join(p.short_name for p in pr.participants)
            lines.append(f"| Participants | {names} |")
        lines.append(f"| URL | {pr.link} |")
        lines.append("")

        if pr.reviewers:
            lines.append(f"### Reviewers ({len(pr.reviewers)})")
            lines.append("")
            lines.append("| Reviewer | Status |")
            lines.append("| --- | --- |")
            for person, status in pr.reviewers.items():
                lines.append(f"| {person.short_name} ({person.name}) | {status.value} |")
            lines.append("")

    return "\n".join(lines)
