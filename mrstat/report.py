"""Grouping and text rendering of merge requests."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from mrstat.types.merge_requests import MergeRequest

K = TypeVar("K")
T = TypeVar("T")

READY = "ready"
BLOCKED = "blocked"

READY_HEADER = "Ready to Merge"
BLOCKED_HEADER = "Blocked"


def group_by(key: Callable[[T], K], items: Iterable[T]) -> dict[K, list[T]]:
    """Group ``items`` by ``key``, keeping first-seen key order and item order."""
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def classify(mr: MergeRequest) -> str:
    """Return ``"blocked"`` if the merge request has blockers, else ``"ready"``."""
    return BLOCKED if mr.blockers else READY


@dataclass
class Report:
    """Open merge requests against one branch, split by readiness."""

    target_branch: str
    ready: list[MergeRequest] = field(default_factory=list)
    blocked: list[MergeRequest] = field(default_factory=list)

    def render(self) -> str:
        """Render as Slack-style markdown; empty sections are left out."""
        output = [f"\n*Open MRs against `{self.target_branch}`:*\n"]
        if self.ready:
            output.append(format_merge_requests(READY_HEADER, self.ready))
        if self.blocked:
            output.append(format_merge_requests(BLOCKED_HEADER, self.blocked))
        return "".join(output)

    def render_details(self) -> str:
        """Render every merge request as an aligned key/value block."""
        return "\n".join(format_details(mr) for mr in [*self.ready, *self.blocked])


def group_merge_requests(target_branch: str, mrs: Iterable[MergeRequest]) -> Report:
    """Partition enriched merge requests into ready and blocked."""
    groups = group_by(classify, mrs)
    return Report(
        target_branch=target_branch,
        ready=groups.get(READY, []),
        blocked=groups.get(BLOCKED, []),
    )


def format_merge_requests(header: str, mrs: Sequence[MergeRequest]) -> str:
    """
    Format merge requests for display in Slack-style markdown.

    Args:
        header: Used as section header
        mrs: Merge requests to display

    Returns:
        Slack-formatted text
    """
    output = [f"* *{header}*\n"]

    for mr in mrs:
        output.append(f"    * [{mr.title}]({mr.web_url}) ({mr.author.username})\n")

        if mr.labels:
            output.append(f"        * Labels: {', '.join(mr.labels)}\n")

        if mr.blockers:
            output.append(f"        * {', '.join(mr.blockers)}\n")

    return "".join(output)


def format_details(mr: MergeRequest) -> str:
    """
    Format one merge request as ``Key: value`` lines with aligned values.

    Keys are padded to the longest key plus one. Values are not padded, so
    lines carry no trailing whitespace.
    """
    fields = [
        ("Title:", mr.title),
        ("Author:", mr.author.name),
        ("Branch:", mr.source_branch),
        ("URL:", mr.web_url),
    ]

    if mr.labels:
        fields.append(("Labels:", ", ".join(mr.labels)))

    if mr.blockers:
        fields.append(("Blockers:", ", ".join(mr.blockers)))

    width = max(len(key) for key, _ in fields) + 1
    return "".join(f"{key:<{width}}{value}\n" for key, value in fields)
