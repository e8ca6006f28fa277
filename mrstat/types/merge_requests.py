"""Merge request data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Author:
    """Author of a merge request. Identity is the numeric id."""

    id: int
    name: str
    username: str


@dataclass(frozen=True)
class MergeRequest:
    """Merge request information.

    Fetched records carry ``approvals_needed`` and ``blockers`` as ``None``;
    enrichment builds a new record with both filled in.
    """

    iid: int
    title: str
    source_branch: str
    target_branch: str
    author: Author
    state: str  # "opened", "closed", "merged", "locked"
    draft: bool
    has_conflicts: bool
    blocking_discussions_resolved: bool
    merge_status: str  # "unchecked", "checking", "can_be_merged", "cannot_be_merged", "cannot_be_merged_recheck"
    web_url: str
    labels: tuple[str, ...] = field(default_factory=tuple)
    approvals_needed: int | None = None
    blockers: tuple[str, ...] | None = None

    @property
    def is_enriched(self) -> bool:
        return self.approvals_needed is not None and self.blockers is not None


@dataclass(frozen=True)
class ApprovalStatus:
    """Approval state of a single merge request."""

    iid: int
    approvals_required: int
    approvals_left: int
