"""Derivation of the conditions that keep a merge request from being merged."""

from mrstat.types.merge_requests import MergeRequest

UNRESOLVED_THREADS = "unresolved threads"
HAS_CONFLICTS = "has conflicts"
CANNOT_BE_MERGED = "cannot be merged"


def find_blockers(mr: MergeRequest) -> tuple[str, ...]:
    """
    Look for conditions blocking the merge of ``mr``.

    Checks run in a fixed order so the output is deterministic: unresolved
    threads, conflicts, merge status, then missing approvals.

    Args:
        mr: Merge request, normally already carrying ``approvals_needed``

    Returns:
        Human-readable blockers; empty when the merge request is ready
    """
    blockers: list[str] = []

    if not mr.blocking_discussions_resolved:
        blockers.append(UNRESOLVED_THREADS)
    if mr.has_conflicts:
        blockers.append(HAS_CONFLICTS)
    # matches cannot_be_merged and cannot_be_merged_recheck
    if "cannot_be_merged" in mr.merge_status:
        blockers.append(CANNOT_BE_MERGED)

    approvals_needed = mr.approvals_needed or 0
    if approvals_needed > 0:
        blockers.append(f"requires approval ({approvals_needed})")

    return tuple(blockers)
