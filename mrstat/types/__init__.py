"""mrstat type definitions."""

from mrstat.types.merge_requests import ApprovalStatus, Author, MergeRequest

__all__ = [
    "Author",
    "MergeRequest",
    "ApprovalStatus",
]
