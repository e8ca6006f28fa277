"""Merge request filters."""

from collections.abc import Collection, Sequence

from mrstat.types.merge_requests import MergeRequest


def filter_by_authors(
    mrs: Sequence[MergeRequest], author_ids: Collection[int]
) -> Sequence[MergeRequest]:
    """
    Keep merge requests written by one of the given authors.

    An empty ``author_ids`` means "no author restriction" and returns ``mrs``
    itself. A non-empty collection that matches nobody returns an empty list.

    Args:
        mrs: Merge requests in API order
        author_ids: Numeric author ids to keep

    Returns:
        The matching merge requests, in their original order
    """
    if not author_ids:
        return mrs

    allowed = set(author_ids)
    return [mr for mr in mrs if mr.author.id in allowed]
