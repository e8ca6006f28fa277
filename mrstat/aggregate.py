"""
Collection of open merge requests with their approval state.

One listing call, then one approvals call per remaining merge request. The
approvals calls run concurrently; the API is slow (~1-2s per request) so the
wall time of a run is dominated by these round trips.
"""

import asyncio
import contextlib
from collections.abc import Collection, Sequence
from dataclasses import replace
from typing import Protocol

from mrstat.blockers import find_blockers
from mrstat.filters import filter_by_authors
from mrstat.logging import get_logger
from mrstat.types.merge_requests import ApprovalStatus, MergeRequest

logger = get_logger()


class MergeRequestSource(Protocol):
    """The two read operations the collector needs."""

    async def list_open(self, target_branch: str) -> list[MergeRequest]: ...

    async def get_approvals(self, iid: int) -> ApprovalStatus: ...


async def collect_merge_requests(
    merge_requests: MergeRequestSource,
    target_branch: str,
    author_ids: Collection[int] = (),
    max_concurrency: int | None = None,
) -> list[MergeRequest]:
    """
    Fetch, filter and enrich the open merge requests against ``target_branch``.

    Any error from the API propagates unchanged; no partial result is returned.

    Args:
        merge_requests: Source of merge requests and approvals
        target_branch: Branch the merge requests target
        author_ids: Only keep merge requests by these authors (empty: keep all)
        max_concurrency: Cap on in-flight approvals requests (None: unbounded)

    Returns:
        Enriched merge requests, in API order
    """
    fetched = await merge_requests.list_open(target_branch)
    mrs = filter_by_authors(fetched, author_ids)
    logger.debug(
        "%d of %d merge requests match authors", len(mrs), len(fetched)
    )

    statuses = await _fetch_approvals(merge_requests, mrs, max_concurrency)
    logger.debug(
        "iids with approvals needed: %s",
        [(status.iid, status.approvals_left) for status in statuses],
    )

    return [apply_approvals(mr, status) for mr, status in zip(mrs, statuses)]


def apply_approvals(mr: MergeRequest, status: ApprovalStatus) -> MergeRequest:
    """Build the enriched record for ``mr`` from its approval status."""
    with_approvals = replace(mr, approvals_needed=status.approvals_left)
    return replace(with_approvals, blockers=find_blockers(with_approvals))


async def _fetch_approvals(
    merge_requests: MergeRequestSource,
    mrs: Sequence[MergeRequest],
    max_concurrency: int | None,
) -> list[ApprovalStatus]:
    """Fetch approvals for every merge request; results follow ``mrs`` order."""
    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def fetch(iid: int) -> ApprovalStatus:
        async with limiter if limiter is not None else contextlib.nullcontext():
            return await merge_requests.get_approvals(iid)

    tasks = [asyncio.ensure_future(fetch(mr.iid)) for mr in mrs]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        # first failure propagates; cancel the requests still in flight
        for task in tasks:
            task.cancel()
        raise
