"""mrstat resource clients."""

from mrstat.clients.merge_requests import AsyncMergeRequestsClient

__all__ = [
    "AsyncMergeRequestsClient",
]
