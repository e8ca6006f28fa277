"""
mrstat async client.

Provides the async interface to the merge requests of one project.
"""

from collections.abc import Collection
from typing import Any

import httpx

from mrstat.aggregate import collect_merge_requests
from mrstat.clients import AsyncMergeRequestsClient
from mrstat.config import DEFAULT_API_BASE, DEFAULT_TARGET_BRANCH, MRStatConfig
from mrstat.logging import get_logger
from mrstat.transport import AsyncHTTPTransport
from mrstat.types.merge_requests import MergeRequest

logger = get_logger()


class AsyncMRStatClient:
    """
    Async client for the merge requests of one project.

    Aggregates the merge requests resource client and handles authentication.
    Uses httpx for async HTTP operations.

    Example:
        ```python
        import asyncio
        from mrstat import AsyncMRStatClient, load_config

        async def main():
            config = load_config()
            async with AsyncMRStatClient.from_config(config) as client:
                for mr in await client.open_merge_requests():
                    print(mr.title, mr.blockers)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = DEFAULT_API_BASE
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        api_token: str,
        project_id: int,
        target_branch: str = DEFAULT_TARGET_BRANCH,
        author_ids: Collection[int] = (),
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_concurrency: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async mrstat client.

        Args:
            api_token: Personal or project access token
            project_id: Numeric id of the project
            target_branch: Branch whose open merge requests are reported (default: main)
            author_ids: Only report merge requests by these user ids (default: all)
            base_url: API base URL (default: https://gitlab.com/api/v4)
            timeout: Request timeout in seconds (default: 30.0)
            max_concurrency: Cap on concurrent approvals requests (default: unbounded)
            transport: Optional httpx transport, mainly for tests
        """
        logger.debug("Constructing client for project %s", project_id)
        self.project_id = project_id
        self.target_branch = target_branch
        self.author_ids = tuple(author_ids)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_concurrency = max_concurrency

        self._transport = AsyncHTTPTransport(
            base_url=f"{self.base_url}/projects/{project_id}",
            api_token=api_token,
            timeout=timeout,
            transport=transport,
        )

        self.merge_requests = AsyncMergeRequestsClient(self._transport)

    @classmethod
    def from_config(
        cls,
        config: MRStatConfig,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AsyncMRStatClient":
        """
        Create a client from a loaded configuration.

        Args:
            config: Validated configuration (see ``mrstat.config.load_config``)
            timeout: Request timeout in seconds (default: 30.0)
            transport: Optional httpx transport, mainly for tests

        Returns:
            Configured AsyncMRStatClient instance
        """
        return cls(
            api_token=config.api_token,
            project_id=config.project_id,
            target_branch=config.target_branch,
            author_ids=config.author_ids,
            base_url=config.api_base,
            timeout=timeout,
            max_concurrency=config.max_concurrency,
            transport=transport,
        )

    def __repr__(self) -> str:
        return (
            f"AsyncMRStatClient(project_id={self.project_id!r}, "
            f"target_branch={self.target_branch!r}, author_ids={self.author_ids!r})"
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def open_merge_requests(self) -> list[MergeRequest]:
        """
        Query open merge requests on the configured branch.

        If author ids were given, only merge requests by those users are kept.
        Every returned merge request carries ``approvals_needed`` and ``blockers``.

        Returns:
            Enriched merge requests, in API order
        """
        return await collect_merge_requests(
            self.merge_requests,
            self.target_branch,
            self.author_ids,
            max_concurrency=self.max_concurrency,
        )

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncMRStatClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
