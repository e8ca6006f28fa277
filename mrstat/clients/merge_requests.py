"""Async merge requests resource client."""

from typing import TYPE_CHECKING, Any

from mrstat.exceptions import DecodeError
from mrstat.types.merge_requests import ApprovalStatus, Author, MergeRequest

if TYPE_CHECKING:
    from mrstat.transport import AsyncHTTPTransport


class AsyncMergeRequestsClient:
    """Async client for merge request operations of one project."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async merge requests client.

        Args:
            transport: Async HTTP transport bound to the project base URL
        """
        self.transport = transport

    async def list_open(self, target_branch: str) -> list[MergeRequest]:
        """
        List open merge requests against a branch.

        Lists every open merge request of the project (``scope=all``), not only
        those authored by the token owner. Only the first page returned by the
        API is read.

        Args:
            target_branch: Branch the merge requests target

        Returns:
            List of MergeRequest objects, in API order and unfiltered
        """
        response = await self.transport.get(
            "/merge_requests",
            params={
                "scope": "all",
                "state": "opened",
                "target_branch": target_branch,
            },
        )

        if not isinstance(response, list):
            raise DecodeError(
                f"expected a list of merge requests, got {type(response).__name__}"
            )
        return [self._parse_merge_request(mr) for mr in response]

    async def get_approvals(self, iid: int) -> ApprovalStatus:
        """
        Get the approval status of a merge request.

        Args:
            iid: Project-scoped merge request id

        Returns:
            ApprovalStatus with required and remaining approvals
        """
        response = await self.transport.get(f"/merge_requests/{iid}/approvals")

        if not isinstance(response, dict):
            raise DecodeError(f"no approval data for merge request {iid}")

        approvals_left = response.get("approvals_left")
        if not _is_int(approvals_left):
            raise DecodeError(f"no approval data for merge request {iid}")

        approvals_required = response.get("approvals_required")
        if approvals_required is None:
            approvals_required = 0
        elif not _is_int(approvals_required):
            raise DecodeError(
                f"malformed `approvals_required` for merge request {iid}: "
                f"{approvals_required!r}"
            )

        return ApprovalStatus(
            iid=iid,
            approvals_required=approvals_required,
            approvals_left=approvals_left,
        )

    def _parse_merge_request(self, data: Any) -> MergeRequest:
        """Parse merge request data from API response."""
        try:
            author_data = data["author"]
            author = Author(
                id=author_data["id"],
                name=author_data.get("name", ""),
                username=author_data.get("username", ""),
            )

            labels = data.get("labels") or []
            if not isinstance(labels, list) or not all(
                isinstance(label, str) for label in labels
            ):
                raise DecodeError(f"malformed `labels` in merge request: {labels!r}")

            return MergeRequest(
                iid=data["iid"],
                title=_require_str(data, "title"),
                source_branch=data.get("source_branch", ""),
                target_branch=data.get("target_branch", ""),
                author=author,
                state=data.get("state", "opened"),
                draft=bool(data.get("draft", data.get("work_in_progress", False))),
                has_conflicts=bool(data.get("has_conflicts", False)),
                blocking_discussions_resolved=bool(
                    data.get("blocking_discussions_resolved", True)
                ),
                merge_status=_require_str(data, "merge_status", "unchecked"),
                web_url=_require_str(data, "web_url", ""),
                labels=tuple(labels),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"malformed merge request in response: {e!r}") from e


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_str(data: dict[str, Any], key: str, default: str | None = None) -> str:
    """``data[key]`` as a string; ``default`` (if given) replaces a missing or null value."""
    value = data.get(key)
    if value is None and default is not None:
        return default
    if not isinstance(value, str):
        raise DecodeError(f"malformed `{key}` in merge request: {value!r}")
    return value
