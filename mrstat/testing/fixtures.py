"""
Pytest fixtures for mrstat testing.

Provides sample merge requests, API payloads and a mock merge request source.
"""

from collections.abc import Generator
from typing import Any

import pytest

from mrstat.config import MRStatConfig
from mrstat.testing.mock import MockMergeRequestsClient
from mrstat.types.merge_requests import Author, MergeRequest


# ============================================================================
# Builders
# ============================================================================


def create_mock_author(
    id: int = 11,
    username: str = "alice",
    **kwargs: Any,
) -> Author:
    """Create an Author with customizable fields."""
    defaults = {"name": username.capitalize()}
    defaults.update(kwargs)
    return Author(id=id, username=username, **defaults)


def create_mock_merge_request(
    iid: int = 1,
    title: str = "Test MR",
    author: Author | None = None,
    **kwargs: Any,
) -> MergeRequest:
    """
    Create a clean (mergeable, resolved, conflict-free) MergeRequest.

    Args:
        iid: Project-scoped merge request id
        title: Merge request title
        author: Author (default: alice, id 11)
        **kwargs: Additional fields to override

    Returns:
        MergeRequest object
    """
    defaults: dict[str, Any] = {
        "source_branch": f"feature-{iid}",
        "target_branch": "main",
        "state": "opened",
        "draft": False,
        "has_conflicts": False,
        "blocking_discussions_resolved": True,
        "merge_status": "can_be_merged",
        "web_url": f"https://gitlab.com/group/project/-/merge_requests/{iid}",
        "labels": (),
    }
    defaults.update(kwargs)
    return MergeRequest(
        iid=iid,
        title=title,
        author=author or create_mock_author(),
        **defaults,
    )


def create_merge_request_payload(
    iid: int = 1,
    title: str = "Test MR",
    author_id: int = 11,
    **kwargs: Any,
) -> dict[str, Any]:
    """Create a merge request as the list endpoint returns it."""
    payload: dict[str, Any] = {
        "id": 1000 + iid,
        "iid": iid,
        "project_id": 42,
        "title": title,
        "state": "opened",
        "source_branch": f"feature-{iid}",
        "target_branch": "main",
        "author": {
            "id": author_id,
            "name": f"User {author_id}",
            "username": f"user{author_id}",
        },
        "draft": False,
        "work_in_progress": False,
        "has_conflicts": False,
        "blocking_discussions_resolved": True,
        "merge_status": "can_be_merged",
        "labels": [],
        "web_url": f"https://gitlab.com/group/project/-/merge_requests/{iid}",
    }
    payload.update(kwargs)
    return payload


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_merge_requests() -> Generator[MockMergeRequestsClient, None, None]:
    """
    Provide a MockMergeRequestsClient for testing.

    Example:
        ```python
        async def test_my_feature(mock_merge_requests):
            mock_merge_requests.configure_list_open(response=[...])
            mrs = await collect_merge_requests(mock_merge_requests, "main")
            assert mock_merge_requests.was_called("list_open")
        ```
    """
    client = MockMergeRequestsClient()
    yield client
    client.reset()


@pytest.fixture
def sample_config() -> MRStatConfig:
    """Provide a valid configuration filtering on two authors."""
    return MRStatConfig(
        api_token="glpat-test-token-123456",
        project_id=42,
        target_branch="main",
        authors={"alice": 11, "bob": 12},
        api_base="https://gitlab.example.com/api/v4",
    )


@pytest.fixture
def sample_merge_request() -> MergeRequest:
    """Provide a clean, unenriched MergeRequest."""
    return create_mock_merge_request()


@pytest.fixture
def sample_blocked_merge_request() -> MergeRequest:
    """Provide an unenriched MergeRequest with conflicts and open threads."""
    return create_mock_merge_request(
        iid=2,
        title="Blocked MR",
        author=create_mock_author(id=12, username="bob"),
        has_conflicts=True,
        blocking_discussions_resolved=False,
        labels=("backend", "needs-review"),
    )
