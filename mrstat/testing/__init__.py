"""mrstat testing utilities.

Provides a mock merge request source and builders for testing code that uses mrstat.
"""

from mrstat.testing.fixtures import (
    create_merge_request_payload,
    create_mock_author,
    create_mock_merge_request,
)
from mrstat.testing.mock import MockCall, MockMergeRequestsClient, MockResponse

__all__ = [
    # Mock client
    "MockMergeRequestsClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_author",
    "create_mock_merge_request",
    "create_merge_request_payload",
]
