"""
Pytest plugin for mrstat testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["mrstat.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from mrstat.testing.fixtures import (
    mock_merge_requests,
    sample_blocked_merge_request,
    sample_config,
    sample_merge_request,
)

__all__ = [
    "mock_merge_requests",
    "sample_config",
    "sample_merge_request",
    "sample_blocked_merge_request",
]
