"""mrstat - status report of open merge requests."""

__version__ = "0.1.0"

from mrstat.aggregate import collect_merge_requests
from mrstat.blockers import find_blockers
from mrstat.client import AsyncMRStatClient
from mrstat.config import MRStatConfig, load_config
from mrstat.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DecodeError,
    HTTPError,
    MRStatError,
    NotFoundError,
    ServerError,
    TransportError,
)
from mrstat.filters import filter_by_authors
from mrstat.logging import configure_logging, get_logger
from mrstat.report import Report, format_merge_requests, group_merge_requests
from mrstat.transport import AsyncHTTPTransport
from mrstat.types import ApprovalStatus, Author, MergeRequest

__all__ = [
    "__version__",
    # Main Client
    "AsyncMRStatClient",
    # Configuration
    "MRStatConfig",
    "load_config",
    # Aggregation
    "collect_merge_requests",
    "filter_by_authors",
    "find_blockers",
    # Report
    "Report",
    "group_merge_requests",
    "format_merge_requests",
    # Types
    "Author",
    "MergeRequest",
    "ApprovalStatus",
    # Exceptions
    "MRStatError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "HTTPError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ServerError",
    # Transport
    "AsyncHTTPTransport",
    # Logging
    "configure_logging",
    "get_logger",
]
