"""
mrstat configuration.

Configuration lives in a JSON file (``~/.mrstat.json`` by default)::

    {
        "api_token": "glpat-...",
        "project_id": 1234,
        "target_branch": "main",
        "authors": {"alice": 11, "bob": 12}
    }
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mrstat.exceptions import ConfigurationError
from mrstat.logging import get_logger

logger = get_logger("config")

DEFAULT_CONFIG_PATH = "~/.mrstat.json"
DEFAULT_API_BASE = "https://gitlab.com/api/v4"
DEFAULT_TARGET_BRANCH = "main"

CONFIG_PATH_ENV = "MRSTAT_CONFIG"
API_TOKEN_ENV = "MRSTAT_API_TOKEN"


@dataclass(frozen=True)
class MRStatConfig:
    """Validated configuration for one run."""

    api_token: str = field(repr=False)
    project_id: int
    target_branch: str = DEFAULT_TARGET_BRANCH
    authors: Mapping[str, int] = field(default_factory=dict)
    api_base: str = DEFAULT_API_BASE
    max_concurrency: int | None = None

    @property
    def author_ids(self) -> tuple[int, ...]:
        """Ids to filter on; the author names are only labels."""
        return tuple(self.authors.values())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MRStatConfig":
        """
        Build and validate a configuration from parsed JSON.

        Raises:
            ConfigurationError: If a required field is missing or a field has the wrong type
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("configuration must be a JSON object")

        api_token = data.get("api_token")
        if not api_token or not isinstance(api_token, str):
            raise ConfigurationError(
                "missing `api_token`: see "
                "https://docs.gitlab.com/ee/user/profile/personal_access_tokens.html"
            )

        project_id = data.get("project_id")
        if not project_id:
            raise ConfigurationError(
                "missing `project_id`: you can find Project ID in your project settings"
            )
        if not _is_int(project_id):
            raise ConfigurationError("`project_id` must be an integer")

        authors = data.get("authors") or {}
        if not isinstance(authors, Mapping):
            raise ConfigurationError("`authors` must map names to numeric user ids")
        for name, author_id in authors.items():
            if not _is_int(author_id):
                raise ConfigurationError(
                    f"`authors.{name}` must be a numeric user id, got {author_id!r}"
                )
        if not authors:
            logger.warning("missing or empty property `authors`")
            logger.warning("all open project MRs will be returned")

        target_branch = data.get("target_branch")
        if not target_branch:
            logger.warning(
                "Configuration missing branch name; defaulting to %s",
                DEFAULT_TARGET_BRANCH,
            )
            target_branch = DEFAULT_TARGET_BRANCH
        elif not isinstance(target_branch, str):
            raise ConfigurationError("`target_branch` must be a string")

        api_base = data.get("api_base") or DEFAULT_API_BASE
        if not isinstance(api_base, str):
            raise ConfigurationError("`api_base` must be a URL string")

        max_concurrency = data.get("max_concurrency")
        if max_concurrency is not None and (
            not _is_int(max_concurrency) or max_concurrency < 1
        ):
            raise ConfigurationError("`max_concurrency` must be a positive integer")

        return cls(
            api_token=api_token,
            project_id=project_id,
            target_branch=target_branch,
            authors=dict(authors),
            api_base=api_base.rstrip("/"),
            max_concurrency=max_concurrency,
        )


def resolve_config_path(path: str | os.PathLike[str] | None = None) -> Path:
    """Explicit path, else ``$MRSTAT_CONFIG``, else ``~/.mrstat.json``."""
    if path is None:
        path = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
    return Path(path).expanduser()


def load_config(path: str | os.PathLike[str] | None = None) -> MRStatConfig:
    """
    Load configuration from a JSON file.

    ``$MRSTAT_API_TOKEN`` overrides the ``api_token`` of the file when set.

    Args:
        path: Configuration file (default: ``$MRSTAT_CONFIG`` or ``~/.mrstat.json``)

    Returns:
        Validated MRStatConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = resolve_config_path(path)
    logger.info("Checking for configuration file %s", config_path)

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"cannot read configuration file {config_path}: {e.strerror or e}"
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"configuration file {config_path} is not valid JSON: {e}"
        ) from e

    token_override = os.environ.get(API_TOKEN_ENV)
    if token_override and isinstance(data, dict):
        data = {**data, "api_token": token_override}

    return MRStatConfig.from_dict(data)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
