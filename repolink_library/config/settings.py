"""Settings models for repolink.

This module defines the configuration structure for building and opening
repository links.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

import logging
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

logger = logging.getLogger(__name__)

PRIORITIES = ("branch", "commit")


class RepolinkSettings(BaseSettings):
    """Configuration for repolink.

    Attributes:
        priority: Revision preference, "branch" or "commit" (default: branch)
        remote: Remote to link against (default: git's push-default remote)
        resolve_ssh_aliases: Resolve SSH host aliases via ``ssh -G`` (default: True)
        web_scheme: Scheme of the built web URLs (default: http)
        fallback_branch: Branch used when the remote default branch is unknown
        command_timeout: Seconds before a git/ssh query is abandoned (default: 5.0)
        log_level: Logging level (default: warning)
        log_to_file: Also write logs to $REPOLINK_HOME/logs/repolink.log

    Example:
        >>> settings = RepolinkSettings()
        >>> assert settings.priority == "branch"
        >>> assert settings.web_scheme == "http"
    """

    model_config = SettingsConfigDict(
        env_prefix="REPOLINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    priority: str = "branch"
    remote: str | None = None
    resolve_ssh_aliases: bool = True
    web_scheme: Literal["http", "https"] = "http"
    fallback_branch: str = "main"
    command_timeout: float = 5.0
    log_level: str = "warning"
    log_to_file: bool = False

    @field_validator("priority", mode="before")
    @classmethod
    def known_priority(cls, v: object) -> str:
        """Normalize the priority; unrecognized values mean "branch"."""
        priority = str(v).strip().lower() if v is not None else ""
        if priority not in PRIORITIES:
            logger.warning(f"Unknown priority {v!r}, using branch")
            return "branch"
        return priority

    @field_validator("web_scheme", mode="before")
    @classmethod
    def lowercase_scheme(cls, v: str) -> str:
        """Accept the scheme regardless of case ("Https")."""
        return v.lower() if isinstance(v, str) else v

    @field_validator("command_timeout")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("command_timeout must be positive")
        return v
