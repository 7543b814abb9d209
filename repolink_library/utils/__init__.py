"""Utility helpers for repolink_library."""

from .git_url import parse_remote_url

__all__ = [
    "parse_remote_url",
]
