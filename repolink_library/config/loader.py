"""Configuration loading for repolink.

This module handles loading configuration from YAML files
and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: RepolinkSettings objects
- Side Effects: Creates default config file if missing
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import RepolinkSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# repolink configuration
# Every key can be overridden with a REPOLINK_<KEY> environment variable

# Prefer linking to the current "branch" or the current "commit"
priority: "branch"

# Remote to build links for (default: git's remote.pushDefault, then origin)
# remote: "origin"

# Resolve SSH host aliases (~/.ssh/config) to real host names
resolve_ssh_aliases: true

# Scheme of generated links
web_scheme: "http"

# Used when the remote default branch (<remote>/HEAD) is unknown
fallback_branch: "main"

# Seconds before a git or ssh query is abandoned
command_timeout: 5.0

log_level: "warning"
log_to_file: false
"""


def get_config_path() -> Path:
    """Get path to config file.

    Returns:
        Path to repolink.yaml in config directory

    Example:
        >>> config_path = get_config_path()
        >>> assert config_path.name == "repolink.yaml"
    """
    return get_config_dir() / "repolink.yaml"


def create_default_config() -> None:
    """Create default config file if it doesn't exist.

    Example:
        >>> create_default_config()
        >>> assert get_config_path().exists()
    """
    config_path = get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return

    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")


def load_config(config_path: Path | None = None) -> RepolinkSettings:
    """Load configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with REPOLINK_ (e.g., REPOLINK_PRIORITY).

    Args:
        config_path: Optional config file path (default: repolink.yaml in config dir)

    Returns:
        Validated settings

    Example:
        >>> settings = load_config()
        >>> assert isinstance(settings, RepolinkSettings)
    """
    if config_path is None:
        config_path = get_config_path()
        if not config_path.exists():
            create_default_config()

    yaml_settings = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}")
        except Exception as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")

    if not isinstance(yaml_settings, dict):
        logger.warning(f"Ignoring config {config_path}: expected a mapping, got {type(yaml_settings).__name__}")
        yaml_settings = {}

    # Precedence: defaults < YAML < env vars, so drop YAML keys that have an env override
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"REPOLINK_{str(key).upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    settings = RepolinkSettings(**filtered_yaml)

    logger.debug(
        f"Configuration loaded: priority={settings.priority}, remote={settings.remote}, "
        f"web_scheme={settings.web_scheme}, log_level={settings.log_level}"
    )

    return settings
