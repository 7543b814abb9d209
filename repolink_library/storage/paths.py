"""Where repolink keeps its files.

repolink only stores two things on disk: its YAML configuration
(``repolink.yaml``) and, when ``log_to_file`` is enabled, ``repolink.log``.
Both live below REPOLINK_HOME unless overridden.

Contract:
- Inputs: Environment variables (REPOLINK_HOME, REPOLINK_CONFIG_DIR, REPOLINK_LOG_DIR)
- Outputs: Resolved Path objects
- Side Effects: Creates the config and log directories on first use
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get the repolink home directory.

    Not created here; only the config and log directories below it are.

    Returns:
        REPOLINK_HOME, or ~/.repolink when unset
    """
    root = os.environ.get("REPOLINK_HOME", "~/.repolink")
    return Path(root).expanduser().resolve()


def get_config_dir() -> Path:
    """Get the directory holding repolink.yaml.

    Returns:
        $REPOLINK_CONFIG_DIR, else $REPOLINK_HOME/config
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("REPOLINK_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).expanduser().resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_log_dir() -> Path:
    """Get the directory the CLI writes repolink.log to when log_to_file is set.

    Returns:
        $REPOLINK_LOG_DIR, else $REPOLINK_HOME/logs

    Example:
        >>> (get_log_dir() / "repolink.log").name
        'repolink.log'
    """
    log_dir: Path = get_home_dir() / "logs"

    env_override: str | None = os.environ.get("REPOLINK_LOG_DIR")
    if env_override is not None:
        log_dir = Path(env_override).expanduser().resolve()

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
