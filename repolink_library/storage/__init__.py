"""Storage module for repolink_library.

Resolves the on-disk locations repolink reads its configuration from
and writes its logs to.

Public Interface:
    - get_home_dir: Get REPOLINK_HOME
    - get_config_dir: Get config directory
    - get_log_dir: Get log directory
"""

from .paths import get_config_dir
from .paths import get_home_dir
from .paths import get_log_dir

__all__ = [
    "get_home_dir",
    "get_config_dir",
    "get_log_dir",
]
