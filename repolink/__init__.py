"""repolink command line interface.

Open the current file, line range or repository tree of a git working
copy in its web UI (GitHub, GitLab and compatible hosts).
"""

__version__ = "0.1.0"
