"""Entry point for ``python -m repolink``."""

from .cli import main

if __name__ == "__main__":
    main()
