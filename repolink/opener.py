"""Open URLs in the host's browser."""

import logging
import webbrowser

logger = logging.getLogger(__name__)


def open_url(url: str) -> bool:
    """Open url with the platform's default browser.

    Honors the BROWSER environment variable through the webbrowser module.

    Returns:
        True if a browser was launched
    """
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.debug(f"webbrowser failed for {url}: {e}")
        return False

    if not opened:
        logger.debug(f"No runnable browser found for {url}")
    return opened
