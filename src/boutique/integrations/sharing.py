"""
SYSTEM SHARER
Hands an exported file to the desktop (default browser / PDF viewer).
"""

import logging
import os
import sys
import webbrowser
from pathlib import Path

from boutique.core.exceptions import ShareError

logger = logging.getLogger(__name__)


class SystemSharer:
    """Opens exported files with the system's default application."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def is_available(self) -> bool:
        """False on headless machines or when sharing is switched off."""
        if not self.enabled:
            return False
        headless = not (os.getenv('DISPLAY') or os.getenv('WAYLAND_DISPLAY'))
        if os.name != 'nt' and sys.platform != 'darwin' and headless:
            return False
        try:
            webbrowser.get()
        except webbrowser.Error:
            return False
        return True

    def share(self, path: Path):
        """
        Raises:
            ShareError: The file is missing or no application accepted it
        """
        path = Path(path)
        if not path.exists():
            raise ShareError(f"Cannot share missing file: {path}")
        opened = webbrowser.open(path.resolve().as_uri())
        if not opened:
            raise ShareError(f"No application could open {path}")
        logger.info(f"Document shared: {path}")
