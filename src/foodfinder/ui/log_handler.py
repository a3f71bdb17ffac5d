"""Routes standard logging records into the TUI log panel.

Hides how records produced anywhere in the package reach the DebugPanel.
Records emitted off the UI thread are handed over with call_from_thread.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import DebugPanel


class DebugPanelHandler(logging.Handler):
    """logging.Handler that writes to a DebugPanel."""

    def __init__(self, panel: "DebugPanel", app: "App", level: int = logging.DEBUG) -> None:
        super().__init__(level=level)
        self._panel = panel
        self._app = app

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            self.handleError(record)
            return

        component = record.name.rsplit(".", 1)[-1]
        try:
            self._app.call_from_thread(self._panel.add_entry, component, message, record.levelno)
        except RuntimeError:
            # Already on the app thread (or the app is not running)
            self._panel.add_entry(component, message, record.levelno)
