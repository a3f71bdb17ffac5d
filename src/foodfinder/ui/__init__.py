"""Terminal UI module for foodfinder.

Provides a Textual-based TUI over a ChatSession.

Module structure (Parnas principle - each module hides a design decision):
- config.py: UI constants and log levels
- widgets.py: Custom widgets (chat bubbles, input bar, offline banner, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette and theme configuration
- screens.py: Modal dialogs (outbound-call disclosure)
- log_handler.py: How logging records reach the log panel
- app.py: Application orchestration (user interaction flow)
"""

from .app import FoodFinderApp, run_textual_tui
from .config import LogLevel
from .log_handler import DebugPanelHandler
from .screens import ConsentScreen
from .widgets import ChatHistoryWidget, ChatInputBar, ConnectionBanner, DebugPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ConnectionBanner",
    "ConsentScreen",
    "DebugPanel",
    "DebugPanelHandler",
    "FoodFinderApp",
    "LogLevel",
    "run_textual_tui",
]
