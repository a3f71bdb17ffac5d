"""Main Textual TUI application.

Presents a ChatSession: mirrors its message log, shows the disclosure when
consent is needed, and keeps the send control in step with connectivity and
in-flight requests. All session calls run on the app's event loop.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat import (
    BusyChanged,
    ChatSession,
    ConnectivityChange,
    ConsentRequested,
    LogChange,
    LogChangeKind,
    ReachabilityProbe,
)
from .config import PROBE_INTERVAL_SECONDS, LogLevel
from .log_handler import DebugPanelHandler
from .screens import ConsentScreen
from .styles import APP_CSS
from .themes import FOOD_FINDER_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, ConnectionBanner, DebugPanel

logger = logging.getLogger(__name__)


class FoodFinderApp(App):
    """Textual TUI for Food Finder."""

    CSS = APP_CSS
    TITLE = "Food Finder"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        session: ChatSession,
        probe: ReachabilityProbe | None = None,
        probe_interval: float = PROBE_INTERVAL_SECONDS,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._probe = probe
        self._probe_interval = probe_interval
        self._log_level = log_level
        self._log_handler: DebugPanelHandler | None = None
        self._unsubscribers: list[Callable[[], None]] = []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ConnectionBanner(id="connection-banner")
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(FOOD_FINDER_DARK)
        self.theme = "food-finder-dark"

        debug_panel = self.query_one("#debug-panel", DebugPanel)
        self._install_log_handler(debug_panel)
        if self._log_level is not None:
            debug_panel.log_level = LogLevel.from_string(self._log_level)
            debug_panel.show()

        self.sub_title = self._session_model_name()

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        for message in self._session.log:
            chat.add_message(message)

        self._unsubscribers.append(self._session.log.subscribe(self._on_log_change))
        self._unsubscribers.append(self._session.subscribe(self._on_session_event))

        await self._session.start()
        self._refresh_controls()

        if self._probe is not None:
            self.run_worker(
                self._session.monitor.run(self._probe, self._probe_interval),
                name="connectivity",
                group="connectivity",
                exit_on_error=False,
            )

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach from the session and stop routing log records."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        if self._log_handler is not None:
            logging.getLogger("foodfinder").removeHandler(self._log_handler)
            self._log_handler = None

    def _install_log_handler(self, panel: DebugPanel) -> None:
        self._log_handler = DebugPanelHandler(panel, app=self)
        package_logger = logging.getLogger("foodfinder")
        package_logger.addHandler(self._log_handler)
        package_logger.setLevel(logging.DEBUG)

    def _session_model_name(self) -> str:
        return self._session.client.model

    def _on_log_change(self, change: LogChange) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        if change.kind is LogChangeKind.APPENDED:
            chat.add_message(change.message)
        else:
            chat.remove_message(change.message)

    def _on_session_event(self, event: Any) -> None:
        if isinstance(event, ConsentRequested):
            self.push_screen(ConsentScreen(), self._on_consent_answer)
        elif isinstance(event, ConnectivityChange):
            self.query_one("#connection-banner", ConnectionBanner).set_connected(event.connected)
            self._refresh_controls()
        elif isinstance(event, BusyChanged):
            self._refresh_controls()

    def _refresh_controls(self) -> None:
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.set_send_enabled(self._session.connected and not self._session.busy)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._submit(event.value)

    @work(group="submit")
    async def _submit(self, text: str) -> None:
        try:
            await self._session.submit_text(text)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Submission failed")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)

    def _on_consent_answer(self, accepted: bool | None) -> None:
        if accepted:
            self._grant_and_flush()
        else:
            self._session.cancel_pending()
            self.notify("Message not sent", severity="warning", timeout=2)

    @work(group="submit")
    async def _grant_and_flush(self) -> None:
        await self._session.grant_consent()
        await self._session.flush_pending()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        debug_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = debug_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last reply to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    session: ChatSession,
    probe: ReachabilityProbe | None = None,
    probe_interval: float = PROBE_INTERVAL_SECONDS,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session to present
        probe: Reachability probe polled in the background (None disables polling)
        probe_interval: Seconds between probes
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = FoodFinderApp(
        session=session,
        probe=probe,
        probe_interval=probe_interval,
        log_level=log_level,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        session.close()
