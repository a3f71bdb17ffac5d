"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat bubble rendering and removal of superseded entries
- Send control enablement
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..chat import ChatMessage
from ..chat.notices import LOADING_PLACEHOLDER
from .config import (
    ASSISTANT_LABEL,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    USER_LABEL,
    LogLevel,
)


class ClickableMessage(Vertical):
    """A chat bubble that copies its raw content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class ConnectionBanner(Static):
    """Banner shown only while the network is unreachable."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("No Internet Connection", *args, **kwargs)

    def on_mount(self) -> None:
        self.display = False

    def set_connected(self, connected: bool) -> None:
        self.display = not connected


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button.

    Submission is suppressed while the send control is disabled, and the
    typed text is kept so it can be sent once sending is possible again.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._send_enabled = True

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()
        self._update_send_button()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._update_send_button()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()

    def set_send_enabled(self, enabled: bool) -> None:
        """Allow or forbid sending. The button also stays disabled while the input is blank."""
        self._send_enabled = enabled
        self._update_send_button()

    def _update_send_button(self) -> None:
        text = self.query_one("#chat-input", TextArea).text
        self.query_one("#send-btn", Button).disabled = not (self._send_enabled and text.strip())

    def _submit(self) -> None:
        if not self._send_enabled:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text.strip()
        if value:
            text_area.text = ""
            self._update_send_button()
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log records from all components.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    COMPONENT_COLORS = {
        "session": "green",
        "gemini": "magenta",
        "connectivity": "blue",
        "consent": "yellow",
        "conversation": "cyan",
        "message_log": "bright_black",
        "sqlite": "bright_green",
    }

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def add_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Short component name (session, gemini, ...)
            message: Log message
            level: Numeric log level
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_name = LogLevel.name(level)
        level_color = self.LEVEL_COLORS[LogLevel.from_string(level_name)]
        comp_color = self.COMPONENT_COLORS.get(component, "white")

        line = Text.from_markup(
            f"[dim]{timestamp}[/] [{level_color}]{level_name:<5}[/] [{comp_color}]\\[{component}][/] "
        )
        line.append(message)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat transcript mirroring the session's message log."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[ChatMessage] = []
        self._widgets: dict[str, ClickableMessage] = {}

    def add_message(self, message: ChatMessage) -> None:
        """Render a new log entry at the bottom."""
        self._messages.append(message)
        container = self._render_message(message)
        self._widgets[str(message.id)] = container
        self.mount(container)
        self._update_subtitle()
        self.scroll_end(animate=False)

    def remove_message(self, message: ChatMessage) -> None:
        """Remove the bubble for a log entry that was withdrawn."""
        self._messages = [m for m in self._messages if m.id != message.id]
        container = self._widgets.pop(str(message.id), None)
        if container is not None:
            container.remove()
        self._update_subtitle()

    def get_last_response(self) -> str | None:
        """Get the newest system-authored entry, ignoring the loading placeholder."""
        for message in reversed(self._messages):
            if not message.is_user and message.content != LOADING_PLACEHOLDER:
                return message.content
        return None

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"{len(self._messages)} messages"

    def _render_message(self, message: ChatMessage) -> ClickableMessage:
        if message.is_user:
            label, css_class = USER_LABEL, "user-message"
        else:
            label, css_class = ASSISTANT_LABEL, "assistant-message"

        header = f"{label}  {message.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)}"
        container = ClickableMessage(content=message.content, classes=f"chat-message {css_class}")
        container.compose_add_child(Static(header, classes="message-header", markup=False))

        if message.is_user:
            body = Static(message.content, classes="message-content", markup=False)
        elif message.content == LOADING_PLACEHOLDER:
            body = Static(message.content, classes="message-content loading-message", markup=False)
        else:
            # Recommendations come back as Markdown (headings, bullets, steps)
            body = Markdown(message.content, classes="message-content")
        container.compose_add_child(body)
        return container
