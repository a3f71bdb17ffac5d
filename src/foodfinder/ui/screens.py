"""Modal screens for the TUI.

This module hides the design decisions about:
- How the outbound-call disclosure is presented
- Button styling and keyboard shortcuts for the dialog

To change how the disclosure looks, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from ..chat.notices import CONSENT_DISCLOSURE, CONSENT_TITLE


class ConsentScreen(ModalScreen[bool]):
    """Disclosure shown before the first outbound call.

    Dismisses with True for OK and False for Cancel.
    """

    CSS = """
    ConsentScreen {
        align: center middle;
        background: $background 70%;
    }

    #consent-dialog {
        width: 60;
        height: auto;
        max-height: 20;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #consent-title {
        width: 100%;
        height: auto;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #consent-message {
        width: 100%;
        height: auto;
        text-align: center;
        padding: 1 2;
        background: $panel;
        border: round $border;
        margin-bottom: 1;
    }

    #consent-buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }

    #consent-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("enter", "accept", "OK", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="consent-dialog"):
            yield Static(CONSENT_TITLE, id="consent-title")
            yield Static(CONSENT_DISCLOSURE, id="consent-message")
            with Horizontal(id="consent-buttons"):
                yield Button("OK", id="btn-ok", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-ok")

    def action_accept(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
