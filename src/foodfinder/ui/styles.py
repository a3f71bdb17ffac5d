"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout: a single column with the transcript on top, an optional log panel
below it, and the input bar docked at the bottom. The offline banner sits
between the header and the transcript and is hidden while connected.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Offline Banner
   ============================================ */
#connection-banner {
    width: 100%;
    height: 1;
    content-align: center middle;
    text-style: bold;
    background: $error;
    color: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: tall $success;
    background: $success;
    color: $background;
    text-style: bold;

    &:hover {
        background: $success-lighten-1;
    }

    &:disabled {
        border: tall $border;
        background: $surface;
        color: $text-disabled;
    }
}

/* ============================================
   Chat Messages - Bubbles
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
    background: transparent;

    & .message-header {
        height: auto;
        text-style: bold;
    }

    & .message-content {
        height: auto;
        color: $foreground;
    }
}

.user-message {
    margin-left: 12;
    border-right: tall $primary;
    background: $primary 10%;

    & .message-header {
        color: $primary;
        text-align: right;
    }
}

.assistant-message {
    margin-right: 12;
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
    }

    &:hover {
        background: $secondary 12%;
    }
}

.loading-message {
    color: $text-muted;
    text-style: italic;
}

Markdown {
    margin: 0;
    padding: 0;
}

Header {
    background: $panel;
    color: $foreground;
}

Footer {
    background: $panel;
}
"""
