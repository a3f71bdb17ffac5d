"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Warm "kitchen" palette: tomato primary, basil success, saffron accent
FOOD_FINDER_DARK = Theme(
    name="food-finder-dark",
    primary="#f28c6b",      # Tomato - main accent, user bubbles
    secondary="#9ccfd8",    # Steel blue - assistant bubbles
    accent="#f6c177",       # Saffron - dialog highlights
    foreground="#e0def4",
    background="#191724",
    success="#8fbf7f",      # Basil - send button
    warning="#f6c177",
    error="#eb6f92",        # Offline banner
    surface="#1f1d2e",
    panel="#211f31",
    dark=True,
    variables={
        "border": "#403d52",
        "border-blurred": "#26233a",

        "scrollbar": "#26233a",
        "scrollbar-hover": "#403d52",
        "scrollbar-active": "#f28c6b",
        "scrollbar-background": "#211f31",

        "footer-key-foreground": "#f6c177",
        "footer-background": "#191724",

        "text-muted": "#6e6a86",
        "text-disabled": "#524f67",

        "input-selection-background": "#f28c6b 30%",
    },
)
