"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Candle-lit forest palette: deep green ground, gold accents
FOREST_SALA = Theme(
    name="forest-sala",
    primary="#c8a96e",      # Candle gold - main accent
    secondary="#8faa6a",    # Moss - links and citations
    accent="#e8d5a3",       # Parchment - highlights
    foreground="#d9cfb4",   # Warm light text
    background="#0f1a0e",   # Forest floor
    success="#8faa6a",
    warning="#c8a96e",
    error="#c8800a",        # Ember
    surface="#142313",
    panel="#1a2b18",
    dark=True,
    variables={
        "block-cursor-foreground": "#0f1a0e",
        "block-cursor-background": "#c8a96e",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#e8d5a3",
        "input-cursor-foreground": "#0f1a0e",
        "input-selection-background": "#c8a96e 30%",
        "border": "#3a5033",
        "border-blurred": "#26361f",
        "scrollbar": "#26361f",
        "scrollbar-hover": "#3a5033",
        "scrollbar-active": "#c8a96e",
        "scrollbar-background": "#0f1a0e",
        "footer-background": "#0f1a0e",
        "footer-key-foreground": "#c8a96e",
        "footer-description-foreground": "#7a9070",
    },
)
