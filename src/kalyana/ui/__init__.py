"""Terminal UI module for kalyana.

Provides a Textual-based TUI for a Kalyana session.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (turn rendering, panels, input history)
- formatting.py: Rich renderables for citations and headers
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- app.py: Application orchestration (user interaction flow)
"""

from .app import KalyanaApp, run_textual_tui
from .widgets import ChatInputBar, ConversationView, EnterPanel, TurnMessage

__all__ = [
    "ChatInputBar",
    "ConversationView",
    "EnterPanel",
    "KalyanaApp",
    "TurnMessage",
    "run_textual_tui",
]
