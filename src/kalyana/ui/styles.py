"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    background: $background;
}

#views {
    height: 1fr;
}

/* Enter view */
#enter-view {
    align: center middle;
    height: 100%;
}

#enter-lotus {
    color: $primary;
    text-style: bold;
    margin-bottom: 1;
}

#enter-title {
    color: $accent;
    text-style: bold;
}

#enter-subtitle {
    color: $text-muted;
    text-style: italic;
    margin-bottom: 1;
}

#enter-tagline {
    color: $foreground;
    text-align: center;
    margin: 1 0 2 0;
}

#enter-footnote {
    color: $text-muted;
    margin-top: 2;
}

Center {
    height: auto;
}

.quiet-btn {
    background: transparent;
    border: none;
    color: $text-muted;

    &:hover {
        color: $error;
    }
}

/* Chat view */
#chat-view {
    height: 100%;
}

#chat-toolbar {
    height: 3;
    padding: 0 1;
    border-bottom: solid $border;
}

#chat-title {
    width: 1fr;
    color: $accent;
    text-style: bold;
    content-align: left middle;
    height: 3;
}

#end-btn {
    min-width: 14;
}

#reset-btn {
    min-width: 5;
}

#conversation {
    height: 1fr;
    padding: 0 1;
    border: round $border;
    border-title-color: $primary;
    border-subtitle-color: $text-muted;
    scrollbar-gutter: stable;
}

#turns {
    height: auto;
}

.turn {
    height: auto;
    width: 80%;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-turn {
    margin-left: 12;
    border-right: tall $primary 60%;
    background: $primary 8%;
}

.guide-turn {
    border-left: tall $secondary 60%;
    background: $panel;
}

.closing-turn {
    border-top: solid $primary 50%;
    border-bottom: solid $primary 50%;
}

.turn-header {
    color: $text-muted;
    text-style: bold;
}

.user-turn .turn-header {
    text-align: right;
}

.turn-main {
    color: $foreground;
}

.citation {
    margin-top: 1;
    padding-top: 1;
    border-top: dashed $primary 30%;
}

#thinking {
    height: 3;
    color: $primary;
}

#error-line {
    color: $error;
    text-align: center;
    margin: 1 0;
}

#closed-panel {
    height: auto;
    align: center top;
    margin: 2 0;
}

#closed-text {
    width: 100%;
    color: $text-muted;
    text-align: center;
    text-style: italic;
}

#closed-buttons {
    height: auto;
    align: center middle;
    margin-top: 1;
}

#chat-input-bar {
    height: auto;
    max-height: 10;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
    height: auto;
    min-height: 3;
    max-height: 8;
    border: round $border;

    &:focus {
        border: round $primary;
    }
}

#send-btn {
    min-width: 5;
    margin-left: 1;
}
"""
