"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Enter and closed panels
- Turn rendering (main text, citation, closing frame)
- Input history management
"""

from textual.containers import Center, Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, LoadingIndicator, Static, TextArea

from ..memory import Turn
from ..session import split_citation
from .config import INPUT_HISTORY_MAX_SIZE
from .formatting import citation_text, speaker_label


class EnterPanel(Vertical):
    """Landing view shown while the session is entering."""

    def compose(self):
        with Center():
            yield Static("𑁍", id="enter-lotus")
        with Center():
            yield Static("Kalyana", id="enter-title")
        with Center():
            yield Static("kalyāṇamitta · Dhamma guide", id="enter-subtitle")
        with Center():
            yield Static("Come as you are.\nThere is nothing to prepare.", id="enter-tagline")
        with Center():
            yield Button("Enter the Sala", id="enter-btn", variant="primary")
        with Center():
            yield Button("Begin fresh session", id="fresh-btn", classes="quiet-btn")
        with Center():
            yield Static("Your conversation is remembered on this device", id="enter-footnote")

    def show_fresh(self, has_history: bool) -> None:
        """Offer "Begin fresh session" only when there is something to discard."""
        self.query_one("#fresh-btn", Button).display = has_history

    def set_busy(self, busy: bool) -> None:
        """Hold the enter button while a discarded request is still settling."""
        self.query_one("#enter-btn", Button).disabled = busy


class TurnMessage(Vertical):
    """One rendered turn: main text plus citation for guide turns."""

    def __init__(self, turn: Turn, *args, **kwargs) -> None:
        classes = "turn user-turn" if turn.role == "user" else "turn guide-turn"
        if turn.closing:
            classes += " closing-turn"
        super().__init__(*args, classes=classes, **kwargs)
        self.turn = turn

    def compose(self):
        main, citation = split_citation(self.turn.content)
        yield Static(speaker_label(self.turn.role, self.turn.closing), classes="turn-header")
        yield Static(main, classes="turn-main", markup=False)
        if citation and self.turn.role == "assistant":
            yield Static(citation_text(citation), classes="citation")


class ErrorLine(Static):
    """Transient error message; clicking it dismisses the error."""

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.action_dismiss_error()


class ClosedPanel(Vertical):
    """Shown under the conversation once the session is closed."""

    def compose(self):
        yield Static(
            "The sala is still.\nYou may return whenever you are ready.",
            id="closed-text",
        )
        with Horizontal(id="closed-buttons"):
            yield Button("Return", id="return-btn", variant="primary")
            yield Button("Begin fresh session", id="closed-fresh-btn", classes="quiet-btn")


class ConversationView(VerticalScroll):
    """Scrollable list of turns with the thinking indicator and error line.

    Turns are append-only, so only new turns are mounted; anything else
    (reset, restored history) triggers a full rebuild.
    """

    BORDER_TITLE = "Sala"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered: list[Turn] = []

    def compose(self):
        yield Vertical(id="turns")
        yield LoadingIndicator(id="thinking")
        yield ErrorLine("", id="error-line")
        yield ClosedPanel(id="closed-panel")

    def show_turns(self, turns: tuple[Turn, ...]) -> None:
        container = self.query_one("#turns", Vertical)
        count = len(self._rendered)
        if list(turns[:count]) != self._rendered:
            container.remove_children()
            self._rendered = []
            count = 0
        new = turns[count:]
        if new:
            container.mount_all([TurnMessage(t) for t in new])
            self._rendered.extend(new)
            self.scroll_end(animate=False)
        self.border_subtitle = f"{len(self._rendered)} turns"

    def show_status(self, busy: bool, error: str | None, closed: bool) -> None:
        self.query_one("#thinking", LoadingIndicator).display = busy
        error_line = self.query_one("#error-line", ErrorLine)
        error_line.update(error or "")
        error_line.display = bool(error)
        self.query_one("#closed-panel", ClosedPanel).display = closed and not busy
        if busy or error or closed:
            self.scroll_end(animate=False)


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("↑", id="send-btn", variant="primary").with_tooltip(
            "Send (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.border_subtitle = "Ctrl+J to send · Enter for new line"

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
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
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        last_row = len(lines) - 1
        last_col = len(lines[-1])
        return text_area.cursor_location == (last_row, last_col)

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        if text_area.disabled:
            return
        value = text_area.text.strip()
        if value:
            if not self._history or self._history[-1] != value:
                self._history.append(value)
                del self._history[:-INPUT_HISTORY_MAX_SIZE]
            self._history_index = -1
            text_area.text = ""
            self.post_message(self.Submitted(value))

    def set_busy(self, busy: bool) -> None:
        """Disable input while a request is in flight."""
        self.query_one("#chat-input", TextArea).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()
