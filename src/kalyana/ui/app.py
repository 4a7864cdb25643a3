"""Main Textual TUI application.

Renders one SessionController and forwards user events to it. The app
holds no conversation state of its own: every redraw reads the controller.
"""

import asyncio
from collections.abc import Callable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, ContentSwitcher, Footer, Header, Static

from ..session import Phase, SessionController
from .config import CHAT_VIEW, ENTER_VIEW
from .styles import APP_CSS
from .themes import FOREST_SALA
from .widgets import ChatInputBar, ConversationView, EnterPanel


class KalyanaApp(App):
    """Textual TUI for a Kalyana session."""

    CSS = APP_CSS
    TITLE = "Kalyana"
    SUB_TITLE = "kalyāṇamitta · Dhamma guide"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+e", "end_session", "End session"),
        Binding("ctrl+r", "reset_session", "Begin fresh"),
        Binding("escape", "dismiss_error", "Dismiss", show=False),
    ]

    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self._controller = controller
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def controller(self) -> SessionController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header()
        with ContentSwitcher(initial=ENTER_VIEW, id="views"):
            yield EnterPanel(id=ENTER_VIEW)
            with Vertical(id=CHAT_VIEW):
                with Horizontal(id="chat-toolbar"):
                    yield Static("𑁍 Kalyana", id="chat-title")
                    yield Button("End session", id="end-btn")
                    yield Button("↺", id="reset-btn", classes="quiet-btn").with_tooltip(
                        "Clear history"
                    )
                yield ConversationView(id="conversation")
                yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(FOREST_SALA)
        self.theme = "forest-sala"
        self._unsubscribe = self._controller.subscribe(lambda _: self._sync())
        self._sync()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _sync(self) -> None:
        """Redraw every view from the controller state."""
        controller = self._controller
        phase = controller.phase
        switcher = self.query_one("#views", ContentSwitcher)

        if phase is Phase.ENTERING:
            switcher.current = ENTER_VIEW
            enter_panel = self.query_one(EnterPanel)
            enter_panel.show_fresh(controller.has_history)
            enter_panel.set_busy(controller.busy)
            return

        switcher.current = CHAT_VIEW
        conversation = self.query_one("#conversation", ConversationView)
        conversation.show_turns(controller.turns)
        conversation.show_status(
            busy=controller.busy,
            error=controller.error,
            closed=phase is Phase.CLOSED,
        )

        active = phase is Phase.ACTIVE
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.display = active
        input_bar.set_busy(controller.busy)
        end_btn = self.query_one("#end-btn", Button)
        end_btn.display = active
        end_btn.disabled = controller.busy
        if active and not controller.busy:
            input_bar.focus_input()

    # ------------------------------------------------------------------ events

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "enter-btn":
            self._begin()
        elif button_id in ("fresh-btn", "closed-fresh-btn", "reset-btn"):
            self.action_reset_session()
        elif button_id == "end-btn":
            self.action_end_session()
        elif button_id == "return-btn":
            self._controller.resume()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        self._submit(event.value)

    @work(group="session")
    async def _begin(self) -> None:
        await self._controller.begin()

    @work(group="session")
    async def _submit(self, text: str) -> None:
        await self._controller.submit(text)

    @work(group="session")
    async def _end(self) -> None:
        await self._controller.end()

    # ----------------------------------------------------------------- actions

    def action_end_session(self) -> None:
        if self._controller.phase is Phase.ACTIVE and not self._controller.busy:
            self._end()

    def action_reset_session(self) -> None:
        self._controller.reset()
        self.notify("History cleared", timeout=2)

    def action_dismiss_error(self) -> None:
        self._controller.dismiss_error()


async def run_textual_tui(controller: SessionController) -> None:
    """Run the Textual TUI until the user quits.

    Args:
        controller: The session to display; the caller owns its resources
    """
    app = KalyanaApp(controller)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
