"""Tests for the Textual interface."""
import asyncio

import pytest
from textual.widgets import Button, TextArea

from kalyana.memory import Turn
from kalyana.session import Phase
from kalyana.ui.app import KalyanaApp
from kalyana.ui.formatting import citation_text, speaker_label
from kalyana.ui.widgets import ClosedPanel, EnterPanel, TurnMessage


async def settle(app, pilot) -> None:
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestFormatting:
    """Tests for the rendering helpers."""

    def test_citation_links(self):
        citation = "Ajahn Chah, https://example.org/talk (talk)"
        text = citation_text(citation)

        assert text.plain == citation
        links = [span.style.link for span in text.spans if span.style.link]
        assert links == ["https://example.org/talk"]

    def test_citation_without_links(self):
        text = citation_text("Dhammapada 5")
        assert text.plain == "Dhammapada 5"
        assert text.spans == []

    def test_speaker_labels(self):
        assert speaker_label("user") == "You"
        assert "Guide" in speaker_label("assistant")
        assert "Closing" in speaker_label("assistant", closing=True)


class TestKalyanaApp:
    """Pilot-driven tests for KalyanaApp."""

    @pytest.mark.asyncio
    async def test_enter_shows_greeting(self, make_controller):
        controller, _ = make_controller(["Welcome."])
        app = KalyanaApp(controller)

        async with app.run_test() as pilot:
            assert app.query_one(EnterPanel).display
            assert not app.query_one("#fresh-btn", Button).display

            app.query_one("#enter-btn", Button).press()
            await settle(app, pilot)

            assert controller.phase is Phase.ACTIVE
            messages = app.query(TurnMessage)
            assert len(messages) == 1
            assert messages.first().turn == Turn(role="assistant", content="Welcome.")

    @pytest.mark.asyncio
    async def test_submit_renders_citation(self, make_controller):
        reply = "Hatred is never appeased by hatred.\n\n—\n\nDhammapada 5"
        controller, _ = make_controller(["Welcome.", reply])
        app = KalyanaApp(controller)

        async with app.run_test() as pilot:
            app.query_one("#enter-btn", Button).press()
            await settle(app, pilot)

            app.query_one("#chat-input", TextArea).text = "I am angry"
            app.query_one("#send-btn", Button).press()
            await settle(app, pilot)

            assert [t.content for t in controller.turns] == ["Welcome.", "I am angry", reply]
            assert len(app.query(TurnMessage)) == 3
            assert len(app.query(".citation")) == 1
            assert app.query_one("#chat-input", TextArea).text == ""

    @pytest.mark.asyncio
    async def test_end_and_return(self, make_controller):
        controller, _ = make_controller(["Welcome.", "Go gently."])
        app = KalyanaApp(controller)

        async with app.run_test() as pilot:
            app.query_one("#enter-btn", Button).press()
            await settle(app, pilot)

            app.action_end_session()
            await settle(app, pilot)

            assert controller.phase is Phase.CLOSED
            assert app.query_one(ClosedPanel).display
            assert not app.query_one("#chat-input-bar").display

            app.query_one("#return-btn", Button).press()
            await settle(app, pilot)

            assert controller.phase is Phase.ACTIVE
            assert not app.query_one(ClosedPanel).display

    @pytest.mark.asyncio
    async def test_reset_returns_to_enter_view(self, make_controller, memory_store, sample_turns):
        memory_store.save(sample_turns)
        controller, _ = make_controller()
        app = KalyanaApp(controller)

        async with app.run_test() as pilot:
            assert app.query_one("#fresh-btn", Button).display

            app.query_one("#enter-btn", Button).press()
            await settle(app, pilot)
            assert len(app.query(TurnMessage)) == 3

            app.action_reset_session()
            await pilot.pause()

            assert controller.phase is Phase.ENTERING
            assert memory_store.load() == []
            assert not app.query_one("#fresh-btn", Button).display

    @pytest.mark.asyncio
    async def test_enter_held_while_discarded_request_settles(self, make_controller):
        gate = asyncio.Event()
        gate.set()
        controller, _ = make_controller(["Welcome.", "Too late"], gate=gate)
        app = KalyanaApp(controller)

        async with app.run_test() as pilot:
            app.query_one("#enter-btn", Button).press()
            await settle(app, pilot)

            gate.clear()
            app.query_one("#chat-input", TextArea).text = "Hello"
            app.query_one("#send-btn", Button).press()
            while not controller.busy:
                await pilot.pause()

            app.action_reset_session()
            await pilot.pause()
            assert app.query_one("#enter-btn", Button).disabled

            gate.set()
            await settle(app, pilot)

            assert not controller.busy
            assert not app.query_one("#enter-btn", Button).disabled
            assert controller.turns == ()
