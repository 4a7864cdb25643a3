"""Session controller.

Owns the conversation: the ordered turns, the lifecycle phase and the
single-request-in-flight discipline. The UI holds one controller instance
and drives it with user events; the controller persists after every
mutation and reaches the gateway through a GatewayClient.

Phases: entering -> active <-> closed, and reset() back to entering from
anywhere.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..exceptions import EmptyInput, GatewayFailure, RequestInFlight, SessionError
from ..memory import HistoryStore, Turn
from ..prompts import get_closing_instruction, get_greeting_instruction
from .citation import split_citation
from .client import GatewayClient
from .models import Phase, ReplySegments

logger = logging.getLogger(__name__)

SUBMIT_ERROR_MESSAGE = "Something went wrong. Please try again."

Listener = Callable[["SessionController"], None]


@dataclass(frozen=True)
class SessionPrompts:
    """Synthetic instructions and canned fallbacks used by the lifecycle."""

    greeting: str = field(default_factory=get_greeting_instruction)
    closing: str = field(default_factory=get_closing_instruction)
    fallback_greeting: str = "Come. Sit. What is it you are carrying today?"
    fallback_closing: str = "Go well. The practice continues whether you are sitting or not."


class SessionController:
    """State machine for one client's conversation.

    Operations that are not valid in the current state (blank input, a
    request already in flight, the wrong phase) are ignored and return
    None. Gateway failures never escape: ``begin`` and ``end`` substitute
    canned turns, ``submit`` records a dismissible ``error``.
    """

    def __init__(
        self,
        gateway: GatewayClient,
        store: HistoryStore,
        prompts: SessionPrompts | None = None,
    ):
        self._gateway = gateway
        self._store = store
        self._prompts = prompts or SessionPrompts()
        self._turns: list[Turn] = store.load()
        self._phase = Phase.ENTERING
        self._busy = False
        self._error: str | None = None
        # Bumped by reset() so late replies from a discarded session are dropped
        self._generation = 0
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------ state

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def busy(self) -> bool:
        """True while a gateway request is outstanding."""
        return self._busy

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def has_history(self) -> bool:
        """Whether anything is persisted (drives the "begin fresh" control)."""
        return bool(self._store.load())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    @staticmethod
    def segments(turn: Turn) -> ReplySegments:
        """Main text and citation of a turn, derived from its content."""
        return split_citation(turn.content)

    # ------------------------------------------------------------- operations

    async def begin(self) -> Turn | None:
        """Enter the conversation.

        Restores persisted history silently; otherwise asks the gateway for
        an opening greeting. Always ends in the active phase.

        Returns:
            The greeting turn, or None when history was restored or the
            call was not valid now
        """
        try:
            self._require(Phase.ENTERING)
        except SessionError as e:
            logger.debug("begin() ignored: %s", e)
            return None

        self._set_phase(Phase.ACTIVE)
        self._error = None
        history = self._store.load()
        if history:
            self._turns = history
            logger.info("Resumed session with %d turn(s)", len(history))
            self._notify()
            return None

        generation = self._start_request()
        try:
            text = await self._gateway.reply([Turn(role="user", content=self._prompts.greeting)])
            greeting = Turn(role="assistant", content=text)
            persist = True
        except GatewayFailure as e:
            logger.warning("Greeting request failed, using fallback: %s", e)
            greeting = Turn(role="assistant", content=self._prompts.fallback_greeting)
            persist = False
        finally:
            self._finish_request()

        if generation != self._generation:
            self._notify()
            return None
        self._turns = [greeting]
        if persist:
            self._store.save(self._turns)
        self._notify()
        return greeting

    async def submit(self, text: str) -> Turn | None:
        """Send a user message.

        The user turn is appended and persisted before the request; on
        failure it stays and ``error`` is set.

        Returns:
            The assistant reply turn, or None if ignored or failed
        """
        try:
            self._require(Phase.ACTIVE)
            content = (text or "").strip()
            if not content:
                raise EmptyInput("blank input")
        except SessionError as e:
            logger.debug("submit() ignored: %s", e)
            return None

        self._turns.append(Turn(role="user", content=content))
        self._store.save(self._turns)
        self._error = None
        generation = self._start_request()
        try:
            text_out: str | None = await self._gateway.reply(list(self._turns))
        except GatewayFailure as e:
            logger.warning("Message request failed: %s", e)
            text_out = None
        finally:
            self._finish_request()

        if generation != self._generation:
            self._notify()
            return None
        if text_out is None:
            self._error = SUBMIT_ERROR_MESSAGE
            self._notify()
            return None
        reply = Turn(role="assistant", content=text_out)
        self._turns.append(reply)
        self._store.save(self._turns)
        self._notify()
        return reply

    async def end(self) -> Turn | None:
        """Close the session with a brief closing remark.

        Returns:
            The closing turn, or None if the call was not valid now
        """
        try:
            self._require(Phase.ACTIVE)
        except SessionError as e:
            logger.debug("end() ignored: %s", e)
            return None

        generation = self._start_request()
        try:
            text = await self._gateway.reply(
                [*self._turns, Turn(role="user", content=self._prompts.closing)]
            )
        except GatewayFailure as e:
            logger.warning("Closing request failed, using fallback: %s", e)
            text = self._prompts.fallback_closing
        finally:
            self._finish_request()

        if generation != self._generation:
            self._notify()
            return None
        closing = Turn(role="assistant", content=text, closing=True)
        self._turns.append(closing)
        self._store.save(self._turns)
        self._set_phase(Phase.CLOSED)
        self._notify()
        return closing

    def resume(self) -> bool:
        """Return from closed to active without touching the turns."""
        if self._phase is not Phase.CLOSED:
            return False
        self._set_phase(Phase.ACTIVE)
        self._notify()
        return True

    def reset(self) -> None:
        """Discard all history and return to the entering phase.

        A request already in flight keeps ``busy`` set until it settles;
        its reply is then dropped.
        """
        self._store.clear()
        self._turns = []
        self._error = None
        self._generation += 1
        self._set_phase(Phase.ENTERING)
        self._notify()

    def dismiss_error(self) -> None:
        if self._error is not None:
            self._error = None
            self._notify()

    # ---------------------------------------------------------------- helpers

    def _require(self, phase: Phase) -> None:
        if self._busy:
            raise RequestInFlight("a request is already in flight")
        if self._phase is not phase:
            raise SessionError(f"phase is {self._phase.value}, expected {phase.value}")

    def _start_request(self) -> int:
        self._busy = True
        self._notify()
        return self._generation

    def _finish_request(self) -> None:
        self._busy = False

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self._phase:
            logger.info("Session phase %s -> %s", self._phase.value, phase.value)
            self._phase = phase

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
