"""Chat session: the single owner of all conversation state.

Hides the order in which a submitted message passes through the
connectivity check, the consent gate, the conversation state machine and
the recommendation client, and which notices are logged along the way.

Every mutation happens on the event loop that runs the session. The
connectivity monitor and the fetch coroutine both resume on that loop
before touching the message log.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ..recommend import FetchResult, RecommendationClient
from . import notices
from .connectivity import ConnectivityMonitor
from .consent import ConsentGate, SendDecision
from .conversation import AskCalories, ConversationStateMachine
from .events import Observable
from .message_log import MessageLog
from .models import ConnectivityChange, ConnectivityStatus

logger = logging.getLogger(__name__)


class SubmitStatus(str, Enum):
    """What happened to one submitted message."""

    IGNORED = "ignored"  # blank input
    BUSY = "busy"  # a recommendation request is still in flight
    OFFLINE = "offline"
    NEEDS_CONSENT = "needs_consent"
    ASKED_CALORIES = "asked_calories"
    COMPLETED = "completed"  # recommendation request finished, any outcome


@dataclass(frozen=True)
class SubmitResult:
    status: SubmitStatus
    outcome: FetchResult | None = None


@dataclass(frozen=True)
class ConsentRequested:
    """Emitted when a message is held until the user acknowledges the disclosure."""

    text: str


@dataclass(frozen=True)
class BusyChanged:
    busy: bool


class ChatSession(Observable):
    """Orchestrates one Food Finder conversation.

    Subscribers receive ConsentRequested, BusyChanged and ConnectivityChange
    events. The message log has its own subscription for transcript changes.

    Usage:
        session = ChatSession(client, ConsentGate(store))
        await session.start()
        result = await session.submit_text("pasta")
    """

    def __init__(
        self,
        client: RecommendationClient,
        gate: ConsentGate,
        monitor: ConnectivityMonitor | None = None,
        log: MessageLog | None = None,
        conversation: ConversationStateMachine | None = None,
        welcome: bool = True,
    ) -> None:
        super().__init__()
        self._client = client
        self._gate = gate
        self._monitor = monitor or ConnectivityMonitor()
        self._log = log if log is not None else MessageLog()
        self._conversation = conversation or ConversationStateMachine()
        self._busy = False
        self._unsubscribe_monitor = self._monitor.subscribe(self._on_connectivity_change)

        if welcome and len(self._log) == 0:
            self._log.append_system(notices.WELCOME)

    @property
    def client(self) -> RecommendationClient:
        return self._client

    @property
    def log(self) -> MessageLog:
        return self._log

    @property
    def conversation(self) -> ConversationStateMachine:
        return self._conversation

    @property
    def gate(self) -> ConsentGate:
        return self._gate

    @property
    def monitor(self) -> ConnectivityMonitor:
        return self._monitor

    @property
    def connected(self) -> bool:
        return self._monitor.connected

    @property
    def busy(self) -> bool:
        return self._busy

    def can_send(self, text: str) -> bool:
        """Whether the send control should be enabled for ``text``."""
        return bool(text.strip()) and self.connected and not self._busy

    async def start(self) -> None:
        """Load persisted consent. Call once before the first submission."""
        await self._gate.load()

    async def submit_text(self, text: str) -> SubmitResult:
        """Handle one message typed by the user."""
        value = text.strip()
        if not value:
            return SubmitResult(SubmitStatus.IGNORED)

        if self._busy:
            logger.debug("Submission ignored while a request is in flight")
            return SubmitResult(SubmitStatus.BUSY)

        if not self.connected:
            self._refuse_offline()
            return SubmitResult(SubmitStatus.OFFLINE)

        if self._gate.request_send(value) is SendDecision.NEEDS_CONSENT:
            held = self._gate.pending.text or value
            self._emit(ConsentRequested(text=held))
            return SubmitResult(SubmitStatus.NEEDS_CONSENT)

        return await self._dispatch(value)

    async def grant_consent(self) -> None:
        """Record the user's acknowledgement. Does not send anything."""
        await self._gate.grant_consent()

    async def flush_pending(self) -> SubmitResult | None:
        """Send the message held for consent, if any.

        Returns:
            The dispatch result, or None if nothing was waiting
        """
        text = self._gate.flush_pending()
        if text is None:
            return None

        if not self.connected:
            self._refuse_offline()
            return SubmitResult(SubmitStatus.OFFLINE)

        return await self._dispatch(text)

    def cancel_pending(self) -> None:
        """Drop the message held for consent."""
        self._gate.cancel_pending()

    def close(self) -> None:
        """Detach from the connectivity monitor."""
        self._unsubscribe_monitor()

    async def _dispatch(self, text: str) -> SubmitResult:
        self._log.append_user(text)
        step = self._conversation.submit(text)

        if isinstance(step, AskCalories):
            self._log.append_system(notices.ASK_CALORIES)
            return SubmitResult(SubmitStatus.ASKED_CALORIES)

        self._log.append_system(notices.SEARCHING)
        outcome = await self._fetch_recommendations(step.prompt)
        return SubmitResult(SubmitStatus.COMPLETED, outcome)

    async def _fetch_recommendations(self, prompt: str) -> FetchResult:
        """Call the client with the loading placeholder shown meanwhile.

        The placeholder is removed exactly once whatever the outcome. The
        conversation state is not rolled back on failure.
        """
        self._set_busy(True)
        placeholder = self._log.append_system(notices.LOADING_PLACEHOLDER)
        try:
            outcome = await self._client.fetch(prompt)
        finally:
            if placeholder is not None:
                self._log.remove(placeholder)
            self._set_busy(False)

        if not outcome.ok:
            logger.warning("Recommendation request ended with %s", outcome.kind)
        self._log.append_system(outcome.chat_text)
        return outcome

    def _refuse_offline(self) -> None:
        last = self._log.last()
        if last is None or last.content != notices.OFFLINE:
            self._log.append_system(notices.OFFLINE_SEND_REFUSED)

    def _set_busy(self, busy: bool) -> None:
        if busy != self._busy:
            self._busy = busy
            self._emit(BusyChanged(busy=busy))

    def _on_connectivity_change(self, change: ConnectivityChange) -> None:
        if change.current is ConnectivityStatus.DISCONNECTED:
            self._log.append_system(notices.OFFLINE)
        elif change.previous is ConnectivityStatus.DISCONNECTED:
            self._log.append_system(notices.RESTORED)
        self._emit(change)
