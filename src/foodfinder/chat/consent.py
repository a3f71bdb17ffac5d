"""One-time consent for outbound network calls.

Hides where the acknowledgement is persisted and how a message typed before
consent is held until the user decides.
"""

import logging
from enum import Enum

from ..settings import SettingsStore
from .models import PendingSend

logger = logging.getLogger(__name__)

# Stable across launches; changing it re-prompts every existing user
CONSENT_KEY = "has_acknowledged_internet_use"


class SendDecision(str, Enum):
    PROCEED = "proceed"
    NEEDS_CONSENT = "needs_consent"


class ConsentGate:
    """Blocks message dispatch until outbound calls are acknowledged once.

    The acknowledged flag is read from the injected store by ``load()`` and
    written once by ``grant_consent()``. Within a session it never reverts
    to False.
    """

    def __init__(self, store: SettingsStore, key: str = CONSENT_KEY) -> None:
        self._store = store
        self._key = key
        self._acknowledged = False
        self._pending = PendingSend()

    @property
    def acknowledged(self) -> bool:
        return self._acknowledged

    @property
    def pending(self) -> PendingSend:
        """Copy of the held message state."""
        return self._pending.model_copy()

    @property
    def waiting(self) -> bool:
        return self._pending.waiting

    async def load(self) -> bool:
        """Read the persisted flag. Returns the acknowledged state."""
        stored = await self._store.get_bool(self._key, default=False)
        # Never downgrade a grant made earlier in this session
        self._acknowledged = self._acknowledged or stored
        logger.debug("Consent loaded: acknowledged=%s", self._acknowledged)
        return self._acknowledged

    def request_send(self, text: str) -> SendDecision:
        """Ask whether ``text`` may be sent now.

        Before consent the text is held and NEEDS_CONSENT is returned. While a
        message is already held, further requests are ignored: the first
        pending text wins.
        """
        if self._acknowledged:
            return SendDecision.PROCEED

        if self._pending.waiting:
            logger.debug("Consent already pending; ignoring %r", text[:60])
            return SendDecision.NEEDS_CONSENT

        self._pending.text = text
        self._pending.waiting = True
        logger.info("Outbound call held until consent is granted")
        return SendDecision.NEEDS_CONSENT

    async def grant_consent(self) -> None:
        """Record and persist the acknowledgement. Does not dispatch."""
        self._acknowledged = True
        await self._store.set_bool(self._key, True)
        logger.info("Consent for outbound calls granted")

    def flush_pending(self) -> str | None:
        """Release the held message.

        Returns:
            The held text if still waiting and consent was granted, else None.
            PendingSend is cleared in every case.
        """
        text = self._pending.text if self._pending.waiting else None
        self._pending.clear()
        if text is not None and not self._acknowledged:
            logger.warning("Flush requested before consent; dropping held message")
            return None
        return text

    def cancel_pending(self) -> None:
        """Drop the held message without sending it."""
        if self._pending.waiting:
            logger.info("Held message cancelled")
        self._pending.clear()

    async def reset(self) -> None:
        """Forget the persisted acknowledgement (maintenance only)."""
        await self._store.delete(self._key)
        self._acknowledged = False
        self._pending.clear()
