"""Append-only chat transcript.

Hides how displayed entries are stored and when consecutive system notices
are collapsed.
"""

import logging

from .events import Observable
from .models import ChatMessage, LogChange, LogChangeKind

logger = logging.getLogger(__name__)


class MessageLog(Observable):
    """Ordered list of displayed chat entries.

    A system entry whose content equals the current last entry's content is
    suppressed when that last entry is also system-authored. User entries are
    never suppressed or merged.
    """

    def __init__(self) -> None:
        super().__init__()
        self._messages: list[ChatMessage] = []

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        """Snapshot of the current entries, oldest first."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self):
        return iter(tuple(self._messages))

    def append(self, entry: ChatMessage) -> ChatMessage | None:
        """Append an entry.

        Returns:
            The appended entry, or None if it was suppressed as a duplicate
            system notice
        """
        last = self.last()
        if (
            not entry.is_user
            and last is not None
            and not last.is_user
            and last.content == entry.content
        ):
            logger.debug("Suppressed duplicate system notice: %r", entry.content[:60])
            return None

        self._messages.append(entry)
        self._emit(LogChange(LogChangeKind.APPENDED, entry, len(self._messages) - 1))
        return entry

    def append_system(self, content: str) -> ChatMessage | None:
        """Append a system-authored entry."""
        return self.append(ChatMessage.system(content))

    def append_user(self, content: str) -> ChatMessage | None:
        """Append a user-authored entry."""
        return self.append(ChatMessage.user(content))

    def last(self) -> ChatMessage | None:
        """Return the newest entry, if any."""
        return self._messages[-1] if self._messages else None

    def remove_last(self) -> ChatMessage | None:
        """Remove and return the newest entry, if any."""
        if not self._messages:
            return None
        entry = self._messages.pop()
        self._emit(LogChange(LogChangeKind.REMOVED, entry, len(self._messages)))
        return entry

    def remove(self, entry: ChatMessage) -> bool:
        """Remove a specific entry by identity.

        Returns:
            True if the entry was present and removed
        """
        for index, message in enumerate(self._messages):
            if message.id == entry.id:
                del self._messages[index]
                self._emit(LogChange(LogChangeKind.REMOVED, message, index))
                return True
        return False
