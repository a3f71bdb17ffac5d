"""Data models for the chat core.

These models define the conversation entries and the small pieces of state
owned by the chat session, independent of how they are presented.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single entry in the message log.

    Immutable once created. System-authored entries have ``is_user=False``.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Opaque unique identifier")
    content: str = Field(description="Text shown in the chat")
    is_user: bool = Field(default=False, description="True if typed by the user")
    timestamp: datetime = Field(default_factory=datetime.now)

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        """Create a system-authored message."""
        return cls(content=content, is_user=False)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        """Create a user-authored message."""
        return cls(content=content, is_user=True)


class ConversationState(BaseModel):
    """Two-slot dialogue state.

    Invariant: ``awaiting_calorie_input`` implies ``current_topic`` is non-empty.
    """

    awaiting_calorie_input: bool = False
    current_topic: str = ""


class PendingSend(BaseModel):
    """A message held back until the user acknowledges outbound calls."""

    text: str | None = None
    waiting: bool = False

    def clear(self) -> None:
        """Drop the held message."""
        self.text = None
        self.waiting = False


class ConnectivityStatus(str, Enum):
    """Network reachability as last observed."""

    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class LogChangeKind(str, Enum):
    APPENDED = "appended"
    REMOVED = "removed"


@dataclass(frozen=True)
class LogChange:
    """Notification emitted by the message log."""

    kind: LogChangeKind
    message: ChatMessage
    index: int


@dataclass(frozen=True)
class ConnectivityChange:
    """Notification emitted on a reachability transition."""

    previous: ConnectivityStatus
    current: ConnectivityStatus

    @property
    def connected(self) -> bool:
        return self.current is ConnectivityStatus.CONNECTED
