"""Chat core for foodfinder.

Module structure (each module hides one design decision):
- models.py: Message and state representation
- message_log.py: Transcript storage and notice de-duplication
- conversation.py: Two-slot dialogue policy and prompt composition
- consent.py: One-time acknowledgement of outbound calls
- connectivity.py: Reachability probing and transition detection
- session.py: Orchestration on a single event loop
"""

from .connectivity import ConnectivityMonitor, ReachabilityProbe, TcpReachabilityProbe
from .consent import CONSENT_KEY, ConsentGate, SendDecision
from .conversation import AskCalories, BlankInputError, ComposePrompt, ConversationStateMachine
from .message_log import MessageLog
from .models import (
    ChatMessage,
    ConnectivityChange,
    ConnectivityStatus,
    ConversationState,
    LogChange,
    LogChangeKind,
    PendingSend,
)
from .session import BusyChanged, ChatSession, ConsentRequested, SubmitResult, SubmitStatus

__all__ = [
    "AskCalories",
    "BlankInputError",
    "BusyChanged",
    "CONSENT_KEY",
    "ChatMessage",
    "ChatSession",
    "ComposePrompt",
    "ConnectivityChange",
    "ConnectivityMonitor",
    "ConnectivityStatus",
    "ConsentGate",
    "ConsentRequested",
    "ConversationState",
    "ConversationStateMachine",
    "LogChange",
    "LogChangeKind",
    "MessageLog",
    "PendingSend",
    "ReachabilityProbe",
    "SendDecision",
    "SubmitResult",
    "SubmitStatus",
    "TcpReachabilityProbe",
]
