"""
Food Finder: a two-question chat that turns a craving and a calorie target
into recipe recommendations from a hosted Gemini model.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import ChatMessage, ChatSession, ConnectivityMonitor, ConsentGate, MessageLog
from .recommend import RecommendationClient, create_recommendation_client
from .settings import SettingsStore, create_settings_store

__all__ = [
    "ChatMessage",
    "ChatSession",
    "ConnectivityMonitor",
    "ConsentGate",
    "MessageLog",
    "RecommendationClient",
    "SettingsStore",
    "create_recommendation_client",
    "create_settings_store",
]
