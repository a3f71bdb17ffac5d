"""Settings store module for foodfinder.

Provides a small persisted key-value store for flags that must survive
restarts (such as the outbound-call acknowledgement).
"""

from .base import SettingsStore
from .factory import create_settings_store

__all__ = [
    "SettingsStore",
    "create_settings_store",
]
