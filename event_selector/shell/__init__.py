"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Configuration loading (YAML files/environment)
- In-memory record store (seeded from YAML fixtures)
- Firestore record store (database)

Keep this layer thin and simple. All selection logic should be in core.
"""

from event_selector.shell.config_loader import load_config, load_config_from_env
from event_selector.shell.memory_store import MemoryStore
from event_selector.shell.firestore_store import FirestoreStore

__all__ = [
    "load_config",
    "load_config_from_env",
    "MemoryStore",
    "FirestoreStore",
]
