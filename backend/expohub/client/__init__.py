"""
Client-side state container for the ExpoHub API.

- store: immutable AppState slices, pure updates, persist/restore
- api: ExpoClient, the async HTTP actions that drive the store
"""
from .store import AppState, persist, restore
from .api import ExpoClient

__all__ = ["AppState", "ExpoClient", "persist", "restore"]
