"""Preference storage."""

from halkit.prefs.base import PreferenceStore
from halkit.prefs.memory import InMemoryPreferenceStore

__all__ = ["InMemoryPreferenceStore", "PreferenceStore"]
