"""Abstract base class for preference storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from halkit.models.pref import Pref, Prefs


class PreferenceStore(ABC):
    """Lookup of scoped configuration values.

    Implement this ABC to plug in any storage backend (SQL, Redis, etc.).
    The library ships with `InMemoryPreferenceStore` for development and
    testing. A miss is never an error: ``find`` returns an empty ``Prefs``
    and ``get`` returns a ``Pref`` with ``success=False``.
    """

    @abstractmethod
    async def find(
        self,
        user: str = "",
        broker: str = "",
        room: str = "",
        plugin: str = "",
        key: str = "",
    ) -> Prefs:
        """Return every row matching the non-empty arguments."""
        ...

    @abstractmethod
    async def get(
        self,
        user: str,
        broker: str,
        room: str,
        plugin: str,
        key: str,
        default: str = "",
    ) -> Pref:
        """Return the most specific row applying to the given scope.

        Rows with an empty scope field apply to any value of that field.
        When nothing applies, a ``Pref`` carrying *default* as its value and
        ``success=False`` is returned.
        """
        ...

    @abstractmethod
    async def set(self, pref: Pref) -> Pref:
        """Insert or replace the row with the same scope and key."""
        ...

    @abstractmethod
    async def delete(self, pref: Pref) -> bool:
        """Delete the row with the same scope and key. Returns ``True`` if it existed."""
        ...
