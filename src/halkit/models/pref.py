"""Preference rows and result sets."""

from __future__ import annotations

from pydantic import BaseModel


class Pref(BaseModel):
    """A stored value scoped by user, room, broker and plugin.

    Empty scope fields are wildcards. ``success`` is set by stores on lookup
    so that a miss can be returned as a value rather than raised.
    """

    id: int | None = None
    user: str = ""
    room: str = ""
    broker: str = ""
    plugin: str = ""
    key: str = ""
    value: str = ""
    default: str = ""
    success: bool = False
    error: str | None = None

    @property
    def scope(self) -> tuple[str, str, str, str, str]:
        return (self.user, self.room, self.broker, self.plugin, self.key)


class Prefs(list[Pref]):
    """A list of preferences with a few filtering helpers."""

    def one(self) -> Pref:
        """Return the first successful row, or an unsuccessful empty ``Pref``."""
        return next((p for p in self if p.success), Pref(success=False))

    def find_key(self, key: str) -> Prefs:
        return Prefs(p for p in self if p.key == key)

    def values(self) -> list[str]:
        return [p.value for p in self]
