"""In-memory implementation of PreferenceStore."""

from __future__ import annotations

from halkit.models.pref import Pref, Prefs
from halkit.prefs.base import PreferenceStore


class InMemoryPreferenceStore(PreferenceStore):
    """Dict-based in-memory store for development and testing."""

    def __init__(self) -> None:
        self._prefs: dict[tuple[str, str, str, str, str], Pref] = {}
        self._next_id = 1

    async def find(
        self,
        user: str = "",
        broker: str = "",
        room: str = "",
        plugin: str = "",
        key: str = "",
    ) -> Prefs:
        wanted = {"user": user, "broker": broker, "room": room, "plugin": plugin, "key": key}
        out = Prefs()
        for pref in self._prefs.values():
            if all(not v or getattr(pref, f) == v for f, v in wanted.items()):
                out.append(pref.model_copy(update={"success": True}))
        return out

    async def get(
        self,
        user: str,
        broker: str,
        room: str,
        plugin: str,
        key: str,
        default: str = "",
    ) -> Pref:
        wanted = {"user": user, "broker": broker, "room": room, "plugin": plugin}
        best: Pref | None = None
        best_score = -1
        for pref in self._prefs.values():
            if pref.key != key:
                continue
            score = 0
            for field, value in wanted.items():
                have = getattr(pref, field)
                if not have:
                    continue
                if have != value:
                    break
                score += 1
            else:
                if score > best_score:
                    best, best_score = pref, score
        if best is None:
            return Pref(
                user=user,
                broker=broker,
                room=room,
                plugin=plugin,
                key=key,
                value=default,
                default=default,
                success=False,
            )
        return best.model_copy(update={"default": default, "success": True})

    async def set(self, pref: Pref) -> Pref:
        existing = self._prefs.get(pref.scope)
        pref_id = existing.id if existing is not None else self._next_id
        if existing is None:
            self._next_id += 1
        stored = pref.model_copy(update={"id": pref_id, "success": False, "error": None})
        self._prefs[pref.scope] = stored
        return stored.model_copy()

    async def delete(self, pref: Pref) -> bool:
        return self._prefs.pop(pref.scope, None) is not None
