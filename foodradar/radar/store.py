from __future__ import annotations

import time
from typing import Any, Callable
from uuid import uuid4

from .state import RadarSession

_sessions: dict[str, dict[str, Any]] = {}
_DEFAULT_TTL = 1800  # 30 minutes since last use


def _expired(entry: dict[str, Any], now: float) -> bool:
    return now - entry["touched_at"] >= _DEFAULT_TTL


def evict_expired() -> int:
    """Drop idle sessions, cancelling any selection still running."""
    now = time.time()
    stale = [sid for sid, entry in _sessions.items() if _expired(entry, now)]
    for sid in stale:
        _sessions.pop(sid)["session"].reset()
    return len(stale)


def get_session(session_id: str | None) -> RadarSession | None:
    if not session_id:
        return None
    entry = _sessions.get(session_id)
    if entry is None:
        return None
    now = time.time()
    if _expired(entry, now):
        del _sessions[session_id]
        entry["session"].reset()
        return None
    entry["touched_at"] = now
    return entry["session"]


def create_session(factory: Callable[[], RadarSession]) -> tuple[str, RadarSession]:
    evict_expired()
    session_id = uuid4().hex
    session = factory()
    _sessions[session_id] = {"session": session, "touched_at": time.time()}
    return session_id, session


def session_count() -> int:
    return len(_sessions)


def clear_sessions() -> None:
    _sessions.clear()
