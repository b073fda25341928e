import logging
from dataclasses import asdict, fields
from typing import Optional

import redis

from ..models import SessionData

log = logging.getLogger("lineuplist")

# Everything a previous edition may have left behind in the hash.
STALE_FIELDS = (
    "tracksPerArtist",
    "artistIdsStr",
    "trackIdsStr",
    "trackType",
    "playlistName",
    "selectedDaysStr",
    "selectedGenresStr",
)

_INT_FIELDS = ("festivalYear", "tracksPerArtist")
_FIELD_NAMES = {f.name for f in fields(SessionData)}


def session_key(session_id: str) -> str:
    return f"sessionData:{session_id}"


def _to_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def decode_session(raw: dict) -> SessionData:
    """Build SessionData from the string mapping HGETALL returns."""
    values = {k: v for k, v in raw.items() if k in _FIELD_NAMES}
    for name in _INT_FIELDS:
        if name in values:
            values[name] = _to_int(values[name])
    values.setdefault("festivalName", "")
    values.setdefault("festivalDisplayName", "")
    values.setdefault("festivalYear", None)
    return SessionData(**values)


def encode_fields(partial: dict) -> dict:
    """Redis hashes only hold strings; drop unset values instead of writing "None"."""
    return {k: str(v) for k, v in partial.items() if v is not None}


class SessionStore:
    """Per-visitor session hashes in Redis.

    Reads raise whatever the client raises, the page can't render without them.
    Writes log and carry on.
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    def load(self, session_id: str) -> Optional[SessionData]:
        raw = self.client.hgetall(session_key(session_id))
        if not raw:
            return None
        return decode_session(raw)

    def reset_and_store(self, session_id: str, session: SessionData) -> None:
        key = session_key(session_id)
        try:
            self.client.hdel(key, *STALE_FIELDS)
        except redis.RedisError as e:
            log.error("session: clearing stale fields failed | key=%s err=%s", key, e)

        try:
            self.client.hset(key, mapping=encode_fields(asdict(session)))
        except redis.RedisError as e:
            log.error("session: write failed | key=%s err=%s", key, e)

    def merge_update(self, session_id: str, partial: dict) -> None:
        mapping = encode_fields(partial)
        if not mapping:
            return
        key = session_key(session_id)
        try:
            self.client.hset(key, mapping=mapping)
        except redis.RedisError as e:
            log.error("session: merge failed | key=%s fields=%s err=%s", key, sorted(mapping), e)
