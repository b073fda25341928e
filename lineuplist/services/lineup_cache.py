import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import List, Optional

import redis

from ..models import LineupDay, SpotifyArtist

log = logging.getLogger("lineuplist")


def festival_key(festival_name: str, year: int, *parts) -> str:
    return ":".join(["festival", festival_name, str(year), *map(str, parts)])


def _parse_date(value) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(str(value)[:10])


def _parse_timestamp(value: str) -> datetime:
    """ISO 8601, including the `...000Z` form JS toISOString() writes."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class LineupCache:
    """Read side of the lineup data the loader keeps in Redis."""

    def __init__(self, client: redis.Redis, workers: int = 8):
        self.client = client
        self.workers = workers

    def _get_json(self, key: str, default=None):
        raw = self.client.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def artists_for(self, festival_name: str, year: int) -> List[SpotifyArtist]:
        rows = self._get_json(festival_key(festival_name, year, "artists"), [])
        return [SpotifyArtist.from_dict(row) for row in rows]

    def lineup_day_numbers(self, festival_name: str, year: int) -> List[int]:
        return [int(n) for n in self._get_json(festival_key(festival_name, year, "days"), [])]

    def day_metadata(self, festival_name: str, year: int, day_number: int) -> LineupDay:
        row = self._get_json(festival_key(festival_name, year, "day", day_number), {})
        return LineupDay(
            number=int(row.get("number", day_number)),
            display_name=row.get("display_name") or f"Day {day_number}",
            date=_parse_date(row.get("date")),
        )

    def days_with_metadata(self, festival_name: str, year: int) -> List[LineupDay]:
        """Fan out one lookup per day; results keep the day-number order."""
        numbers = self.lineup_day_numbers(festival_name, year)
        if not numbers:
            return []
        with ThreadPoolExecutor(max_workers=min(self.workers, len(numbers))) as pool:
            return list(pool.map(lambda n: self.day_metadata(festival_name, year, n), numbers))

    def last_updated(self, festival_name: str, year: int) -> Optional[datetime]:
        raw = self._get_json(festival_key(festival_name, year, "lastUpdated"))
        if not raw:
            log.warning("lineup: no lastUpdated | festival=%s year=%s", festival_name, year)
            return None
        return _parse_timestamp(raw)
