import logging
from collections import Counter
from typing import List

import requests

from ..config import SETLISTFM_API_BASE_URL

log = logging.getLogger("lineuplist")


def _session(api_key: str) -> requests.Session:
    s = requests.Session()
    s.headers.update({
        "Accept": "application/json",
        "x-api-key": api_key,
    })
    return s


def recent_song_names(artist_name: str, api_key: str, max_setlists: int = 10) -> List[str]:
    """Songs played in the artist's latest setlists, most played first.

    Ties keep the order songs were first seen in, newest show first.
    """
    if not api_key:
        log.warning("setlist: no SETLISTFM_API_KEY configured => no setlist tracks")
        return []

    r = _session(api_key).get(
        SETLISTFM_API_BASE_URL + "search/setlists",
        params={"artistName": artist_name, "p": 1},
        timeout=12,
    )
    log.info("setlist: /search/setlists artist=%s status=%s", artist_name, r.status_code)
    if r.status_code == 404:
        return []
    r.raise_for_status()

    counts = Counter()
    for setlist in (r.json().get("setlist") or [])[:max_setlists]:
        for s in (setlist.get("sets") or {}).get("set", []):
            for song in s.get("song", []):
                name = (song.get("name") or "").strip()
                # covers are credited to someone else on Spotify
                if name and not song.get("cover"):
                    counts[name] += 1

    return [name for name, _ in counts.most_common()]
