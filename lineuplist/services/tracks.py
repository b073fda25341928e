import json
import logging
from typing import Callable, Dict, List, Optional, Sequence

import redis
from spotipy import Spotify

from ..config import Settings
from ..models import ArtistWithTracks, SessionData, SpotifyArtist, SpotifyTrack
from . import setlists, spotify_api
from .selection import DEFAULT_TRACK_TYPE, split_selection
from .session_store import SessionStore

log = logging.getLogger("lineuplist")

# trackType -> suffix of the per-artist cache key
CACHE_SUFFIXES = {
    "top": "topTracks",
    "recent": "newestTracks",
    "setlist": "setlistTracks",
}

# Spotify returns at most 10 top tracks, and the customize form tops out there too.
CACHED_TRACKS_PER_ARTIST = 10


class TrackResolver:
    """Tracks for each chosen artist, read through a Redis cache."""

    def __init__(self, client: redis.Redis, sp: Spotify, settings: Settings):
        self.client = client
        self.sp = sp
        self.settings = settings
        self.strategies: Dict[str, Callable[[SpotifyArtist, int], List[SpotifyTrack]]] = {
            "top": self.top_tracks,
            "recent": self.newest_tracks,
            "setlist": self.setlist_tracks,
        }

    def _cached(self, artist: SpotifyArtist, track_type: str, limit: int, fetch) -> List[SpotifyTrack]:
        """Serve `limit` tracks from the cache, refetching only when it was filled for fewer.

        `fetch(n)` returns up to n tracks; artists with a short catalog return less, which
        still counts as a full answer for n.
        """
        key = f"artist:{artist.id}:{CACHE_SUFFIXES[track_type]}"
        raw = self.client.get(key)
        if raw is not None:
            cached = json.loads(raw)
            if cached["requested"] >= limit:
                return [SpotifyTrack.from_dict(t) for t in cached["tracks"][:limit]]

        requested = max(limit, CACHED_TRACKS_PER_ARTIST)
        tracks = fetch(requested)
        payload = {"requested": requested, "tracks": [t.to_dict() for t in tracks]}
        try:
            self.client.setex(key, self.settings.track_cache_seconds, json.dumps(payload))
        except redis.RedisError as e:
            log.warning("tracks: cache write failed | key=%s err=%s", key, e)
        return tracks[:limit]

    def top_tracks(self, artist: SpotifyArtist, limit: int) -> List[SpotifyTrack]:
        return self._cached(artist, "top", limit, lambda n: spotify_api.top_tracks(
            self.sp, artist.id, n, market=self.settings.spotify_market))

    def newest_tracks(self, artist: SpotifyArtist, limit: int) -> List[SpotifyTrack]:
        return self._cached(artist, "recent", limit, lambda n: spotify_api.newest_tracks(self.sp, artist.id, n))

    def setlist_tracks(self, artist: SpotifyArtist, limit: int) -> List[SpotifyTrack]:
        def fetch(n):
            tracks, seen = [], set()
            for song in setlists.recent_song_names(artist.name, self.settings.setlistfm_api_key):
                track = spotify_api.find_track(self.sp, song, artist.name)
                if track is None or track.id in seen:
                    continue
                seen.add(track.id)
                tracks.append(track)
                if len(tracks) >= n:
                    break
            return tracks

        return self._cached(artist, "setlist", limit, fetch)

    def strategy_for(self, track_type: Optional[str]) -> Callable[[SpotifyArtist, int], List[SpotifyTrack]]:
        if track_type not in self.strategies:
            log.warning("tracks: found trackType %s in session data, defaulting to top tracks",
                        track_type or "undefined")
            track_type = DEFAULT_TRACK_TYPE
        return self.strategies[track_type]

    def resolve(self, artists: Sequence[SpotifyArtist], session: SessionData) -> List[ArtistWithTracks]:
        """Tracks for the artists picked on the customize page, one artist at a time."""
        chosen = split_selection(session.artistIdsStr) or []
        limit = session.tracksPerArtist
        if limit is None:
            limit = self.settings.default_tracks_per_artist

        fetch = self.strategy_for(session.trackType)
        acts = []
        for artist in artists:
            if artist.id not in chosen:
                continue
            acts.append(ArtistWithTracks(artist=artist, tracks=fetch(artist, limit)))
        log.info("tracks: resolved | artists=%d trackType=%s", len(acts), session.trackType)
        return acts

    def resolve_and_store(self, store: SessionStore, session_id: str,
                          artists: Sequence[SpotifyArtist], session: SessionData) -> List[ArtistWithTracks]:
        acts = self.resolve(artists, session)
        track_ids = [t.id for act in acts for t in act.tracks]
        store.merge_update(session_id, {"trackIdsStr": ",".join(track_ids)})
        return acts
