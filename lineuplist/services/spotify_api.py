from typing import List, Optional

from spotipy import Spotify
from spotipy.oauth2 import SpotifyClientCredentials

from ..config import Settings
from ..models import SpotifyTrack


def build_spotify(settings: Settings) -> Spotify:
    """App-level Spotify client. Catalog reads only, so client credentials are enough."""
    auth = SpotifyClientCredentials(
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
    )
    return Spotify(auth_manager=auth)


def simplify_track(raw: dict, release_date: str = None) -> SpotifyTrack:
    """Keep the handful of fields the lineup page shows."""
    album = raw.get("album") or {}
    return SpotifyTrack(
        id=raw["id"],
        name=raw.get("name", ""),
        uri=raw.get("uri", ""),
        artist_names=tuple(a.get("name", "") for a in raw.get("artists", [])),
        preview_url=raw.get("preview_url"),
        release_date=release_date or album.get("release_date"),
    )


def top_tracks(sp: Spotify, artist_id: str, limit: int, market: str = "US") -> List[SpotifyTrack]:
    tracks = sp.artist_top_tracks(artist_id, country=market).get("tracks", [])
    return [simplify_track(t) for t in tracks if t.get("id")][:limit]


def newest_tracks(sp: Spotify, artist_id: str, limit: int) -> List[SpotifyTrack]:
    """Walk the artist's releases newest first and collect tracks they're credited on."""
    albums = sp.artist_albums(artist_id, include_groups="album,single", limit=20).get("items", [])
    albums.sort(key=lambda a: a.get("release_date") or "", reverse=True)

    tracks, seen_names = [], set()
    for album in albums:
        page = sp.album_tracks(album["id"], limit=50)
        for t in page.get("items", []):
            if not t.get("id"):
                continue
            if artist_id not in {a.get("id") for a in t.get("artists", [])}:
                continue
            # singles usually show up again on the album
            name = (t.get("name") or "").lower()
            if name in seen_names:
                continue
            seen_names.add(name)
            tracks.append(simplify_track(t, release_date=album.get("release_date")))
            if len(tracks) >= limit:
                return tracks
    return tracks


def find_track(sp: Spotify, song_name: str, artist_name: str) -> Optional[SpotifyTrack]:
    """Best search hit for a song title by a given artist, if there is one."""
    q = f"track:{song_name} artist:{artist_name}"
    items = sp.search(q=q, type="track", limit=1).get("tracks", {}).get("items", [])
    if not items:
        return None
    return simplify_track(items[0])
