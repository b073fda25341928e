"""Plain records shared by the services and the page routes."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional, Tuple

CHECKED = "checked"
UNCHECKED = ""


@dataclass(frozen=True)
class Region:
    name: str
    display_name: str


@dataclass(frozen=True)
class Festival:
    """A festival and every year we have a lineup for.

    An empty `name` marks a region separator in the home page dropdown.
    """

    name: str
    display_name: str
    region: str
    years: Tuple[int, ...] = ()


@dataclass
class SessionData:
    """Mirror of the `sessionData:<uid>` Redis hash."""

    festivalName: str
    festivalDisplayName: str
    festivalYear: int
    trackType: Optional[str] = None
    tracksPerArtist: Optional[int] = None
    artistIdsStr: Optional[str] = None
    selectedGenresStr: Optional[str] = None
    selectedDaysStr: Optional[str] = None
    trackIdsStr: Optional[str] = None
    playlistName: Optional[str] = None
    playlistUrl: Optional[str] = None


@dataclass(frozen=True)
class SpotifyArtist:
    id: str
    name: str
    combined_genres: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict) -> "SpotifyArtist":
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            # keep the cached order so "first occurrence" stays stable
            combined_genres=tuple(dict.fromkeys(raw.get("combined_genres") or raw.get("genres") or [])),
        )


@dataclass(frozen=True)
class SpotifyTrack:
    id: str
    name: str
    uri: str
    artist_names: Tuple[str, ...] = ()
    preview_url: Optional[str] = None
    release_date: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "uri": self.uri,
            "artist_names": list(self.artist_names),
            "preview_url": self.preview_url,
            "release_date": self.release_date,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "SpotifyTrack":
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            uri=raw.get("uri", ""),
            artist_names=tuple(raw.get("artist_names") or ()),
            preview_url=raw.get("preview_url"),
            release_date=raw.get("release_date"),
        )


@dataclass(frozen=True)
class LineupDay:
    number: int
    display_name: str
    date: Optional[date] = None


@dataclass(frozen=True)
class StatefulObject:
    """Checkbox state carried next to whatever it is rendered for."""

    state: str
    obj: Any


@dataclass(frozen=True)
class SelectableArtist:
    artist: SpotifyArtist
    state: str


@dataclass(frozen=True)
class ArtistWithTracks:
    artist: SpotifyArtist
    tracks: List[SpotifyTrack] = field(default_factory=list)
