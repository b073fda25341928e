"""Checkbox state for the customize page.

Every selectable dimension follows the same rule: with no saved selection (`None`,
the visitor never customized this edition) everything is checked, otherwise only
the saved ids are. An empty saved list therefore unchecks everything.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..festivals import is_main_genre
from ..models import (
    CHECKED,
    UNCHECKED,
    Festival,
    LineupDay,
    SelectableArtist,
    SessionData,
    SpotifyArtist,
    StatefulObject,
)

log = logging.getLogger("lineuplist")

DEFAULT_TRACK_TYPE = "top"

_TRACK_TYPE_FLAGS = {
    "top": "topTracksCheckedStr",
    "setlist": "setlistTracksCheckedStr",
    "recent": "newTracksCheckedStr",
}


def split_selection(raw: Optional[str]) -> Optional[List[str]]:
    if raw is None:
        return None
    return raw.split(",") if raw else []


def state_for(item_id: str, previously_selected: Optional[Sequence[str]]) -> str:
    if previously_selected is None or item_id in previously_selected:
        return CHECKED
    return UNCHECKED


def merge_artists(artists: Sequence[SpotifyArtist],
                  previously_selected: Optional[Sequence[str]]) -> List[SelectableArtist]:
    return [SelectableArtist(artist=a, state=state_for(a.id, previously_selected)) for a in artists]


def merge_genres(artists: Sequence[SpotifyArtist],
                 previously_selected: Optional[Sequence[str]]) -> Tuple[List[StatefulObject], List[StatefulObject]]:
    """Split every artist genre into (main, specific), each genre once.

    The first artist to bring a genre fixes its state. Both groups read the same
    saved genre list.
    """
    main: Dict[str, StatefulObject] = {}
    specific: Dict[str, StatefulObject] = {}
    for artist in artists:
        for genre in artist.combined_genres:
            target = main if is_main_genre(genre) else specific
            if genre not in target:
                target[genre] = StatefulObject(state=state_for(genre, previously_selected), obj=genre)

    return (sorted(main.values(), key=lambda s: s.obj),
            sorted(specific.values(), key=lambda s: s.obj))


def merge_days(days: Sequence[LineupDay], previously_selected: Optional[Sequence[str]]) -> List[StatefulObject]:
    by_number: Dict[str, StatefulObject] = {}
    for day in days:
        day_id = str(day.number)
        by_number[day_id] = StatefulObject(state=state_for(day_id, previously_selected), obj=day)
    return sorted(by_number.values(), key=lambda s: s.obj.number)


def track_type_flags(track_type: Optional[str]) -> Dict[str, str]:
    """The three mutually exclusive radio flags the customize template expects."""
    if track_type not in _TRACK_TYPE_FLAGS:
        log.error("customize: unknown trackType, checking top | trackType=%s", track_type or "null")
        track_type = DEFAULT_TRACK_TYPE
    return {flag: CHECKED if t == track_type else UNCHECKED for t, flag in _TRACK_TYPE_FLAGS.items()}


@dataclass
class PriorSelections:
    tracks_per_artist: int
    track_type: Optional[str] = DEFAULT_TRACK_TYPE
    artists: Optional[List[str]] = None
    genres: Optional[List[str]] = None
    days: Optional[List[str]] = None


def prior_selections(session: Optional[SessionData], festival: Festival, year: int,
                     default_tracks_per_artist: int) -> Optional[PriorSelections]:
    """Saved choices for this edition, or None when the session is for another one."""
    if session is None or session.festivalName != festival.name or session.festivalYear != year:
        return None
    tracks = session.tracksPerArtist
    return PriorSelections(
        tracks_per_artist=default_tracks_per_artist if tracks is None else tracks,
        track_type=session.trackType,
        artists=split_selection(session.artistIdsStr),
        genres=split_selection(session.selectedGenresStr),
        days=split_selection(session.selectedDaysStr),
    )


@dataclass
class CustomizeState:
    artists: List[SelectableArtist]
    main_genres: List[StatefulObject]
    specific_genres: List[StatefulObject]
    days: List[StatefulObject]
    tracks_per_artist: int
    track_flags: Dict[str, str] = field(default_factory=dict)


def build_customize_state(prior: Optional[PriorSelections], artists: Sequence[SpotifyArtist],
                          days: Sequence[LineupDay], default_tracks_per_artist: int) -> CustomizeState:
    if prior is None:
        prior = PriorSelections(tracks_per_artist=default_tracks_per_artist)

    main_genres, specific_genres = merge_genres(artists, prior.genres)
    return CustomizeState(
        artists=merge_artists(artists, prior.artists),
        main_genres=main_genres,
        specific_genres=specific_genres,
        days=merge_days(days, prior.days),
        tracks_per_artist=prior.tracks_per_artist,
        track_flags=track_type_flags(prior.track_type),
    )
