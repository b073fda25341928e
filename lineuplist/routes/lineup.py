from flask import Blueprint, current_app, g, render_template, request

from ..errors import InvalidRequestError, MissingSessionError
from ..festivals import find_edition
from ..models import SessionData
from ..services.selection import build_customize_state, prior_selections

lineup_bp = Blueprint("lineup", __name__)


def _services():
    cfg = current_app.config
    return cfg["SETTINGS"], cfg["SESSION_STORE"], cfg["LINEUP_CACHE"]


@lineup_bp.route("/customize")
def customize():
    settings, store, lineups = _services()

    festival_name = request.args.get("festival")
    raw_year = request.args.get("year")
    if not festival_name or not raw_year:
        raise InvalidRequestError("You need to choose a festival first.")

    try:
        year = int(raw_year)
    except ValueError:
        raise InvalidRequestError("Invalid query params")

    festival = find_edition(festival_name, year)
    if festival is None:
        raise InvalidRequestError("Invalid query params")

    session_data = store.load(g.session_uid)
    prior = prior_selections(session_data, festival, year, settings.default_tracks_per_artist)
    if prior is None:
        # new edition for this visitor: start over from a minimal record
        store.reset_and_store(g.session_uid, SessionData(
            festivalName=festival.name,
            festivalDisplayName=festival.display_name,
            festivalYear=year,
        ))

    artists = lineups.artists_for(festival.name, year)
    days = lineups.days_with_metadata(festival.name, year)
    state = build_customize_state(prior, artists, days, settings.default_tracks_per_artist)
    last_updated = lineups.last_updated(festival.name, year)

    current_app.logger.info("customize: %s %s | artists=%d days=%d resumed=%s",
                            festival.name, year, len(artists), len(days), prior is not None)

    return render_template(
        "customize-list.html",
        prod=settings.prod,
        titleOverride=f"Customize Playlist - {festival.display_name} {year}",
        festival=festival,
        festivalYear=year,
        lastUpdatedDate=last_updated,
        artists=state.artists,
        mainGenres=state.main_genres,
        specificGenres=state.specific_genres,
        days=state.days,
        tracksPerArtist=state.tracks_per_artist,
        **state.track_flags,
    )


@lineup_bp.route("/personalized-lineup")
def personalized_lineup():
    settings, store, lineups = _services()

    # make sure they didn't just navigate straight to this URL
    session_data = store.load(g.session_uid)
    if session_data is None:
        raise MissingSessionError("This url only accessible after generating a lineup from the customize page.")

    artists = lineups.artists_for(session_data.festivalName, session_data.festivalYear)
    acts = current_app.config["TRACK_RESOLVER"].resolve_and_store(store, g.session_uid, artists, session_data)

    tracks_per_artist = session_data.tracksPerArtist
    if tracks_per_artist is None:
        tracks_per_artist = settings.default_tracks_per_artist

    edition = f"{session_data.festivalDisplayName} {session_data.festivalYear}"
    return render_template(
        "personalized-lineup.html",
        prod=settings.prod,
        titleOverride=f"Personalized Lineup - {edition}",
        festivalDisplayName=session_data.festivalDisplayName,
        playlistName=f"{edition} - Lineup List",
        acts=acts,
        tracksPerArtist=tracks_per_artist,
    )


@lineup_bp.route("/generate-playlist-success")
def generate_playlist_success():
    settings, store, _ = _services()

    session_data = store.load(g.session_uid)
    if session_data is None:
        raise MissingSessionError("This url only accessible after generating Spotify playlist.")

    festival = find_edition(session_data.festivalName, session_data.festivalYear)
    if festival is None:
        raise MissingSessionError("This url only accessible after generating Spotify playlist.")

    return render_template(
        "generate-playlist-success.html",
        prod=settings.prod,
        titleOverride=f"{festival.display_name} {session_data.festivalYear} Playlist Success",
        festival=festival,
        festivalYear=session_data.festivalYear,
        playlistName=session_data.playlistName,
        playlistUrl=session_data.playlistUrl,
    )
