from datetime import date

import pytest

from flask import template_rendered

from lineuplist import create_app
from lineuplist.config import Settings
from lineuplist.filters import disable_option_if_region, format_date, stringify
from lineuplist.models import Festival

from conftest import load_lineup

KEY = "sessionData:visitor-1"


def context_of(rendered, name):
    matches = [ctx for template, ctx in rendered if template == name]
    assert matches, f"{name} was not rendered"
    return matches[-1]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "healthy"


def test_home_lists_festivals_with_separators(client, rendered):
    resp = client.get("/")

    assert resp.status_code == 200
    ctx = context_of(rendered, "home.html")
    assert ctx["prod"] is False
    assert ctx["supportedFestivals"][0].name == ""
    assert "disabled" in resp.get_data(as_text=True)


def test_faq(client, rendered):
    assert client.get("/faq").status_code == 200
    context_of(rendered, "faq.html")


def test_visitor_gets_an_id(app, redis_client):
    load_lineup(redis_client)
    fresh = app.test_client()

    fresh.get("/customize?festival=Coachella&year=2024")

    keys = [k for k in redis_client.hashes if k.startswith("sessionData:")]
    assert len(keys) == 1
    with fresh.session_transaction() as sess:
        assert keys[0] == f"sessionData:{sess['session_uid']}"


class TestCustomize:
    def test_first_visit_checks_everything(self, client, redis_client, rendered):
        load_lineup(redis_client)

        resp = client.get("/customize?festival=Coachella&year=2024")

        assert resp.status_code == 200
        ctx = context_of(rendered, "customize-list.html")
        assert ctx["tracksPerArtist"] == 3
        assert ctx["topTracksCheckedStr"] == "checked"
        assert ctx["setlistTracksCheckedStr"] == ""
        assert ctx["newTracksCheckedStr"] == ""
        assert ctx["titleOverride"] == "Customize Playlist - Coachella 2024"
        assert ctx["festivalYear"] == 2024
        assert ctx["lastUpdatedDate"].year == 2024
        assert [a.artist.id for a in ctx["artists"]] == ["a1", "a2", "a3"]
        selectable = ctx["artists"] + ctx["mainGenres"] + ctx["specificGenres"] + ctx["days"]
        assert {s.state for s in selectable} == {"checked"}
        assert [g.obj for g in ctx["mainGenres"]] == ["hip hop", "house", "indie", "pop", "rap"]
        assert [g.obj for g in ctx["specificGenres"]] == ["art pop", "k-house"]

        assert redis_client.hgetall(KEY) == {
            "festivalName": "Coachella",
            "festivalDisplayName": "Coachella",
            "festivalYear": "2024",
        }

    def test_unknown_festival(self, client, redis_client, rendered):
        resp = client.get("/customize?festival=Unknown&year=2024")

        assert resp.status_code == 400
        assert resp.get_data(as_text=True) == "Invalid query params"
        assert rendered == []
        assert redis_client.hashes == {}

    def test_year_not_in_lineup(self, client):
        assert client.get("/customize?festival=Coachella&year=1999").status_code == 400

    @pytest.mark.parametrize("year", ["soon", "2024abc"])
    def test_year_not_a_number(self, client, year):
        assert client.get(f"/customize?festival=Coachella&year={year}").status_code == 400

    def test_missing_params(self, client):
        resp = client.get("/customize?festival=Coachella")
        assert resp.status_code == 400
        assert resp.get_data(as_text=True) == "You need to choose a festival first."

    def test_returning_visitor_sees_saved_choices(self, client, redis_client, rendered):
        load_lineup(redis_client)
        redis_client.hset(KEY, mapping={
            "festivalName": "Coachella",
            "festivalDisplayName": "Coachella",
            "festivalYear": "2024",
            "trackType": "recent",
            "tracksPerArtist": "5",
            "artistIdsStr": "a2",
            "selectedGenresStr": "rap,art pop",
            "selectedDaysStr": "3",
            "trackIdsStr": "t1",
        })

        client.get("/customize?festival=Coachella&year=2024")

        ctx = context_of(rendered, "customize-list.html")
        assert ctx["tracksPerArtist"] == 5
        assert ctx["newTracksCheckedStr"] == "checked"
        assert ctx["topTracksCheckedStr"] == ""
        assert [a.state for a in ctx["artists"]] == ["", "checked", ""]
        assert [g.obj for g in ctx["mainGenres"] if g.state] == ["rap"]
        assert [g.obj for g in ctx["specificGenres"] if g.state] == ["art pop"]
        assert [d.state for d in ctx["days"]] == ["", "", "checked"]
        # same edition, nothing reset
        assert redis_client.hgetall(KEY)["trackIdsStr"] == "t1"

    def test_switching_edition_resets_session(self, client, redis_client, rendered):
        load_lineup(redis_client, festival="Bonnaroo", year=2023)
        redis_client.hset(KEY, mapping={
            "festivalName": "Coachella",
            "festivalDisplayName": "Coachella",
            "festivalYear": "2024",
            "trackType": "setlist",
            "tracksPerArtist": "5",
            "artistIdsStr": "a2",
            "selectedGenresStr": "rap",
            "selectedDaysStr": "3",
            "trackIdsStr": "t1",
            "playlistName": "Coachella 2024 - Lineup List",
        })

        client.get("/customize?festival=Bonnaroo&year=2023")

        assert redis_client.hgetall(KEY) == {
            "festivalName": "Bonnaroo",
            "festivalDisplayName": "Bonnaroo",
            "festivalYear": "2023",
        }
        ctx = context_of(rendered, "customize-list.html")
        assert ctx["tracksPerArtist"] == 3
        assert ctx["topTracksCheckedStr"] == "checked"
        assert {a.state for a in ctx["artists"]} == {"checked"}


class TestPersonalizedLineup:
    def test_requires_session(self, client, rendered):
        resp = client.get("/personalized-lineup")

        assert resp.status_code == 400
        assert resp.get_data(as_text=True) == \
            "This url only accessible after generating a lineup from the customize page."
        assert rendered == []

    def test_renders_tracks_and_saves_ids(self, client, redis_client, rendered):
        load_lineup(redis_client)
        redis_client.hset(KEY, mapping={
            "festivalName": "Coachella",
            "festivalDisplayName": "Coachella",
            "festivalYear": "2024",
            "trackType": "top",
            "tracksPerArtist": "2",
            "artistIdsStr": "a3,a1",
        })

        resp = client.get("/personalized-lineup")

        assert resp.status_code == 200
        ctx = context_of(rendered, "personalized-lineup.html")
        assert ctx["playlistName"] == "Coachella 2024 - Lineup List"
        assert ctx["titleOverride"] == "Personalized Lineup - Coachella 2024"
        assert ctx["tracksPerArtist"] == 2
        assert [act.artist.id for act in ctx["acts"]] == ["a1", "a3"]
        assert redis_client.hgetall(KEY)["trackIdsStr"] == "a1-top0,a1-top1,a3-top0,a3-top1"
        assert "Song a1-top0" in resp.get_data(as_text=True)

    def test_no_artists_chosen(self, client, redis_client, rendered, spotify):
        load_lineup(redis_client)
        redis_client.hset(KEY, mapping={
            "festivalName": "Coachella",
            "festivalDisplayName": "Coachella",
            "festivalYear": "2024",
        })

        assert client.get("/personalized-lineup").status_code == 200
        assert context_of(rendered, "personalized-lineup.html")["acts"] == []
        assert redis_client.hgetall(KEY)["trackIdsStr"] == ""
        spotify.artist_top_tracks.assert_not_called()


class TestPlaylistSuccess:
    def test_requires_session(self, client):
        resp = client.get("/generate-playlist-success")
        assert resp.status_code == 400
        assert resp.get_data(as_text=True) == "This url only accessible after generating Spotify playlist."

    def test_shows_playlist(self, client, redis_client, rendered):
        redis_client.hset(KEY, mapping={
            "festivalName": "GovBall",
            "festivalDisplayName": "Governors Ball",
            "festivalYear": "2024",
            "playlistName": "Governors Ball 2024 - Lineup List",
            "playlistUrl": "https://open.spotify.com/playlist/abc",
        })

        resp = client.get("/generate-playlist-success")

        assert resp.status_code == 200
        ctx = context_of(rendered, "generate-playlist-success.html")
        assert ctx["titleOverride"] == "Governors Ball 2024 Playlist Success"
        assert ctx["playlistUrl"] == "https://open.spotify.com/playlist/abc"
        assert "https://open.spotify.com/playlist/abc" in resp.get_data(as_text=True)


def test_prod_flag_reaches_templates(redis_client, spotify):
    app = create_app(Settings(deploy_stage="PROD"), redis_client=redis_client, spotify=spotify)
    captured = []

    def record(sender, template, context, **extra):
        captured.append(context)

    with template_rendered.connected_to(record, app):
        app.test_client().get("/faq")

    assert captured[0]["prod"] is True


def test_template_filters():
    assert stringify([1, "a"]) == '[1, "a"]'
    assert disable_option_if_region(Festival("", "Europe", "eu")) == "disabled"
    assert disable_option_if_region(Festival("Glastonbury", "Glastonbury", "eu")) == ""
    assert format_date(date(2024, 4, 13)) == "Sat Apr 13 2024"
    assert format_date(None) == ""
