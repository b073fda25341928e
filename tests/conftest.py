import json
from unittest.mock import MagicMock

import pytest
from flask import template_rendered

from lineuplist import create_app
from lineuplist.config import Settings


class InMemoryRedis:
    """Just the Redis commands the app uses, backed by dicts."""

    def __init__(self):
        self.strings = {}
        self.hashes = {}
        self.expiries = {}

    def get(self, key):
        return self.strings.get(key)

    def set(self, key, value):
        self.strings[key] = value
        return True

    def setex(self, key, seconds, value):
        self.expiries[key] = seconds
        return self.set(key, value)

    def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    def hset(self, key, field=None, value=None, mapping=None):
        h = self.hashes.setdefault(key, {})
        if field is not None:
            h[field] = value
        h.update(mapping or {})
        return len(mapping or {}) + (field is not None)

    def hdel(self, key, *fields):
        h = self.hashes.get(key, {})
        removed = sum(1 for f in fields if h.pop(f, None) is not None)
        if key in self.hashes and not h:
            del self.hashes[key]
        return removed


ARTISTS = [
    {"id": "a1", "name": "Lana Del Rey", "combined_genres": ["pop", "art pop", "indie"]},
    {"id": "a2", "name": "Tyler, The Creator", "combined_genres": ["hip hop", "rap", "art pop"]},
    {"id": "a3", "name": "Peggy Gou", "combined_genres": ["house", "k-house"]},
]


def load_lineup(r, festival="Coachella", year=2024, artists=ARTISTS, days=(1, 2, 3)):
    """Seed Redis the way the lineup loader leaves it."""
    r.set(f"festival:{festival}:{year}:artists", json.dumps(artists))
    r.set(f"festival:{festival}:{year}:days", json.dumps(list(days)))
    for n in days:
        r.set(f"festival:{festival}:{year}:day:{n}",
              json.dumps({"number": n, "display_name": f"Day {n}", "date": f"2024-04-1{1 + n}"}))
    r.set(f"festival:{festival}:{year}:lastUpdated", json.dumps("2024-03-01T12:00:00+00:00"))


def spotify_track(track_id, name=None, artist="Someone"):
    return {
        "id": track_id,
        "name": name or f"Song {track_id}",
        "uri": f"spotify:track:{track_id}",
        "artists": [{"id": "x", "name": artist}],
        "album": {"release_date": "2024-01-01"},
    }


@pytest.fixture
def redis_client():
    return InMemoryRedis()


@pytest.fixture
def spotify():
    sp = MagicMock()
    sp.artist_top_tracks.side_effect = lambda artist_id, country="US": {
        "tracks": [spotify_track(f"{artist_id}-top{i}") for i in range(10)]
    }
    return sp


@pytest.fixture
def settings():
    return Settings(app_secret="test-secret", deploy_stage="TEST", log_level="WARNING")


@pytest.fixture
def app(settings, redis_client, spotify):
    app = create_app(settings, redis_client=redis_client, spotify=spotify)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    c = app.test_client()
    with c.session_transaction() as sess:
        sess["session_uid"] = "visitor-1"
    return c


@pytest.fixture
def rendered(app):
    """Collect (template name, context) for every render during the test."""
    records = []

    def record(sender, template, context, **extra):
        records.append((template.name, context))

    template_rendered.connect(record, app)
    yield records
    template_rendered.disconnect(record, app)
