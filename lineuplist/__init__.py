# lineuplist/__init__.py
import logging

from flask import Flask
from dotenv import load_dotenv

# Load env only when the app is created
load_dotenv()


def create_app(settings=None, redis_client=None, spotify=None):
    """Build the Flask app.

    `redis_client` and `spotify` default to real clients built from settings;
    tests hand in their own.
    """
    from .config import Settings

    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = Flask(
        __name__,
        template_folder="../templates",
        static_folder="../static"
    )
    app.secret_key = settings.app_secret
    app.config["SETTINGS"] = settings

    if redis_client is None:
        import redis
        redis_client = redis.from_url(settings.redis_url, decode_responses=True)

    if spotify is None:
        # spotipy refuses to build without SPOTIPY_CLIENT_ID / SPOTIPY_CLIENT_SECRET
        from .services.spotify_api import build_spotify
        spotify = build_spotify(settings)

    from .services.lineup_cache import LineupCache
    from .services.session_store import SessionStore
    from .services.tracks import TrackResolver

    app.config["SESSION_STORE"] = SessionStore(redis_client)
    app.config["LINEUP_CACHE"] = LineupCache(redis_client, workers=settings.lookup_workers)
    app.config["TRACK_RESOLVER"] = TrackResolver(redis_client, spotify, settings)

    from .errors import LineupError
    from .filters import register_filters
    from .visitor import attach_session_uid

    register_filters(app)
    app.before_request(attach_session_uid)

    @app.errorhandler(LineupError)
    def lineup_error(e):
        return e.message, e.status_code

    from .routes.core import core_bp
    from .routes.lineup import lineup_bp

    app.register_blueprint(core_bp)
    app.register_blueprint(lineup_bp)

    return app
