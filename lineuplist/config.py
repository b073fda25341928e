import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TRACKS_PER_ARTIST = 3

SETLISTFM_API_BASE_URL = "https://api.setlist.fm/rest/1.0/"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once in create_app and handed to each service."""

    app_secret: str = "dev-secret"
    redis_url: str = "redis://localhost:6379/0"
    deploy_stage: str = "DEV"

    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    spotify_market: str = "US"

    setlistfm_api_key: Optional[str] = None

    track_cache_seconds: int = 86400
    default_tracks_per_artist: int = DEFAULT_TRACKS_PER_ARTIST
    lookup_workers: int = 8
    log_level: str = "INFO"

    @property
    def prod(self) -> bool:
        return self.deploy_stage == "PROD"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment (call load_dotenv first)."""
        return cls(
            app_secret=os.getenv("APP_SECRET", "dev-secret"),
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            deploy_stage=os.getenv("DEPLOY_STAGE", "DEV"),
            spotify_client_id=os.getenv("SPOTIPY_CLIENT_ID"),
            spotify_client_secret=os.getenv("SPOTIPY_CLIENT_SECRET"),
            spotify_market=os.getenv("SPOTIFY_MARKET", "US"),
            setlistfm_api_key=os.getenv("SETLISTFM_API_KEY"),
            track_cache_seconds=int(os.getenv("TRACK_CACHE_SECONDS", "86400")),
            lookup_workers=int(os.getenv("LOOKUP_WORKERS", "8")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
