from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Default upstream credential, overridable per request with ?key=
    GOOGLE_API_KEY: str = ""

    # Google Maps Platform endpoints
    GEOCODE_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    NEARBY_SEARCH_URL: str = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
    TEXT_SEARCH_URL: str = "https://maps.googleapis.com/maps/api/place/textsearch/json"
    PLACE_DETAILS_URL: str = "https://maps.googleapis.com/maps/api/place/details/json"

    # Progressive search
    DEFAULT_RADIUS_M: int = 50_000
    MAX_RADIUS_M: int = 500_000
    GRID_LAT_STEP_DEG: float = 0.45  # ~50km at the equator
    SHUFFLE_SEED: Optional[int] = None

    # Timeouts (seconds)
    CATEGORY_TIMEOUT_SEC: float = 10.0
    UPSTREAM_TIMEOUT_SEC: float = 20.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: List[str] = ["*"]

    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
