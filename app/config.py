"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Maps Platform (Places, Geocoding, Place Photos)
    google_places_api_key: Optional[str] = None
    google_request_timeout: float = 10.0

    # Nearby search
    places_max_results: int = 20
    places_rank_preference: str = "POPULARITY"

    # Photo media size (pixels)
    photo_max_height_px: int = 400
    photo_max_width_px: int = 400

    # Fixed seed for the random selector (reproducible demos); None = OS entropy
    selector_seed: Optional[int] = None

    # Redis Configuration
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None

    # Rate limiting (requests per window, per client id)
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 30
    rate_limit_window_seconds: int = 60

    # FastAPI Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    # CORS Configuration
    frontend_url: str = "http://localhost:3000"

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
