"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./campus_buddy.db"
    SESSION_TTL_SECONDS: int = 3600
    SESSION_COOKIE_NAME: str = "campus_session"
    SESSION_COOKIE_SECURE: bool = False
    CAMPUS_TIMEZONE: str = "Europe/London"  # IANA tz
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
