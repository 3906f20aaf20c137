"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Record store location
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    db_filename: str = "plant_tracker.db"

    @property
    def db_path(self) -> str:
        if self.data_path == ":memory:":
            return ":memory:"
        return os.path.join(self.data_path, self.db_filename)

    # Single implicit user when no X-User-Id header is sent
    default_user_id: str = "default-user"

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_prefix = "PLANT_TRACKER_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
