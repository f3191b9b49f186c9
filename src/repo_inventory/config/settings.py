"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REPO_INVENTORY_",
        case_sensitive=False,
    )

    # General
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_workers: int = 1

    # --- Connection ---
    # JSON file holding a BitbucketCloudConnection
    connection_config_path: str | None = None
    external_service_id: int = 1
    external_service_name: str = "Bitbucket Cloud"

    # --- HTTP client ---
    page_size: PositiveInt = 100
    request_timeout: float = 60.0
    idle_conn_timeout: float = 30.0

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        if self.connection_config_path is not None:
            self.connection_config_path = str(Path(self.connection_config_path).expanduser())

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
