# Pydantic settings

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import os


class Settings(BaseSettings):
    """Application settings"""

    # App
    app_name: str = "Shaka API"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env")
    )
    port: int = 3000

    # Storage selection
    use_postgres: bool = False

    # Local / SQL database
    database_url: str = "sqlite+aiosqlite:///./shakas.db"
    database_url_sync: str = "sqlite:///./shakas.db"
    auto_create_schema: bool = True

    # Hosted database (Supabase REST)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    hosted_timeout: float = 10.0  # seconds

    # Realtime
    broadcast_backend: Literal["local", "redis"] = "local"
    redis_url: str = "redis://localhost:6379/0"
    broadcast_channel: str = "shakas:events"

    model_config = SettingsConfigDict(
        # Use .env.local if it exists (for local dev), otherwise .env
        env_file=".env.local" if os.path.exists(".env.local") else ".env",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def use_hosted_store(self) -> bool:
        return self.environment == "production" or self.use_postgres


settings = Settings()
