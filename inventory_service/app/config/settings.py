"""Settings for the inventory API."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = Field("sqlite:///main.db", validation_alias="DATABASE_URL")
    database_root_bucket: str = Field("DB", validation_alias="DATABASE_ROOT_BUCKET")
    database_inventory_bucket: str = Field("INV", validation_alias="DATABASE_INVENTORY_BUCKET")
    database_busy_timeout_ms: int = Field(5000, validation_alias="DATABASE_BUSY_TIMEOUT_MS")

    initial_backoff_seconds: float = Field(0.5, validation_alias="INITIAL_BACKOFF_SECONDS")
    max_backoff_seconds: float = Field(5.0, validation_alias="MAX_BACKOFF_SECONDS")
    backoff_multiplier: float = Field(2.0, validation_alias="BACKOFF_MULTIPLIER")
    max_connection_attempts: int = Field(3, validation_alias="MAX_CONNECTION_ATTEMPTS")

    readiness_ping_timeout_seconds: float = Field(5.0, validation_alias="READINESS_PING_TIMEOUT_SECONDS")

    api_host: str = Field("127.0.0.1", validation_alias="API_HOST")
    api_port: int = Field(8080, validation_alias="API_PORT")
