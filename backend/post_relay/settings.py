from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    api_base_url: str = Field(
        default="https://jsonplaceholder.typicode.com",
        description="Base URL of the upstream REST API that posts are fetched from",
    )
    http_timeout_seconds: float = Field(default=5.0, description="Timeout ceiling for upstream requests")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, description="Port the relay server listens on")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    display_api_base: str = Field(
        default="http://localhost:3000/api",
        description="Relay API base URL that PostDisplay fetches from",
    )
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=["../.env", ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
