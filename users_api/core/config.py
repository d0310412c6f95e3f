from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "users-api"
    api_prefix: str = "/api/users"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    default_page_size: int = Field(default=6, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
