from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "macrs-calculator"
    debug: bool = False
    log_level: str = "INFO"
    default_locale: str = "en"
    default_recovery_period: str = "5"
    default_method: str = "200DB"
    reject_excess_salvage: bool = True
    cors_origins: list[str] = ["*"]

    model_config = {"env_prefix": "MACRS_", "env_file": ".env"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
