from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    app_name: str = "bridgequote"
    debug: bool = False
    log_level: Optional[str] = None

    # Census area classification
    census_api_base_url: str = "https://api.census.gov/data/2023/acs/acs5"
    census_api_key: Optional[str] = None
    area_lookup_timeout_seconds: float = 10.0
    area_cache_ttl_seconds: int = 24 * 60 * 60
    urban_population_threshold: int = 25000

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
