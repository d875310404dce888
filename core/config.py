# core/config.py
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    slack_api_base_url: str = Field(default="https://slack.com/api")

    # Host transport; the node itself never retries
    http_timeout: float = Field(default=30.0)
    http_max_attempts: int = Field(default=1, ge=1)
    http_retry_backoff: float = Field(default=1.0)

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    credentials_file: Optional[Path] = Field(default=None)
    slack_bot_token: Optional[SecretStr] = Field(default=None)
    plugin_dirs: List[Path] = Field(default_factory=list)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

@lru_cache()
def get_settings() -> Settings:
    return Settings()
