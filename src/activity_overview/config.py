from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    timezone: str = "UTC"  # used when a request names no timezone
    default_steps_goal: int = 10_000
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
