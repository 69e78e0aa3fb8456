from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TASKGATE_", env_file=".env", env_file_encoding="utf-8")

    app_name: str = "TaskGate"
    debug: bool = False
    log_level: str = "INFO"

    # Origin of the worksheet frontend allowed by CORS
    frontend_url: str = "http://localhost:5173"


@lru_cache
def get_settings() -> Settings:
    return Settings()
