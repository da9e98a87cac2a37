from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./mapty.db"
    # Single key holding the whole serialized workout list
    storage_key: str = "workouts"
    map_zoom_level: int = 13
    # Timezone for workout labels ("Running on October 19").
    # Examples: "America/New_York", "Europe/London", or "local" to use system tz.
    timezone: str = "local"
    log_level: str = "INFO"

    @field_validator("storage_key")
    @classmethod
    def _non_empty_key(cls, v):
        if not v or not v.strip():
            raise ValueError("storage_key must not be empty")
        return v.strip()

    @field_validator("map_zoom_level", mode="before")
    @classmethod
    def _empty_to_default(cls, v):
        if v in ("", None, "null", "None"):
            return 13
        return v

    class Config:
        env_file = ".env"


settings = Settings()
