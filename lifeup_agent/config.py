from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # LifeUp device (Cloud API over the local network)
    LIFEUP_HOST: str = "localhost"
    LIFEUP_PORT: int = 13276
    LIFEUP_API_TOKEN: str = ""
    LIFEUP_TIMEOUT: float = 10.0

    # Health probe run before every mutating call
    LIFEUP_HEALTH_RETRIES: int = 2
    LIFEUP_HEALTH_RETRY_DELAY: float = 0.5

    # Pause between sequential subtask calls (LifeUp rate limit)
    LIFEUP_SUBTASK_DELAY: float = 0.05

    # Restrictive mode: only read and create operations are allowed
    SAFE_MODE: bool = False

    # App
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    @field_validator("LIFEUP_HOST", mode="before")
    @classmethod
    def strip_host(cls, v: str) -> str:
        # Accept "http://192.168.1.5" as well as a bare address
        v = (v or "").strip()
        for prefix in ("http://", "https://"):
            if v.startswith(prefix):
                v = v[len(prefix):]
        return v.rstrip("/") or "localhost"

    @property
    def base_url(self) -> str:
        return f"http://{self.LIFEUP_HOST}:{self.LIFEUP_PORT}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
