from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = "sqlite:///./gateshift.db"
    BACKEND_CORS_ORIGINS: list[str] = []
    LOG_LEVEL: str = "INFO"

    # external staff directory; unset means the local staff_members table is used
    STAFF_DIRECTORY_URL: Optional[str] = None
    STAFF_DIRECTORY_TIMEOUT_SECONDS: float = 3.0

    # how long a computed coverage board may be served before recomputing
    COVERAGE_CACHE_TTL_SECONDS: int = 15


settings = Settings()
