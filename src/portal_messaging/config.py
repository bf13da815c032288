from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PORTAL_API_URL: str = "http://localhost:5000/api"
    PORTAL_API_TIMEOUT: float = 10.0

    MESSAGE_POLL_INTERVAL: float = 5.0

    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"

    CORS_ORIGINS: list[str] = ["*"]

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "info"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
