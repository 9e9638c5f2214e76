from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./data/taskboard.db"
    database_echo: bool = False
    auto_create_tables: bool = True

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60 * 24 * 7  # 7 дней

    # OAuth client id, он же audience для Google ID токенов
    google_client_id: str = ""

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
