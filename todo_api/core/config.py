from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./todo.db"
    sql_echo: bool = False
    auto_create_schema: bool = True

    # Session cookie
    session_cookie_name: str = "session"
    session_ttl_hours: int = 24 * 14
    session_cookie_secure: bool = False
    # Expiry is stored on every session but only checked when this is on
    enforce_session_expiry: bool = False

    cors_origins: List[str] = ["http://localhost:8080"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
