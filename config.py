from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Onboarding API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Identity provider (Supabase style HS256 tokens)
    jwt_secret: str
    jwt_audience: str = "authenticated"
    jwt_algorithm: str = "HS256"

    # Either a full SQLAlchemy URL or the individual parts below
    database_url: Optional[str] = None
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    db_port: Optional[str] = None
    db_host: Optional[str] = None
    db_name: Optional[str] = None

    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
