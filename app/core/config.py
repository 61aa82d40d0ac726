# File: app/core/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, AnyHttpUrl, ConfigDict, field_validator


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    app_name: str = "Account Portal"

    PROJECT_NAME: str = "Account Portal"
    VERSION: str = "0.1.0"

    api_v1_prefix: str = "/api/v1"
    debug: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    backend_cors_origins: List[AnyHttpUrl] = os.getenv(
        "BACKEND_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./portal.db")

    # Uploaded media (served under /static)
    media_root: str = os.getenv("MEDIA_ROOT", "static")
    max_upload_size: int = 5 * 1024 * 1024  # 5 MiB

    avatar_width: int = 400
    avatar_height: int = 400
    avatar_quality: int = 80
    avatar_directory: str = "uploads/images/avatars"

    # Security / auth
    secret_key: str = os.getenv("SECRET_KEY", "CHANGE_ME_IN_PRODUCTION")
    access_token_expire_minutes: int = 60 * 24  # 24h
    algorithm: str = "HS256"
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    access_token_cookie: str = "access_token"

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
