"""
Application configuration using Pydantic Settings
"""

from typing import List
from pydantic import model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    environment: str = "development"

    # Database
    database_url: str
    database_echo: bool = False

    # JWT / Auth
    jwt_secret: str
    jwt_refresh_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 24 * 60
    jwt_refresh_expires_days: int = 7
    editor_roles: str = "admin,manager"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_debug: bool = False
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Images
    uploads_dir: str = "uploads"
    image_max_bytes: int = 5 * 1024 * 1024
    image_quality: int = 80
    thumbnail_size: int = 200

    @model_validator(mode="after")
    def check_distinct_secrets(self) -> "Settings":
        """Primary and refresh tokens must not share a signing key"""
        if self.jwt_secret == self.jwt_refresh_secret:
            raise ValueError("JWT_SECRET and JWT_REFRESH_SECRET must be different")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def editor_roles_list(self) -> List[str]:
        """Roles allowed to modify the menu"""
        return [role.strip() for role in self.editor_roles.split(",") if role.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
