# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me-please-32-bytes-min"
    ALGORITHM: str = "HS256"
    # 24 hours
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    JWT_ISSUER: str = "employees-api"
    JWT_AUDIENCE: str = "employees-clients"

    DATABASE_URL: str = "sqlite:///./database_employees.db"

    # Presentation (session based) surface
    SESSION_COOKIE_NAME: str = "employees_session"
    SESSION_IDLE_TIMEOUT_MINUTES: int = 30

    # Bootstrap admin account created on first initialization
    SEED_ADMIN_USERNAME: str = "admin"
    SEED_ADMIN_EMAIL: str = "admin@example.com"
    SEED_ADMIN_PASSWORD: str = "Admin@123"

    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
