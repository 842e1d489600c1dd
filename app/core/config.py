from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings

APP_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod
    APP_NAME: str = "Drive Smart Portal"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Données (fichiers JSON plats) et pages HTML
    DATA_DIR: str = "./data"
    PUBLIC_DIR: str = str(APP_DIR / "public")
    QUESTIONS_PATH: str = str(APP_DIR / "data" / "ll_questions.json")

    # Sessions
    SESSION_COOKIE_NAME: str = "drive_smart_session"
    SESSION_TTL_SECONDS: int = 24 * 60 * 60
    COOKIE_SECURE: bool = False

    # Comptes
    MIN_PASSWORD_LENGTH: int = 6
    ADMIN_EMAIL: str = "admin@drivesmart.gov.in"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_NAME: str = "Administrator"

    # Storage
    STORAGE_BACKEND: str = "cloudinary"  # cloudinary | local
    STORAGE_PATH: str = "./storage"
    MAX_UPLOAD_MB: int = 10

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "drive-smart"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
