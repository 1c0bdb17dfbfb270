from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./jobportal.db"

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    BCRYPT_ROUNDS: int = 10

    # Session cookie. None means "secure when the request came in over https".
    COOKIE_SECURE: Optional[bool] = None

    # Cloudinary asset storage
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    ASSET_UPLOAD_TIMEOUT_SECONDS: float = 15.0

    # Upload limits
    MAX_PHOTO_BYTES: int = 1 * 1024 * 1024
    MAX_RESUME_BYTES: int = 5 * 1024 * 1024

    # Application
    APP_NAME: str = "JobPortal"
    DEBUG: bool = True
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://127.0.0.1:5173,"
        "https://naukri-portal-plum.vercel.app"
    )


settings = Settings()
