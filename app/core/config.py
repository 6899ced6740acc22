# app/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "bookit"
    MONGO_TLS: bool = False

    # Auth
    JWT_SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30
    ALLOW_ADMIN_REGISTRATION: bool = True

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Image uploads (S3)
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: str = "us-east-1"
    BUCKET_NAME: str = ""
    UPLOAD_FOLDER: str = "bookit-services"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # Mail
    SMTP_SERVER: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SEND_BOOKING_EMAILS: bool = False

    # Reject bookings whose totalPrice disagrees with catalog prices
    VERIFY_TOTAL_PRICE: bool = False

    LOG_LEVEL: str = "INFO"


settings = Settings()
