"""
Configuration settings for the application
"""

import os
from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./annual_meeting.db")

    # Security (admin endpoints are open when no token is configured)
    ADMIN_TOKEN: Optional[str] = os.getenv("ADMIN_TOKEN") or None

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Photo uploads
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    # Fortune generation
    GEMINI_API_KEY: Optional[str] = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Admin canvas
    DRAG_THRESHOLD_PX: float = 3.0
    DEFAULT_SEAT_COUNT: int = 8

    # Voting view refresh
    PHOTO_POLL_INTERVAL_SECONDS: float = 5.0

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
