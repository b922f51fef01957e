from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIME_SLOTS = [
    "09:00", "10:00", "11:00",
    "14:00", "15:00", "16:00", "17:00", "18:00",
]


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./skillmatch.db"

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    # Booking
    BOOKING_TIME_SLOTS: List[str] = DEFAULT_TIME_SLOTS

    # Messaging
    MESSAGE_MAX_LENGTH: int = 2000

    # Admin dashboard
    STATS_TOP_TEACHERS: int = 5
    STATS_CHAT_ACTIVITY_DAYS: int = 7

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
