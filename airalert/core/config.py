from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Bot Configuration
    BOT_TOKEN: str
    ALERT_CHAT_ID: int
    WEBHOOK_URL: str = ""
    WEBHOOK_PATH: str = "/webhook"

    # Database (saved locations)
    DATABASE_URL: str

    # Redis (alert settings, notification payloads)
    REDIS_URL: str

    # Air Quality Index API
    INDEX_API_URL: str
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Reverse geocoding (Nominatim compatible)
    GEOCODER_URL: str = "https://nominatim.openstreetmap.org/reverse"
    GEOCODER_USER_AGENT: str = "airalert/0.1"

    # Current position
    POSITION_TRACKING_ENABLED: bool = True
    POSITION_MAX_AGE_SECONDS: int = 900
    POSITION_TIMEOUT_SECONDS: float = 30.0

    # Alert cycles
    ALERT_SINGLE_FLIGHT: bool = True
    ALERT_NOTIFY_EMPTY: bool = False

    # Control API
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Localization
    DEFAULT_LANGUAGE: str = "en"
    SUPPORTED_LANGUAGES: list[str] = ["en", "ru", "kk"]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
