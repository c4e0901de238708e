"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str = "sqlite:///./reading_quest.db"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300  # 5 minutes

    # Application
    APP_NAME: str = "Reading Quest API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Rate Limiting
    RATE_LIMIT_PER_MINUTE: int = 120
    RATE_LIMIT_PER_HOUR: int = 3000
    TRUSTED_PROXIES: List[str] = []  # peers whose X-Forwarded-For is honored

    # Security
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    ADMIN_SESSION_EXPIRE_MINUTES: int = 60 * 8
    ADMIN_SESSION_COOKIE: str = "admin_session"
    ADMIN_COOKIE_SECURE: bool = False  # set True behind HTTPS

    # Progression
    TIMEZONE: str = "UTC"  # calendar days for streaks and daily challenges
    XP_PER_LEVEL: int = 1000
    DEFAULT_QUIZ_XP_REWARD: int = 50
    DEFAULT_LEADERBOARD_LIMIT: int = 10
    MAX_LEADERBOARD_LIMIT: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
