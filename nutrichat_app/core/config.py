"""Configuration settings for the NutriChat application."""
from functools import lru_cache
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings."""
    APP_NAME: str = "NutriChat"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    # File-backed SQLite by default so worker processes share the same DB.
    DATABASE_URL: str = "sqlite:///./nutrichat.db"
    # Where the fitted request classifier is cached between restarts
    MODEL_PATH: str = "saved_models"
    # Periodic recomputation of recent daily summaries
    ENABLE_SCHEDULER: bool = True
    SUMMARY_REFRESH_HOURS: int = 6
    # Create a demo user with a full profile when the users table is empty
    SEED_DEMO_USER: bool = True

    # Allow extra environment variables (so .env can carry unrelated keys)
    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
