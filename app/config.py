from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Storage
    DATABASE_URL: str = "sqlite:///./devcommunity.db"
    STORAGE_BACKEND: str = "database"  # "database" or "memory"

    # API
    API_TITLE: str = "DevCommunity API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Sample data
    SEED_SAMPLE_DATA: bool = True
    DEMO_PASSWORD: str = "password"

    # Tags
    AUTO_CREATE_TAGS: bool = False
    POPULAR_TAGS_LIMIT: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
