from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "Slug Shortener"
    app_version: str = "1.0.0"

    # Database
    database_url: str = "sqlite:///./slug_shortener.db"
    store_backend: str = "sqlalchemy"  # Options: "sqlalchemy", "memory"

    # Shortened links are rendered as f"{base_url}/{slug}"
    base_url: str = "http://127.0.0.1:8000"

    # Slug generation
    slug_strategy: str = "secure"  # Options: "secure", "random"
    slug_length: int = 8
    max_slug_attempts: int = 5

    # Validation
    max_url_length: int = 2048

    # Pagination
    default_per_page: int = 20

    # Cache settings
    cache_backend: str = "redis"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
