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
    app_name: str = "Short URL Service"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Short links are built as base_url + short_code
    base_url: str = "http://localhost:8080/"
    short_url_length: int = 6
    max_retries: int = 10  # Cap on generation attempts per create
    default_validity_minutes: int = 30

    # Short code generation strategy
    short_code_strategy: str = "random"  # Options: "random", "base62"
    short_code_salt: int = 1256  # Salt for Base62 strategy

    # Analytics
    geo_placeholder: str = "IN"  # No real geolocation, every click gets this value

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
