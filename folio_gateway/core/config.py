"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        banner_message: Message returned by the root endpoint.
            Existing consumers match on this exact text.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        host: Interface the server binds to.
        port: Port the server binds to; also reported by health and root.
        database_url: SQLAlchemy URL of the store the portfolio engines write to.
        cors_origins: Origins allowed to call the API from a browser.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Folio Gateway"
    banner_message: str = "Wealthfolio External API"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3333
    database_url: str = "sqlite:///./portfolio.db"
    cors_origins: list[str] = ["*"]


settings = Settings()
