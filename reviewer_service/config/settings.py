"""Configuration management for the PR reviewer service."""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


@dataclass
class DatabaseConfig:
    """Database connection configuration."""

    url: str
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 3600
    connect_retries: int = 10
    connect_retry_delay: float = 1.0  # seconds
    echo: bool = False


@dataclass
class WebConfig:
    """Web interface configuration."""

    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False


@dataclass
class AppConfig:
    """Application-wide configuration."""

    log_level: str = "INFO"
    testing: bool = False


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Main settings manager."""

    def __init__(self):
        self.database = self._load_database_config()
        self.web = self._load_web_config()
        self.app = self._load_app_config()

    @staticmethod
    def _build_database_url() -> str:
        """Assemble a PostgreSQL URL from the individual DB_* variables."""
        user = os.getenv("DB_USER", "postgres")
        password = os.getenv("DB_PASSWORD", "example")
        host = os.getenv("DB_HOST", "db")
        port = os.getenv("DB_PORT", "5432")
        name = os.getenv("DB_NAME", "prs")
        return f"postgresql://{user}:{password}@{host}:{port}/{name}"

    @classmethod
    def _load_database_config(cls) -> DatabaseConfig:
        # DATABASE_URL wins over the DB_* parts (DigitalOcean / Heroku style)
        url: Optional[str] = os.getenv("DATABASE_URL")
        if not url:
            url = cls._build_database_url()

        return DatabaseConfig(
            url=url,
            pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            pool_recycle=int(os.getenv("DB_POOL_RECYCLE", "3600")),
            connect_retries=int(os.getenv("DB_CONNECT_RETRIES", "10")),
            connect_retry_delay=float(os.getenv("DB_CONNECT_RETRY_DELAY", "1.0")),
            echo=_env_bool("DB_ECHO"),
        )

    @staticmethod
    def _load_web_config() -> WebConfig:
        return WebConfig(
            host=os.getenv("WEB_HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
            debug=_env_bool("WEB_DEBUG"),
        )

    @staticmethod
    def _load_app_config() -> AppConfig:
        return AppConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            testing=_env_bool("TESTING"),
        )


# Global settings instance
settings = Settings()
