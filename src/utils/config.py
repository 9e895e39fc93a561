"""Configuration management for PantryChef Recipe Search Service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import List

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # TheMealDB API root. The "1" path segment is the public test key.
        self.MEALDB_BASE_URL: str = os.getenv("MEALDB_BASE_URL", "https://www.themealdb.com/api/json/v1/1")
        # Total timeout (seconds) applied to every outbound TheMealDB request
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))
        # Maximum number of recipe detail lookups in flight per search. Default: 10
        self.MAX_CONCURRENT_FETCHES: int = int(os.getenv("MAX_CONCURRENT_FETCHES", "10"))
        # Server bind address and port
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "5001"))
        # Comma-separated list of allowed CORS origins ("*" allows any)
        self.CORS_ORIGINS: List[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any setting is missing or out of range.
        """
        if not self.MEALDB_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(f"MEALDB_BASE_URL must be an http(s) URL, got: {self.MEALDB_BASE_URL}")
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be greater than 0, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )
        if self.MAX_CONCURRENT_FETCHES < 1:
            raise ValueError(
                f"MAX_CONCURRENT_FETCHES must be at least 1, got: {self.MAX_CONCURRENT_FETCHES}"
            )
        if not (0 < self.PORT < 65536):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")


# Create module-level config instance and validate immediately
config = Config()
config.validate()
