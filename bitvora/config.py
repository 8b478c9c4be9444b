"""Configuration management for the bitvora command-line tool."""

import logging
from typing import Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .api.client import ClientConfig

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    CLI configuration loaded from environment variables.

    Uses pydantic-settings for validation and .env file support. The
    client itself never reads these; it only receives a ClientConfig.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Bitvora API
    bitvora_url: str = Field(
        default="https://api.bitvora.com",
        description="Bitvora API base URL",
    )
    bitvora_api_key: str = Field(
        ...,
        description="Bitvora API key",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("bitvora_url")
    @classmethod
    def validate_bitvora_url(cls, v: str) -> str:
        """Validate and normalize API URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Bitvora URL must start with http:// or https://")
        return v.rstrip("/")

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        if self.log_file:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        handlers = []

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(console_handler)

        if self.log_file:
            try:
                file_handler = logging.FileHandler(self.log_file)
                file_handler.setFormatter(logging.Formatter(log_format))
                handlers.append(file_handler)
            except OSError as e:
                logger.warning(f"Could not create log file: {e}")

        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format=log_format,
            handlers=handlers,
        )

        logger.debug(f"Logging configured: level={self.log_level}")

    def get_client_config(self) -> ClientConfig:
        """Get the client configuration."""
        return ClientConfig(base_url=self.bitvora_url, api_key=self.bitvora_api_key)

    def __repr__(self) -> str:
        """String representation (hides the API key)."""
        return (
            f"Settings(bitvora_url={self.bitvora_url}, "
            f"log_level={self.log_level})"
        )


def load_config(env_file: Optional[str] = None) -> Settings:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file (default: .env)

    Returns:
        Settings instance

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    try:
        if env_file:
            settings = Settings(_env_file=env_file)
        else:
            settings = Settings()
        logger.debug("Configuration loaded successfully")
        return settings
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise
