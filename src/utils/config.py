"""Configuration management for Menu Advisor.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import Optional

from dotenv import load_dotenv

from src.utils.logger import logger


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API key: missing key does not stop the UI, the first analysis fails instead
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Multimodal model used for menu analysis
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        # Model listing endpoint, queried once at startup for diagnostics only
        self.MODELS_ENDPOINT: str = os.getenv(
            "MODELS_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta/models"
        )
        self.LIST_MODELS_ON_STARTUP: bool = _env_bool("LIST_MODELS_ON_STARTUP", "true")
        self.MODELS_REQUEST_TIMEOUT_S: int = int(os.getenv("MODELS_REQUEST_TIMEOUT_S", "10"))
        # Server Port
        self.PORT: int = int(os.getenv("PORT", "7777"))
        # Minimum time between two outbound Gemini requests. Default: 4000 ms
        self.MIN_REQUEST_INTERVAL_MS: int = int(os.getenv("MIN_REQUEST_INTERVAL_MS", "4000"))
        # Maximum upload size (in MB) accepted by the web form. Default: 5 MB
        self.MAX_IMAGE_SIZE_MB: int = int(os.getenv("MAX_IMAGE_SIZE_MB", "5"))
        # Image Compression: re-encode uploads as JPEG before sending. Off by default,
        # the declared MIME type is sent unchanged unless this is enabled
        self.COMPRESS_IMG: bool = _env_bool("COMPRESS_IMG", "false")
        self.COMPRESS_IMG_MAX_WIDTH: int = int(os.getenv("COMPRESS_IMG_MAX_WIDTH", "1024"))
        # Temperature: unset means the model default
        temperature = os.getenv("TEMPERATURE")
        self.TEMPERATURE: Optional[float] = float(temperature) if temperature else None

    @property
    def has_api_key(self) -> bool:
        return bool(self.GEMINI_API_KEY)

    def validate(self) -> None:
        """Validate configuration.

        A missing GEMINI_API_KEY is only logged so the web UI can still load.

        Raises:
            ValueError: If invalid values are provided.
        """
        if not self.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY is missing! Add it to your .env file, menu analysis will fail until then")
        if self.MIN_REQUEST_INTERVAL_MS < 0:
            raise ValueError(
                f"MIN_REQUEST_INTERVAL_MS must be non-negative, got: {self.MIN_REQUEST_INTERVAL_MS}"
            )
        if self.MAX_IMAGE_SIZE_MB < 1:
            raise ValueError(f"MAX_IMAGE_SIZE_MB must be at least 1, got: {self.MAX_IMAGE_SIZE_MB}")
        if self.COMPRESS_IMG_MAX_WIDTH < 64:
            raise ValueError(
                f"COMPRESS_IMG_MAX_WIDTH must be at least 64 pixels, got: {self.COMPRESS_IMG_MAX_WIDTH}"
            )
        if self.TEMPERATURE is not None and not (0.0 <= self.TEMPERATURE <= 2.0):
            raise ValueError(f"TEMPERATURE must be between 0.0 and 2.0, got: {self.TEMPERATURE}")
        if self.MODELS_REQUEST_TIMEOUT_S < 1:
            raise ValueError(
                f"MODELS_REQUEST_TIMEOUT_S must be at least 1 second, got: {self.MODELS_REQUEST_TIMEOUT_S}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
