"""
Configuration module for the Vercel reconciler.

Loads configuration from environment variables. The client configuration is
read-only once a provider has been configured with it.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_BASE_URL = "https://api.vercel.com"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ClientConfig:
    """Remote API client configuration."""

    api_token: str = field(default="", repr=False)  # Never log the token
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0  # seconds per remote call

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        api_token = os.getenv("VERCEL_API_TOKEN", "")
        if not api_token:
            raise ValueError(
                "VERCEL_API_TOKEN environment variable must be set. "
                "The API token cannot be empty."
            )

        return cls(
            api_token=api_token,
            base_url=os.getenv("VERCEL_API_URL", DEFAULT_BASE_URL).rstrip("/"),
            request_timeout=float(os.getenv("VERCEL_REQUEST_TIMEOUT", "30")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )


@dataclass
class Config:
    """Main configuration object."""

    client: ClientConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            client=ClientConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def default(cls):
        """Return default configuration."""
        return cls(
            client=ClientConfig(),
            logging=LoggingConfig(),
        )


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None
