"""
Configuration module for the firewall rule reconciler.

Loads configuration from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class CloudflareConfig:
    """Cloudflare v4 API configuration."""

    api_base_url: str = "https://api.cloudflare.com/client/v4"
    api_token: str = field(default="", repr=False)  # Never log token
    timeout: int = 30  # seconds per request

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        api_token = os.getenv("CLOUDFLARE_API_TOKEN", "")
        if not api_token:
            raise ValueError(
                "CLOUDFLARE_API_TOKEN environment variable must be set. "
                "API token cannot be empty."
            )

        return cls(
            api_base_url=os.getenv(
                "CLOUDFLARE_API_URL", "https://api.cloudflare.com/client/v4"
            ),
            api_token=api_token,
            timeout=int(os.getenv("CLOUDFLARE_API_TIMEOUT", "30")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(level=os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass
class Config:
    """Main configuration object."""

    cloudflare: CloudflareConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            cloudflare=CloudflareConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def default(cls):
        """Return default configuration."""
        return cls(
            cloudflare=CloudflareConfig(),
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
