"""
Provider bootstrap.

Builds the shared API client from configuration and hands out resource
controllers bound to it.
"""

import logging
import sys
from typing import Optional

from client import Client
from config import Config, LoggingConfig, get_config
from errors import NotConfiguredError
from resources.base import ResourceController
from resources.registry import ResourceRegistry, register_builtin_resources

logger = logging.getLogger(__name__)


def setup_logging(logging_config: Optional[LoggingConfig] = None) -> None:
    """Configure root logging for the process."""
    logging_config = logging_config or LoggingConfig()
    logging.basicConfig(
        level=logging_config.level,
        format=logging_config.format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


class Provider:
    """Entry point that owns the client shared by all resource controllers."""

    def __init__(self, registry: Optional[ResourceRegistry] = None):
        self.registry = registry or register_builtin_resources()
        self.config: Optional[Config] = None
        self.client: Optional[Client] = None

    @property
    def configured(self) -> bool:
        return self.client is not None

    def configure(self, config: Optional[Config] = None) -> None:
        """
        Build the API client.

        Args:
            config: Configuration to use; loaded from the environment if omitted.

        Raises:
            ValueError: If no API token is available.
        """
        self.config = config or get_config()
        if not self.config.client.api_token:
            raise ValueError("An API token is required to configure the provider")

        self.client = Client.from_config(self.config.client)
        logger.info(
            f"Provider configured: base_url={self.client.base_url}, "
            f"timeout={self.client.timeout}s"
        )

    def resource(self, type_name: str) -> ResourceController:
        """
        Get a controller for a resource type, bound to the configured client.

        Raises:
            NotConfiguredError: If configure() has not been called.
            ValueError: If the resource type is unknown.
        """
        if not self.configured:
            raise NotConfiguredError()
        return self.registry.create(type_name, self.client)
