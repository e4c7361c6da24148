"""
Resource Registry - Discovery and registration of resource controllers.

Maps resource type names to controller classes. Built-in kinds are
registered explicitly; extra kinds are discovered via the
'vercel.resources' entry point group.
"""

import logging
from importlib.metadata import entry_points
from typing import Dict, Optional, Type

from client import Client
from resources.base import ResourceController

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "vercel.resources"


class ResourceRegistry:
    """Central registry of resource controller classes."""

    def __init__(self):
        # Registered controller classes (not instantiated)
        self._controllers: Dict[str, Type[ResourceController]] = {}

    def register(self, controller_class: Type[ResourceController]) -> str:
        """
        Register a controller class under its resource type name.

        Args:
            controller_class: The ResourceController subclass to register

        Returns:
            The resource type name it was registered under

        Raises:
            ValueError: If the class does not declare a type name
        """
        type_name = getattr(controller_class, "type_name", "")
        if not type_name:
            raise ValueError(
                f"Resource controller {controller_class.__name__} has no type_name"
            )

        if type_name in self._controllers:
            logger.warning(f"Overwriting existing resource type: {type_name}")

        self._controllers[type_name] = controller_class
        logger.info(f"Registered resource type: {type_name}")
        return type_name

    def create(self, type_name: str, client: Optional[Client]) -> ResourceController:
        """
        Instantiate the controller for a resource type.

        Raises:
            ValueError: If the resource type is not registered
            NotConfiguredError: If no client is given
        """
        if type_name not in self._controllers:
            available = ", ".join(self._controllers.keys()) or "none"
            raise ValueError(
                f"Unknown resource type: {type_name}. Available types: {available}"
            )
        return self._controllers[type_name](client)

    def list_resource_types(self) -> list[str]:
        """List all registered resource type names."""
        return list(self._controllers.keys())

    def has_resource_type(self, type_name: str) -> bool:
        """Check if a resource type is registered."""
        return type_name in self._controllers


# Global registry instance
_registry: Optional[ResourceRegistry] = None


def get_registry() -> ResourceRegistry:
    """Get the global resource registry singleton."""
    global _registry
    if _registry is None:
        _registry = ResourceRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (mainly for testing)."""
    global _registry
    _registry = None


def register_builtin_resources(
    registry: Optional[ResourceRegistry] = None,
) -> ResourceRegistry:
    """
    Register the built-in resource kinds and discover extra ones via
    entry points. Types that are already registered are left alone.

    Args:
        registry: Registry to populate; the global registry if omitted.

    Returns:
        The populated registry
    """
    from resources.dns_record import DNSRecordController
    from resources.project_domain import ProjectDomainController

    registry = registry or get_registry()
    for controller_class in (DNSRecordController, ProjectDomainController):
        if not registry.has_resource_type(controller_class.type_name):
            registry.register(controller_class)

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        if registry.has_resource_type(ep.name):
            continue
        try:
            registry.register(ep.load())
        except Exception as e:
            logger.warning(f"Could not load resource type {ep.name}: {e}")

    return registry
