"""Client registry for dynamic product discovery and instantiation."""

import os
from typing import Any, Callable, TypeVar

from atlassian_services.core.exceptions import AtlassianError

T = TypeVar("T")

ENV_DEFAULT_PRODUCT = "ATLASSIAN_DEFAULT_PRODUCT"

# Global registry of product clients
_client_registry: dict[str, type] = {}


def register_client(name: str) -> Callable[[type[T]], type[T]]:
    """Decorator to register a product client.

    Args:
        name: Product name (e.g., 'jira', 'confluence', 'admin')

    Returns:
        Decorator function

    Example:
        @register_client("jira")
        class JiraClient:
            ...
    """

    def decorator(cls: type[T]) -> type[T]:
        _client_registry[name] = cls
        return cls

    return decorator


def get_client(
    product: str | None = None,
    config: dict[str, Any] | None = None,
) -> Any:
    """Get a product client instance.

    Args:
        product: Product name (e.g., 'jira'). If None, uses default.
        config: Client configuration

    Returns:
        Product client instance

    Raises:
        AtlassianError: If product not found
    """
    _import_clients()

    if product is None:
        product = _get_default_product()

    if product not in _client_registry:
        available = list(_client_registry.keys())
        raise AtlassianError(
            f"Client '{product}' not found. Available: {available}",
            provider=product,
        )

    client_class = _client_registry[product]
    return client_class(config or {})


def list_clients() -> list[str]:
    """List all registered product names."""
    _import_clients()
    return sorted(_client_registry.keys())


def _import_clients() -> None:
    """Import all product modules to trigger registration."""
    import atlassian_services.atlassian  # noqa: F401


def _get_default_product() -> str:
    """Get the default product from the environment.

    Raises:
        AtlassianError: If no default is configured
    """
    env_value = os.environ.get(ENV_DEFAULT_PRODUCT)
    if env_value:
        return env_value

    raise AtlassianError(
        f"No default product configured. "
        f"Set {ENV_DEFAULT_PRODUCT} environment variable or specify product explicitly."
    )
