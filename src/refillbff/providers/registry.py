"""Provider registry for discovering remote platform clients."""

from typing import Type

from refillbff.providers.base import ObjectStore, PaymentGateway


def _get_providers() -> dict[str, Type[ObjectStore]]:
    """Get all available CRM providers.

    Lazy import to avoid circular dependencies.
    """
    from refillbff.providers.hubspot import HubSpotProvider

    return {
        "hubspot": HubSpotProvider,
    }


def _get_gateways() -> dict[str, Type[PaymentGateway]]:
    """Get all available payment gateways."""
    from refillbff.providers.stripe import StripeGateway

    return {
        "stripe": StripeGateway,
    }


def _lookup(kind: str, registry: dict, name: str):
    key = name.lower()
    if key not in registry:
        available = ", ".join(sorted(registry.keys()))
        raise ValueError(
            f"No {kind} available for '{name}'. "
            f"Supported {kind}s: {available}"
        )
    return registry[key]


def get_provider(name: str) -> Type[ObjectStore]:
    """Get CRM provider class by name.

    Args:
        name: Provider name (e.g., "hubspot")

    Returns:
        ObjectStore subclass

    Raises:
        ValueError: If no provider exists with that name
    """
    return _lookup("provider", _get_providers(), name)


def get_gateway(name: str) -> Type[PaymentGateway]:
    """Get payment gateway class by name.

    Raises:
        ValueError: If no gateway exists with that name
    """
    return _lookup("gateway", _get_gateways(), name)


def list_providers() -> list[str]:
    """List available CRM provider names."""
    return sorted(_get_providers().keys())


def list_gateways() -> list[str]:
    """List available payment gateway names."""
    return sorted(_get_gateways().keys())
