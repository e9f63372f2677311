"""Remote platform clients."""

from refillbff.providers.base import ObjectStore, PaymentGateway
from refillbff.providers.registry import (
    get_gateway,
    get_provider,
    list_gateways,
    list_providers,
)

__all__ = [
    "ObjectStore",
    "PaymentGateway",
    "get_gateway",
    "get_provider",
    "list_gateways",
    "list_providers",
]
