"""Core services for refillbff."""

from refillbff.core.config import ConfigManager
from refillbff.core.contacts import ContactService
from refillbff.core.keychain import TokenKeychain
from refillbff.core.payments import PaymentService
from refillbff.core.push import InMemoryPushTokenStore, PushTokenStore
from refillbff.core.refills import RefillService
from refillbff.core.services import Services
from refillbff.core.vehicles import VehicleService

__all__ = [
    "ConfigManager",
    "ContactService",
    "InMemoryPushTokenStore",
    "PaymentService",
    "PushTokenStore",
    "RefillService",
    "Services",
    "TokenKeychain",
    "VehicleService",
]
