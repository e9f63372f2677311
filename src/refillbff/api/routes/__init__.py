"""API routers."""

from refillbff.api.routes import contacts, health, payments, push, refills, vehicles

ROUTERS = [
    health.router,
    vehicles.router,
    contacts.router,
    contacts.legacy_router,
    refills.router,
    payments.router,
    push.router,
]

__all__ = ["ROUTERS"]
