"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from refillbff import __version__
from refillbff.api.routes import ROUTERS
from refillbff.core.config import ConfigManager
from refillbff.core.push import PushTokenStore
from refillbff.core.services import Services
from refillbff.exceptions import (
    ConfigError,
    ContactNotFoundError,
    InputError,
    PaymentsNotConfiguredError,
    RefillBffError,
    RemoteServiceError,
    TaskNotFoundError,
)
from refillbff.models import ServiceConfig
from refillbff.providers import get_gateway, get_provider
from refillbff.providers.base import ObjectStore, PaymentGateway

logger = logging.getLogger(__name__)

CRM_PROVIDER = "hubspot"
PAYMENT_GATEWAY = "stripe"


def status_for(exc: RefillBffError) -> int:
    """HTTP status for a domain error."""
    if isinstance(exc, InputError):
        return 400
    if isinstance(exc, (ContactNotFoundError, TaskNotFoundError)):
        return 404
    if isinstance(exc, PaymentsNotConfiguredError):
        return 503
    return 500


async def handle_domain_error(request: Request, exc: RefillBffError) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, RemoteServiceError):
        logger.error(
            "%s failed on %s %s: %s",
            exc.service,
            request.method,
            request.url.path,
            exc.payload,
        )
    elif isinstance(exc, ConfigError):
        logger.error("Configuration error: %s", exc.message)

    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=status_code, content=content)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first bad field as a 400, like the app expects."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:]) or "request"
    prefix = "Missing" if first.get("type") == "missing" else "Invalid"
    return JSONResponse(
        status_code=400,
        content={"error": f"{prefix} {field}", "details": first.get("msg", "")},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.services.aclose()


def create_app(
    config: Optional[ServiceConfig] = None,
    store: Optional[ObjectStore] = None,
    gateway: Optional[PaymentGateway] = None,
    push_tokens: Optional[PushTokenStore] = None,
) -> FastAPI:
    """Build the API with its collaborators.

    Args:
        config: Settings; loaded through ConfigManager when omitted
        store: CRM object store; HubSpot when omitted
        gateway: Payment gateway; Stripe when omitted and a key is configured
        push_tokens: Device token store; in-memory when omitted

    Raises:
        ConfigNotFoundError: If no store is given and no HubSpot token is set
    """
    if config is None:
        config = ConfigManager().load()

    if store is None:
        ConfigManager.require_crm_token(config)
        store = get_provider(CRM_PROVIDER).from_config(config)
    if gateway is None and config.payments_enabled:
        gateway = get_gateway(PAYMENT_GATEWAY).from_config(config)
    if gateway is None:
        logger.info("No Stripe key configured; payment endpoints will return 503")

    app = FastAPI(
        title="refillbff",
        description="Backend-for-frontend for the refill iOS app.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.services = Services.build(store, config, gateway, push_tokens)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RefillBffError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    for router in ROUTERS:
        app.include_router(router)

    return app
