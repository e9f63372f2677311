"""FastAPI dependencies."""

from fastapi import Request

from refillbff.core.services import Services


def get_services(request: Request) -> Services:
    """Services wired into the running app."""
    return request.app.state.services
