"""REST API for the iOS app."""

from refillbff.api.app import create_app

__all__ = ["create_app"]
