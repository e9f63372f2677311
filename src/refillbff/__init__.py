"""refillbff - backend-for-frontend for the refill iOS app."""

__version__ = "0.1.0"
