"""Custom exceptions for refillbff."""

from typing import Any, Optional


class RefillBffError(Exception):
    """Base exception for all refillbff errors."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Config Errors
# ─────────────────────────────────────────────────────────────────────────────


class ConfigError(RefillBffError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """A required setting or secret is missing."""

    def __init__(self, setting: str = "HUBSPOT_TOKEN") -> None:
        super().__init__(
            f"Missing {setting}",
            f"Set the {setting} environment variable or run 'refillbff configure'.",
        )


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration: {field}",
            reason,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Input Errors
# ─────────────────────────────────────────────────────────────────────────────


class InputError(RefillBffError):
    """Base class for client input errors."""


class MissingFieldError(InputError):
    """A required request field is absent or empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing {field}")


class InvalidFieldError(InputError):
    """A request field has an unusable value."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        super().__init__(f"Invalid {field}", reason)


# ─────────────────────────────────────────────────────────────────────────────
# Lookup Errors
# ─────────────────────────────────────────────────────────────────────────────


class ContactNotFoundError(RefillBffError):
    """No CRM contact matches the email."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Contact not found",
            f"No contact exists for {email}. Create it with POST /contacts first.",
        )


class TaskNotFoundError(RefillBffError):
    """No CRM task exists with the given id."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__("Task not found", f"No task exists with id {task_id}.")


# ─────────────────────────────────────────────────────────────────────────────
# Remote Service Errors
# ─────────────────────────────────────────────────────────────────────────────


class RemoteServiceError(RefillBffError):
    """A call to an external platform failed."""

    service = "remote"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Any] = None,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(message, payload)


class CRMError(RemoteServiceError):
    """HubSpot request failed."""

    service = "hubspot"


class PaymentGatewayError(RemoteServiceError):
    """Stripe request failed."""

    service = "stripe"


class PaymentsNotConfiguredError(RefillBffError):
    """No payment gateway secret is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Payments are not configured",
            "Set STRIPE_SECRET_KEY or run 'refillbff configure --stripe-key'.",
        )
