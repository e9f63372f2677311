"""Tests for exception hierarchy."""

from refillbff.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    ContactNotFoundError,
    CRMError,
    InputError,
    InvalidFieldError,
    MissingFieldError,
    PaymentGatewayError,
    PaymentsNotConfiguredError,
    RefillBffError,
    RemoteServiceError,
    TaskNotFoundError,
)


class TestExceptionHierarchy:
    def test_base_exception(self):
        e = RefillBffError("test", "details")
        assert e.message == "test"
        assert e.details == "details"
        assert str(e) == "test"

    def test_config_errors(self):
        assert issubclass(ConfigNotFoundError, ConfigError)
        assert issubclass(ConfigValidationError, ConfigError)
        assert issubclass(ConfigError, RefillBffError)

    def test_input_errors(self):
        assert issubclass(MissingFieldError, InputError)
        assert issubclass(InvalidFieldError, InputError)

    def test_remote_errors(self):
        assert issubclass(CRMError, RemoteServiceError)
        assert issubclass(PaymentGatewayError, RemoteServiceError)
        assert CRMError.service == "hubspot"
        assert PaymentGatewayError.service == "stripe"

    def test_lookup_errors_are_not_input_errors(self):
        assert not issubclass(ContactNotFoundError, InputError)
        assert not issubclass(TaskNotFoundError, InputError)


class TestExceptionMessages:
    def test_config_not_found(self):
        e = ConfigNotFoundError()
        assert e.message == "Missing HUBSPOT_TOKEN"
        assert "refillbff configure" in e.details

    def test_config_validation(self):
        e = ConfigValidationError("port", "too big")
        assert "port" in e.message
        assert e.details == "too big"

    def test_missing_field(self):
        e = MissingFieldError("email")
        assert e.message == "Missing email"
        assert e.field == "email"

    def test_invalid_field(self):
        e = InvalidFieldError("amount", "must be positive")
        assert e.message == "Invalid amount"
        assert e.details == "must be positive"

    def test_contact_not_found(self):
        e = ContactNotFoundError("jane@example.com")
        assert e.message == "Contact not found"
        assert "jane@example.com" in e.details

    def test_remote_error_carries_payload(self):
        e = CRMError("HubSpot request failed", status_code=429, payload={"category": "RATE_LIMITS"})
        assert e.status_code == 429
        assert e.payload == {"category": "RATE_LIMITS"}
        assert e.details == {"category": "RATE_LIMITS"}

    def test_payments_not_configured(self):
        e = PaymentsNotConfiguredError()
        assert "STRIPE_SECRET_KEY" in e.details
