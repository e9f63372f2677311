"""Tests for payment models."""

from refillbff.models import PaymentIntentResult, PortalSession


class TestPaymentModels:
    def test_intent_camel_case(self):
        result = PaymentIntentResult(customer_id="cus_1", client_secret="pi_1_secret")
        assert result.model_dump(by_alias=True) == {
            "customerId": "cus_1",
            "clientSecret": "pi_1_secret",
            "paymentIntentId": "",
        }

    def test_portal_from_camel_case(self):
        session = PortalSession.model_validate({"customerId": "cus_1", "url": "https://x.example"})
        assert session.customer_id == "cus_1"
