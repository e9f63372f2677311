"""Tests for contact, payment and signup services."""

import pytest

from refillbff.codec import decode_vehicle
from refillbff.core.services import CAR_DETAILS_PREFIX, Services
from refillbff.exceptions import InvalidFieldError, MissingFieldError, PaymentsNotConfiguredError
from refillbff.models import ContactInfo, ServiceConfig

EMAIL = "jane@example.com"


class TestContacts:
    @pytest.mark.asyncio
    async def test_upsert_creates_then_updates(self, services, store):
        info = ContactInfo(email=EMAIL, first_name="Jane")
        contact_id, created = await services.contacts.upsert(info)
        assert created is True

        updated = ContactInfo(email=EMAIL, first_name="Janet", phone="555-0100")
        same_id, created = await services.contacts.upsert(updated)
        assert created is False
        assert same_id == contact_id
        assert store.objects["contacts"][contact_id]["firstname"] == "Janet"
        assert store.objects["contacts"][contact_id]["phone"] == "555-0100"

    @pytest.mark.asyncio
    async def test_find_missing(self, services):
        assert await services.contacts.find("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_find_blank(self, services):
        with pytest.raises(MissingFieldError):
            await services.contacts.find("")


class TestContactStatus:
    @pytest.mark.asyncio
    async def test_unknown(self, services):
        status = await services.contact_status("nobody@example.com")
        assert status.exists is False
        assert status.contact_id is None

    @pytest.mark.asyncio
    async def test_counts(self, services, store):
        contact_id = store.seed_contact(EMAIL, firstname="Jane", lastname="Doe")
        store.seed_note(contact_id, '{"make":"Ford","model":"Ranger"}', "1000")
        store.seed_note(contact_id, "Gate code 1234", "2000")
        store.seed_task(contact_id, "(0) Refill request", "1000")
        store.seed_task(contact_id, "(1) Refill request", "2000")
        store.seed_task(contact_id, "Send invoice", "3000")

        status = await services.contact_status(EMAIL)
        assert status.exists is True
        assert status.contact_id == contact_id
        assert status.first_name == "Jane"
        assert status.vehicle_count == 1
        assert status.open_refill_count == 1

    @pytest.mark.asyncio
    async def test_deeply_nested_note_not_counted(self, services, store):
        contact_id = store.seed_contact(EMAIL)
        store.seed_note(contact_id, "note: " + '{"a":' * 50000 + "1" + "}" * 50000, "1000")
        store.seed_note(contact_id, '{"make":"Ford","model":"Ranger"}', "2000")

        status = await services.contact_status(EMAIL)
        assert status.vehicle_count == 1


class TestRegisterContact:
    @pytest.mark.asyncio
    async def test_car_details_and_appointment(self, services, store):
        info = ContactInfo(email=EMAIL, first_name="Jane")
        contact_id, task = await services.register_contact(
            info,
            car_details={"make": "Toyota", "model": "Tacoma", "plate": "8ABC123"},
            appointment={"startISO": "2025-03-04T09:30:00Z", "location": "Depot 4"},
        )

        notes = list(store.objects["notes"].values())
        assert len(notes) == 1
        assert notes[0]["hs_note_body"].startswith(CAR_DETAILS_PREFIX)
        assert decode_vehicle(notes[0]["hs_note_body"]).license_plate == "8ABC123"

        assert task.raw_subject == "(0) Refill request - Jane – Mar 4, 2025, 9:30 AM"
        assert task.body == "Depot 4"
        assert store.associations[("contacts", contact_id, "tasks")] == [task.id]

    @pytest.mark.asyncio
    async def test_contact_only(self, services, store):
        contact_id, task = await services.register_contact(ContactInfo(email=EMAIL))
        assert task is None
        assert contact_id in store.objects["contacts"]
        assert not store.objects["notes"]

    @pytest.mark.asyncio
    async def test_weak_car_details_ignored(self, services, store):
        await services.register_contact(ContactInfo(email=EMAIL), car_details={"color": "red"})
        assert not store.objects["notes"]

    @pytest.mark.asyncio
    async def test_appointment_without_start(self, services, store):
        _, task = await services.register_contact(ContactInfo(email=EMAIL), appointment={"location": "Depot"})
        assert task is None

    @pytest.mark.asyncio
    async def test_default_task_body(self, services):
        _, task = await services.register_contact(
            ContactInfo(email=EMAIL), appointment={"startISO": "2025-03-04T09:30:00Z"}
        )
        assert task.body == "Refill appointment from iOS app"

    @pytest.mark.asyncio
    async def test_aclose(self, services, store):
        await services.aclose()
        assert store.closed is True


class TestPayments:
    @pytest.mark.asyncio
    async def test_payment_intent(self, services, gateway):
        result = await services.payments.payment_intent(EMAIL, 2500, "USD", "Jane")
        assert result.customer_id == "cus_1"
        assert result.client_secret == "pi_1_secret_test"
        assert gateway.intents == [("cus_1", 2500, "usd")]

    @pytest.mark.asyncio
    async def test_customer_reused(self, services, gateway):
        await services.payments.payment_intent(EMAIL, 100)
        await services.payments.setup_intent(EMAIL)
        assert gateway.customers == {EMAIL: "cus_1"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0, -5])
    async def test_amount_must_be_positive(self, services, amount):
        with pytest.raises(InvalidFieldError) as exc_info:
            await services.payments.payment_intent(EMAIL, amount)
        assert exc_info.value.field == "amount"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("currency", ["dollars", "us", "12$"])
    async def test_currency_code(self, services, currency):
        with pytest.raises(InvalidFieldError):
            await services.payments.payment_intent(EMAIL, 100, currency)

    @pytest.mark.asyncio
    async def test_blank_email(self, services):
        with pytest.raises(MissingFieldError):
            await services.payments.setup_intent(" ")

    @pytest.mark.asyncio
    async def test_portal_return_url_fallback(self, store, gateway):
        config = ServiceConfig(billing_portal_return_url="https://app.example/account")
        services = Services.build(store, config, gateway)
        await services.payments.billing_portal(EMAIL)
        await services.payments.billing_portal(EMAIL, return_url="https://app.example/done")
        assert gateway.return_urls == ["https://app.example/account", "https://app.example/done"]

    @pytest.mark.asyncio
    async def test_not_configured(self, store):
        services = Services.build(store, ServiceConfig())
        with pytest.raises(PaymentsNotConfiguredError):
            await services.payments.payment_intent(EMAIL, 100)
