"""Shared test fixtures for refillbff."""

from collections import defaultdict
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from refillbff.api import create_app
from refillbff.core.services import Services
from refillbff.exceptions import CRMError
from refillbff.models import (
    PaymentIntentResult,
    PortalSession,
    ServiceConfig,
    SetupIntentResult,
)
from refillbff.providers.base import ObjectStore, PaymentGateway


class FakeObjectStore(ObjectStore):
    """In-memory CRM with HubSpot's object and association shapes."""

    name = "fake"

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self.associations: dict[tuple[str, str, str], list[str]] = defaultdict(list)
        self.association_types: list[tuple[str, str, int]] = []
        self.failing_archives: set[str] = set()
        self.closed = False
        self._next_id = 100

    def _new_id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    # Seeding helpers

    def seed_contact(self, email: str, **properties: Any) -> str:
        contact_id = self._new_id()
        self.objects["contacts"][contact_id] = {"email": email, **properties}
        return contact_id

    def seed_note(self, contact_id: str, body: Any, timestamp: Any = None) -> str:
        note_id = self._new_id()
        self.objects["notes"][note_id] = {"hs_note_body": body, "hs_timestamp": timestamp}
        self._link("notes", note_id, "contacts", contact_id)
        return note_id

    def seed_task(
        self,
        contact_id: str,
        subject: str,
        timestamp: Any = None,
        body: str = "",
    ) -> str:
        task_id = self._new_id()
        self.objects["tasks"][task_id] = {
            "hs_task_subject": subject,
            "hs_task_body": body,
            "hs_timestamp": timestamp,
        }
        self._link("tasks", task_id, "contacts", contact_id)
        return task_id

    def _link(self, object_type: str, object_id: str, to_type: str, to_id: str) -> None:
        self.associations[(object_type, object_id, to_type)].append(to_id)
        self.associations[(to_type, to_id, object_type)].append(object_id)

    # ObjectStore

    async def search(self, object_type, filters, properties):
        for object_id, props in self.objects[object_type].items():
            if all(props.get(k) == v for k, v in filters.items()):
                return {"id": object_id, "properties": {p: props.get(p) for p in properties}}
        return None

    async def batch_read(self, object_type, ids, properties):
        return [
            {"id": i, "properties": {p: self.objects[object_type][i].get(p) for p in properties}}
            for i in ids
            if i in self.objects[object_type]
        ]

    async def create(self, object_type, properties):
        object_id = self._new_id()
        self.objects[object_type][object_id] = dict(properties)
        return object_id

    async def patch(self, object_type, object_id, properties):
        self.objects[object_type][object_id].update(properties)

    async def archive(self, object_type, object_id):
        if object_id in self.failing_archives:
            raise CRMError(
                "HubSpot request failed",
                status_code=500,
                payload={"message": "internal error"},
            )
        self.objects[object_type].pop(object_id, None)
        for ids in self.associations.values():
            if object_id in ids:
                ids.remove(object_id)

    async def list_associations(self, object_type, object_id, to_type):
        return list(self.associations[(object_type, object_id, to_type)])

    async def associate(self, object_type, object_id, to_type, to_id, association_type):
        self._link(object_type, object_id, to_type, to_id)
        self.association_types.append((object_type, to_type, association_type))

    async def aclose(self) -> None:
        self.closed = True


class FakeGateway(PaymentGateway):
    """In-memory payment gateway."""

    name = "fake"

    def __init__(self) -> None:
        self.customers: dict[str, str] = {}
        self.intents: list[tuple[str, int, str]] = []
        self.return_urls: list[Optional[str]] = []

    async def find_or_create_customer(self, email, name=""):
        if email not in self.customers:
            self.customers[email] = f"cus_{len(self.customers) + 1}"
        return self.customers[email]

    async def create_payment_intent(self, customer_id, amount, currency):
        self.intents.append((customer_id, amount, currency))
        n = len(self.intents)
        return PaymentIntentResult(
            customer_id=customer_id,
            client_secret=f"pi_{n}_secret_test",
            payment_intent_id=f"pi_{n}",
        )

    async def create_setup_intent(self, customer_id):
        return SetupIntentResult(customer_id=customer_id, client_secret="seti_1_secret_test")

    async def create_billing_portal_session(self, customer_id, return_url=None):
        self.return_urls.append(return_url)
        return PortalSession(customer_id=customer_id, url="https://billing.example.com/p/1")


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide isolated config directory for tests."""
    config_dir = tmp_path / ".config" / "refillbff"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def mock_keyring(monkeypatch):
    """Mock keyring for secret storage tests."""
    storage = {}

    def mock_get(service, key):
        return storage.get(f"{service}:{key}")

    def mock_set(service, key, value):
        storage[f"{service}:{key}"] = value

    def mock_delete(service, key):
        k = f"{service}:{key}"
        if k not in storage:
            from keyring.errors import PasswordDeleteError
            raise PasswordDeleteError(f"No password for {key}")
        storage.pop(k)

    monkeypatch.setattr("keyring.get_password", mock_get)
    monkeypatch.setattr("keyring.set_password", mock_set)
    monkeypatch.setattr("keyring.delete_password", mock_delete)

    return storage


@pytest.fixture
def service_config():
    return ServiceConfig(hubspot_token="pat-test-token", stripe_secret_key="sk_test_123")


@pytest.fixture
def store():
    return FakeObjectStore()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def services(store, service_config, gateway):
    return Services.build(store, service_config, gateway)


@pytest.fixture
def client(store, service_config, gateway):
    """API client wired to the in-memory CRM and gateway."""
    app = create_app(service_config, store=store, gateway=gateway)
    with TestClient(app) as c:
        yield c
