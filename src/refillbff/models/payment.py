"""Payment data models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PaymentIntentResult(BaseModel):
    """Client secret for confirming a payment in the app."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    customer_id: str
    client_secret: str
    payment_intent_id: str = ""


class SetupIntentResult(BaseModel):
    """Client secret for saving a card without charging it."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    customer_id: str
    client_secret: str


class PortalSession(BaseModel):
    """Billing portal link for a customer."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    customer_id: str
    url: str
