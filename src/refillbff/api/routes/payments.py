"""Payment endpoints."""

from fastapi import APIRouter, Depends

from refillbff.api.deps import get_services
from refillbff.api.schemas import CustomerRequest, PaymentIntentRequest, PortalRequest
from refillbff.core.services import Services
from refillbff.models import PaymentIntentResult, PortalSession, SetupIntentResult

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("/intent", response_model=PaymentIntentResult)
async def create_payment_intent(
    body: PaymentIntentRequest,
    services: Services = Depends(get_services),
):
    return await services.payments.payment_intent(
        email=body.email,
        amount=body.amount,
        currency=body.currency,
        name=body.name,
    )


@router.post("/setup-intent", response_model=SetupIntentResult)
async def create_setup_intent(
    body: CustomerRequest,
    services: Services = Depends(get_services),
):
    return await services.payments.setup_intent(body.email, body.name)


@router.post("/portal", response_model=PortalSession)
async def create_portal_session(
    body: PortalRequest,
    services: Services = Depends(get_services),
):
    return await services.payments.billing_portal(body.email, body.name, body.return_url)
