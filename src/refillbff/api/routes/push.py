"""Push-notification device registration."""

from fastapi import APIRouter, Depends, Query

from refillbff.api.deps import get_services
from refillbff.api.schemas import PushRegisterRequest, PushTokensResponse
from refillbff.core.services import Services

router = APIRouter(prefix="/push", tags=["Push"])


@router.post("/register", response_model=PushTokensResponse)
async def register_device(
    body: PushRegisterRequest,
    services: Services = Depends(get_services),
):
    await services.push_tokens.add(body.email, body.token)
    tokens = await services.push_tokens.get(body.email)
    return PushTokensResponse(email=body.email, tokens=sorted(tokens))


@router.get("/tokens", response_model=PushTokensResponse)
async def list_tokens(
    email: str = Query(...),
    services: Services = Depends(get_services),
):
    tokens = await services.push_tokens.get(email)
    return PushTokensResponse(email=email, tokens=sorted(tokens))
