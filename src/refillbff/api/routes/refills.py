"""Refill booking endpoints."""

from fastapi import APIRouter, Depends, Query, status

from refillbff.api.deps import get_services
from refillbff.api.schemas import (
    BookRefillRequest,
    RefillHistoryResponse,
    RefillResponse,
    UpdateRefillRequest,
)
from refillbff.core.services import Services

router = APIRouter(prefix="/refills", tags=["Refills"])


@router.post("/book", response_model=RefillResponse, status_code=status.HTTP_201_CREATED)
async def book_refill(
    body: BookRefillRequest,
    services: Services = Depends(get_services),
):
    task = await services.refills.book(
        email=body.email,
        service_location=body.service_location,
        scheduled_at=body.scheduled_at,
        vehicle=body.vehicle,
    )
    return RefillResponse(task=task)


@router.get("/history", response_model=RefillHistoryResponse)
async def refill_history(
    email: str = Query(...),
    services: Services = Depends(get_services),
):
    """Refill bookings, newest first."""
    refills = await services.refills.history(email)
    return RefillHistoryResponse(email=email, refills=refills)


@router.post("/update", response_model=RefillResponse)
async def update_refill(
    body: UpdateRefillRequest,
    services: Services = Depends(get_services),
):
    """Edit subject/body or change status (cancel, complete)."""
    task = await services.refills.update(
        task_id=body.task_id,
        subject=body.subject,
        body=body.body,
        cancel=body.cancel,
        status=body.status,
    )
    return RefillResponse(task=task)
