"""Vehicle endpoints."""

from fastapi import APIRouter, Depends, Query

from refillbff.api.deps import get_services
from refillbff.api.schemas import VehicleListResponse, VehicleSyncRequest
from refillbff.core.services import Services
from refillbff.models import SyncReport

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("", response_model=VehicleListResponse)
async def list_vehicles(
    email: str = Query(...),
    services: Services = Depends(get_services),
):
    """Vehicles decoded from the customer's CRM notes."""
    vehicles = await services.vehicles.list_vehicles(email)
    return VehicleListResponse(email=email, vehicles=vehicles)


@router.post("/sync", response_model=SyncReport)
async def sync_vehicles(
    body: VehicleSyncRequest,
    services: Services = Depends(get_services),
):
    """Replace the customer's stored vehicles."""
    return await services.vehicles.sync_vehicles(body.email, body.vehicles)
