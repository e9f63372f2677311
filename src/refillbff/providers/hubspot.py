"""HubSpot CRM provider."""

import logging
from typing import Any, Optional

import httpx

from refillbff.exceptions import CRMError
from refillbff.models import ServiceConfig
from refillbff.providers.base import HttpProvider, ObjectStore

logger = logging.getLogger(__name__)

# HubSpot caps batch reads at 100 inputs
BATCH_LIMIT = 100
ASSOCIATION_PAGE_SIZE = 500


class HubSpotProvider(HttpProvider, ObjectStore):
    """CRM object store backed by the HubSpot v3/v4 REST API."""

    name = "hubspot"
    service_name = "HubSpot"
    error_class = CRMError

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.hubapi.com",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "HubSpotProvider":
        """Build a provider from service settings."""
        token = config.hubspot_token.get_secret_value() if config.hubspot_token else ""
        return cls(
            token=token,
            base_url=config.crm_base_url,
            timeout=config.request_timeout,
        )

    async def search(
        self,
        object_type: str,
        filters: dict[str, str],
        properties: list[str],
    ) -> Optional[dict[str, Any]]:
        body = {
            "filterGroups": [
                {
                    "filters": [
                        {"propertyName": key, "operator": "EQ", "value": value}
                        for key, value in filters.items()
                    ]
                }
            ],
            "properties": properties,
            "limit": 1,
        }
        data = await self._request(
            "POST", f"/crm/v3/objects/{object_type}/search", json=body
        )
        results = (data or {}).get("results") or []
        return results[0] if results else None

    async def batch_read(
        self,
        object_type: str,
        ids: list[str],
        properties: list[str],
    ) -> list[dict[str, Any]]:
        objects: list[dict[str, Any]] = []
        for start in range(0, len(ids), BATCH_LIMIT):
            chunk = ids[start : start + BATCH_LIMIT]
            data = await self._request(
                "POST",
                f"/crm/v3/objects/{object_type}/batch/read",
                json={
                    "properties": properties,
                    "inputs": [{"id": object_id} for object_id in chunk],
                },
            )
            objects.extend((data or {}).get("results") or [])
        return objects

    async def create(self, object_type: str, properties: dict[str, Any]) -> str:
        data = await self._request(
            "POST", f"/crm/v3/objects/{object_type}", json={"properties": properties}
        )
        object_id = str(data["id"])
        logger.debug("Created %s %s", object_type, object_id)
        return object_id

    async def patch(
        self,
        object_type: str,
        object_id: str,
        properties: dict[str, Any],
    ) -> None:
        await self._request(
            "PATCH",
            f"/crm/v3/objects/{object_type}/{object_id}",
            json={"properties": properties},
        )

    async def archive(self, object_type: str, object_id: str) -> None:
        await self._request("DELETE", f"/crm/v3/objects/{object_type}/{object_id}")
        logger.debug("Archived %s %s", object_type, object_id)

    async def list_associations(
        self,
        object_type: str,
        object_id: str,
        to_type: str,
    ) -> list[str]:
        ids: list[str] = []
        params: dict[str, Any] = {"limit": ASSOCIATION_PAGE_SIZE}
        path = f"/crm/v4/objects/{object_type}/{object_id}/associations/{to_type}"
        while True:
            data = await self._request("GET", path, params=params) or {}
            ids.extend(str(r["toObjectId"]) for r in data.get("results") or [])
            after = ((data.get("paging") or {}).get("next") or {}).get("after")
            if not after:
                return ids
            params["after"] = after

    async def associate(
        self,
        object_type: str,
        object_id: str,
        to_type: str,
        to_id: str,
        association_type: int,
    ) -> None:
        await self._request(
            "PUT",
            f"/crm/v4/objects/{object_type}/{object_id}/associations/{to_type}/{to_id}",
            json=[
                {
                    "associationCategory": "HUBSPOT_DEFINED",
                    "associationTypeId": association_type,
                }
            ],
        )
