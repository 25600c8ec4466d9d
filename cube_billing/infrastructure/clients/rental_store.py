"""Rental backend HTTP client for fetching rental billing facts"""

import httpx
from datetime import date, datetime
from typing import Any, Dict, List
from urllib.parse import quote

from cube_billing.config import settings
from cube_billing.domain.exceptions import RentalNotFoundError, RentalStoreError
from cube_billing.domain.models import RentalRecord
from cube_billing.utils.date_utils import to_business_date
from cube_billing.utils.money import dollars_to_cents


def _parse_instant(value: str) -> date:
    """Backend emits ISO timestamps in UTC; collapse them to the business calendar day"""
    if "T" not in value:
        return date.fromisoformat(value)
    return to_business_date(datetime.fromisoformat(value.replace("Z", "+00:00")), settings.business_timezone)


def parse_rental(payload: Dict[str, Any]) -> RentalRecord:
    """
    Build a RentalRecord from the backend's camelCase rental payload.

    Money arrives in dollars and is converted to cents here. ``totalPaid``
    wins when present, otherwise the ``payments`` list is summed.
    """
    if payload.get("totalPaid") is not None:
        total_paid_cents = dollars_to_cents(payload["totalPaid"])
    else:
        total_paid_cents = sum(dollars_to_cents(p["amount"]) for p in payload.get("payments") or [])

    tenant = payload.get("tenant") or {}
    user = tenant.get("user") or {}
    cube = payload.get("cube") or {}

    return RentalRecord(
        rental_id=str(payload["id"]),
        tenant_name=tenant.get("businessName", ""),
        tenant_email=user.get("email"),
        cube_code=cube.get("code"),
        start_date=_parse_instant(payload["startDate"]),
        end_date=_parse_instant(payload["endDate"]),
        daily_rent_cents=dollars_to_cents(payload["dailyRent"]),
        total_paid_cents=total_paid_cents,
        status=payload.get("status", "ACTIVE"),
    )


class RentalStoreClient:
    """Client for the external rental backend"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.rental_store_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_rental(self, rental_id: str) -> RentalRecord:
        """
        Fetch one rental with its payments.

        Raises:
            RentalNotFoundError: Backend answered 404
            RentalStoreError: On timeout, other HTTP errors, or invalid response
        """
        data = await self._get_json(
            f"/admin/rentals/{quote(rental_id, safe='')}", not_found=f"Rental {rental_id} not found"
        )
        try:
            return parse_rental(data.get("rental", data))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise RentalStoreError(f"Invalid rental data from backend: {e}") from e

    async def list_active_rentals(self) -> List[RentalRecord]:
        """
        Fetch all ACTIVE rentals.

        Raises:
            RentalStoreError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json("/admin/rentals", params={"status": "ACTIVE"})
        items = data.get("rentals", []) if isinstance(data, dict) else data
        try:
            return [parse_rental(item) for item in items]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise RentalStoreError(f"Invalid rental data from backend: {e}") from e

    async def _get_json(self, path: str, params: Dict[str, str] | None = None, not_found: str | None = None) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params=params)
                if response.status_code == 404 and not_found:
                    raise RentalNotFoundError(not_found)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise RentalStoreError(f"Rental backend timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise RentalStoreError(f"Rental backend error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise RentalStoreError(f"Rental backend unreachable: {e}") from e
            except ValueError as e:
                raise RentalStoreError(f"Invalid JSON from rental backend: {e}") from e
