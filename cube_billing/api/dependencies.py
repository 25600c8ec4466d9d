"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Query, Request
from cube_billing.config import settings
from cube_billing.infrastructure.clients.rental_store import RentalStoreClient
from cube_billing.utils.date_utils import business_today


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rental_store_client() -> RentalStoreClient:
    """Provide rental backend client instance"""
    return RentalStoreClient()


def get_as_of(
    as_of: date | None = Query(None, description="Evaluation date (defaults to today in the business timezone)"),
) -> date:
    """Single 'today' snapshot shared by everything evaluated in one request"""
    return as_of or business_today(settings.business_timezone)


def get_billing_cycle_days(
    billing_cycle_days: int | None = Query(None, gt=0, description="Override the configured cycle length"),
) -> int:
    return billing_cycle_days or settings.billing_cycle_days
