"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from cube_billing.api.main import create_app
from cube_billing.domain.models import RentalRecord


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def make_rental():
    """Factory for rentals starting 2024-01-01 at $10/day over six fortnights"""

    def _make(
        rental_id: str = "rental_1",
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2024, 3, 25),
        daily_rent_cents: int = 1000,
        total_paid_cents: int = 0,
    ) -> RentalRecord:
        return RentalRecord(
            rental_id=rental_id,
            tenant_name=f"Tenant {rental_id}",
            start_date=start_date,
            end_date=end_date,
            daily_rent_cents=daily_rent_cents,
            total_paid_cents=total_paid_cents,
            tenant_email=f"{rental_id}@example.com",
            cube_code="A-01",
        )

    return _make


@pytest.fixture
def sample_rentals(make_rental) -> list[RentalRecord]:
    """Portfolio evaluated as of 2024-01-20 (19 days in, one cycle completed)"""
    return [
        make_rental("rental_small", daily_rent_cents=1000),  # owes 14000
        make_rental("rental_paid", total_paid_cents=14000),  # paid up
        make_rental("rental_large", daily_rent_cents=2000),  # owes 28000
        make_rental("rental_new", start_date=date(2024, 1, 10)),  # no completed cycle yet
    ]
