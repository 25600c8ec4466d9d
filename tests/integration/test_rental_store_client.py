"""Tests for the rental backend client against an in-process httpx transport"""

import asyncio
import json
import httpx
import pytest
from datetime import date
from pathlib import Path
from cube_billing.domain.exceptions import RentalNotFoundError, RentalStoreError
from cube_billing.infrastructure.clients.rental_store import RentalStoreClient, parse_rental

STUB_FILE = Path(__file__).resolve().parents[2] / "mock" / "rental_stub" / "rentals.json"


@pytest.fixture
def stub_rentals() -> list[dict]:
    return json.loads(STUB_FILE.read_text())["rentals"]


def make_client(handler) -> RentalStoreClient:
    return RentalStoreClient(base_url="http://rentals.test", timeout=1.0, transport=httpx.MockTransport(handler))


def test_parse_rental_sums_payments_into_cents(stub_rentals):
    rental = parse_rental(stub_rentals[1])

    assert rental.rental_id == "rental_overdue"
    assert rental.tenant_name == "Paper Fox Stationery"
    assert rental.tenant_email == "hello@paperfox.example"
    assert rental.cube_code == "B-07"
    assert rental.start_date == date(2024, 1, 1)
    assert rental.end_date == date(2024, 6, 30)
    assert rental.daily_rent_cents == 1250
    assert rental.total_paid_cents == 17500


def test_parse_rental_prefers_total_paid(stub_rentals):
    rental = parse_rental(stub_rentals[2])

    assert rental.total_paid_cents == 30000
    assert rental.start_date == date(2024, 1, 8)


def test_parse_rental_utc_timestamp_lands_on_sydney_day():
    rental = parse_rental(
        {
            "id": 42,
            "startDate": "2023-12-31T13:00:00Z",
            "endDate": "2024-03-24T13:00:00.000Z",
            "dailyRent": 10,
            "payments": [],
        }
    )

    assert rental.rental_id == "42"
    assert rental.start_date == date(2024, 1, 1)
    assert rental.end_date == date(2024, 3, 25)
    assert rental.tenant_name == ""
    assert rental.cube_code is None


def test_get_rental(stub_rentals):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/admin/rentals/rental_paid_up"
        return httpx.Response(200, json={"rental": stub_rentals[0]})

    rental = asyncio.run(make_client(handler).get_rental("rental_paid_up"))

    assert rental.rental_id == "rental_paid_up"
    assert rental.total_paid_cents == 28000


def test_get_rental_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "rental not found"})

    with pytest.raises(RentalNotFoundError):
        asyncio.run(make_client(handler).get_rental("missing"))


def test_list_active_rentals_sends_status_filter(stub_rentals):
    active = [r for r in stub_rentals if r["status"] == "ACTIVE"]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["status"] == "ACTIVE"
        return httpx.Response(200, json={"rentals": active})

    rentals = asyncio.run(make_client(handler).list_active_rentals())

    assert [r.rental_id for r in rentals] == ["rental_paid_up", "rental_overdue", "rental_overpaid"]


def test_list_active_rentals_accepts_bare_array(stub_rentals):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=stub_rentals[:1])

    rentals = asyncio.run(make_client(handler).list_active_rentals())
    assert len(rentals) == 1


def test_server_error_raises_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    with pytest.raises(RentalStoreError, match="500"):
        asyncio.run(make_client(handler).list_active_rentals())


def test_timeout_raises_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RentalStoreError, match="timeout"):
        asyncio.run(make_client(handler).get_rental("rental_1"))


def test_connection_error_raises_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(RentalStoreError, match="unreachable"):
        asyncio.run(make_client(handler).list_active_rentals())


def test_malformed_payload_raises_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"rentals": [{"id": "r1", "startDate": "not-a-date"}]})

    with pytest.raises(RentalStoreError, match="Invalid rental data"):
        asyncio.run(make_client(handler).list_active_rentals())


def test_non_json_body_raises_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(RentalStoreError, match="Invalid JSON"):
        asyncio.run(make_client(handler).list_active_rentals())


def test_get_rental_escapes_rental_id_in_path(stub_rentals):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.raw_path == b"/admin/rentals/a%2Fb%3Fc%23d"
        assert request.url.query == b""
        return httpx.Response(200, json={"rental": stub_rentals[0]})

    rental = asyncio.run(make_client(handler).get_rental("a/b?c#d"))

    assert rental.rental_id == "rental_paid_up"
