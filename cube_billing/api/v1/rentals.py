"""Overdue views over rentals held by the external rental backend"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from cube_billing.api.dependencies import (
    get_as_of,
    get_billing_cycle_days,
    get_rental_store_client,
    get_request_id,
)
from cube_billing.api.v1.schemas import (
    OverdueListResponse,
    OverdueResponse,
    RentalOverdueResponse,
    RentalSchema,
)
from cube_billing.domain.exceptions import ConfigurationError, RentalNotFoundError, RentalStoreError
from cube_billing.domain.models import OverdueRental
from cube_billing.domain.sweep import evaluate_rental, sweep_overdue_rentals
from cube_billing.infrastructure.clients.rental_store import RentalStoreClient
from cube_billing.infrastructure.observability.logging import log_overdue_evaluation
from cube_billing.infrastructure.observability.metrics import (
    record_overdue_evaluation,
    rental_store_failures_counter,
)

router = APIRouter()


def _to_response(item: OverdueRental, as_of: date) -> RentalOverdueResponse:
    return RentalOverdueResponse(
        as_of=as_of,
        rental=RentalSchema.from_record(item.rental),
        overdue=OverdueResponse.from_result(item.result),
    )


@router.get("/rentals/overdue", response_model=OverdueListResponse)
async def list_overdue_rentals(
    request: Request,
    as_of: date = Depends(get_as_of),
    billing_cycle_days: int = Depends(get_billing_cycle_days),
    rental_store: RentalStoreClient = Depends(get_rental_store_client),
):
    """
    Active rentals with an unpaid balance from completed cycles.

    Sorted by balance due, largest first. Every rental is evaluated against
    the same ``as_of`` day.
    """
    request_id = get_request_id(request)
    try:
        rentals = await rental_store.list_active_rentals()
    except RentalStoreError as e:
        rental_store_failures_counter.inc()
        logging.error(f"Rental backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Rental backend unavailable")

    try:
        overdue = sweep_overdue_rentals(rentals, as_of, billing_cycle_days)
    except ConfigurationError as e:
        logging.error(f"Billing configuration error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    for item in overdue:
        record_overdue_evaluation(item.result)

    logging.info(
        "Overdue sweep completed",
        extra={
            "request_id": request_id,
            "step": "overdue_sweep",
            "rentals_checked": len(rentals),
            "overdue_count": len(overdue),
            "as_of": as_of.isoformat(),
        },
    )

    return OverdueListResponse(
        as_of=as_of,
        count=len(overdue),
        total_balance_due_cents=sum(item.result.balance_due_cents for item in overdue),
        rentals=[_to_response(item, as_of) for item in overdue],
    )


@router.get("/rentals/{rental_id}/overdue", response_model=RentalOverdueResponse)
async def get_rental_overdue(
    rental_id: str,
    request: Request,
    as_of: date = Depends(get_as_of),
    billing_cycle_days: int = Depends(get_billing_cycle_days),
    rental_store: RentalStoreClient = Depends(get_rental_store_client),
):
    """Overdue state of one rental as of the business day"""
    request_id = get_request_id(request)
    try:
        rental = await rental_store.get_rental(rental_id)
    except RentalNotFoundError:
        raise HTTPException(status_code=404, detail="Rental not found")
    except RentalStoreError as e:
        rental_store_failures_counter.inc()
        logging.error(f"Rental backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Rental backend unavailable")

    try:
        item = evaluate_rental(rental, as_of, billing_cycle_days)
    except ConfigurationError as e:
        logging.error(f"Billing configuration error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    record_overdue_evaluation(item.result)
    log_overdue_evaluation(request_id, rental_id, item.result)
    return _to_response(item, as_of)
