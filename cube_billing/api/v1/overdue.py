"""Stateless calculator endpoints - callers supply every fact"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cube_billing.api.dependencies import get_billing_cycle_days, get_request_id
from cube_billing.api.v1.schemas import CycleBoundarySchema, OverdueRequest, OverdueResponse
from cube_billing.config import settings
from cube_billing.domain.exceptions import ConfigurationError, InvalidCycleIndexError
from cube_billing.domain.overdue import calculate_overdue_balance, get_cycle_boundary
from cube_billing.infrastructure.observability.logging import log_overdue_evaluation
from cube_billing.infrastructure.observability.metrics import record_overdue_evaluation

router = APIRouter()


@router.post("/overdue/calculate", response_model=OverdueResponse)
def calculate_overdue(request_body: OverdueRequest, request: Request):
    """
    Compute the overdue state for an ad-hoc set of rental facts.

    Only completed billing cycles count toward the balance due.
    """
    billing_cycle_days = request_body.billing_cycle_days or settings.billing_cycle_days
    try:
        result = calculate_overdue_balance(
            start_date=request_body.start_date,
            current_date=request_body.current_date,
            end_date=request_body.end_date,
            daily_rent_cents=request_body.daily_rent_cents,
            total_paid_cents=request_body.total_paid_cents,
            billing_cycle_days=billing_cycle_days,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    record_overdue_evaluation(result)
    log_overdue_evaluation(get_request_id(request), "adhoc", result)
    return OverdueResponse.from_result(result)


@router.get("/cycles/boundary", response_model=CycleBoundarySchema)
def cycle_boundary(
    start_date: date = Query(..., description="Rental's first day"),
    cycle_index: int = Query(..., description="0-based cycle number"),
    billing_cycle_days: int = Depends(get_billing_cycle_days),
):
    """Return the start and end of one billing cycle window"""
    try:
        boundary = get_cycle_boundary(start_date, cycle_index, billing_cycle_days)
    except (InvalidCycleIndexError, ConfigurationError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return CycleBoundarySchema.from_boundary(boundary)
