"""GET /v1/reminders/due - reminders owed to active rentals today"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from cube_billing.api.dependencies import (
    get_as_of,
    get_billing_cycle_days,
    get_rental_store_client,
    get_request_id,
)
from cube_billing.api.v1.schemas import ReminderPlanResponse, ReminderSchema
from cube_billing.domain.exceptions import DomainException, RentalStoreError
from cube_billing.domain.reminders import plan_reminders
from cube_billing.infrastructure.clients.rental_store import RentalStoreClient
from cube_billing.infrastructure.observability.metrics import (
    reminders_planned_counter,
    rental_store_failures_counter,
)

router = APIRouter()


@router.get("/reminders/due", response_model=ReminderPlanResponse)
async def get_due_reminders(
    request: Request,
    as_of: date = Depends(get_as_of),
    billing_cycle_days: int = Depends(get_billing_cycle_days),
    rental_store: RentalStoreClient = Depends(get_rental_store_client),
):
    """
    Plan 7-day, 1-day and overdue reminders for every active rental.

    A rental that fails to evaluate is reported in ``errors``; the rest of
    the batch still completes. Nothing is sent from here.
    """
    request_id = get_request_id(request)
    try:
        rentals = await rental_store.list_active_rentals()
    except RentalStoreError as e:
        rental_store_failures_counter.inc()
        logging.error(f"Rental backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Rental backend unavailable")

    reminders = []
    errors = []
    for rental in rentals:
        try:
            planned = plan_reminders(rental, as_of, billing_cycle_days)
        except DomainException as e:
            error = f"Error planning reminders for rental {rental.rental_id}: {e}"
            logging.error(error, extra={"request_id": request_id})
            errors.append(error)
            continue
        for reminder in planned:
            reminders_planned_counter.labels(reminder_type=reminder.reminder_type.value).inc()
        reminders.extend(planned)

    logging.info(
        "Reminder planning completed",
        extra={
            "request_id": request_id,
            "step": "reminder_plan",
            "processed": len(rentals),
            "reminders": len(reminders),
            "errors": len(errors),
        },
    )

    return ReminderPlanResponse(
        as_of=as_of,
        processed=len(rentals),
        reminders=[ReminderSchema.from_reminder(r) for r in reminders],
        errors=errors,
    )
