"""Payment reminder planning for fortnightly rent cycles"""

import logging
from datetime import date
from typing import List

from cube_billing.domain.models import (
    DEFAULT_BILLING_CYCLE_DAYS,
    PaymentReminder,
    RentalRecord,
    ReminderType,
)
from cube_billing.domain.overdue import (
    calculate_overdue_balance,
    current_cycle_boundary,
    get_cycle_boundary,
    validate_billing_cycle_days,
)
from cube_billing.utils.date_utils import ceil_days_between, whole_days_between

# days_until_due value that triggers each advance reminder
ADVANCE_REMINDER_DAYS = {
    ReminderType.SEVEN_DAY_ADVANCE: 7,
    ReminderType.ONE_DAY_DUE: 1,
}


def current_cycle_balance(
    rental: RentalRecord,
    today: date,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> int:
    """
    Amount owed by the end of the cycle containing ``today``.

    Unlike the overdue balance this includes the cycle in progress. When the
    rental ends partway through that cycle, only the days up to the end date
    are charged:

        current_cycle = days_passed // cycle + 1
        overrun = current_cycle * cycle - duration
        balance = cycle * current_cycle * daily_rent - paid - max(0, overrun) * daily_rent

    The result can be zero or negative when the tenant has paid ahead.
    """
    validate_billing_cycle_days(billing_cycle_days)
    duration = ceil_days_between(rental.start_date, rental.end_date)
    days_passed = max(0, whole_days_between(rental.start_date, today))

    current_cycle = days_passed // billing_cycle_days + 1
    overrun = current_cycle * billing_cycle_days - duration

    accrued = billing_cycle_days * current_cycle * rental.daily_rent_cents
    accrued -= max(0, overrun) * rental.daily_rent_cents
    return accrued - rental.total_paid_cents


def days_until_due(
    rental: RentalRecord,
    today: date,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> int:
    """Whole days from today to the end of the current cycle"""
    boundary = current_cycle_boundary(rental.start_date, today, billing_cycle_days)
    return ceil_days_between(today, boundary.cycle_end)


def plan_reminders(
    rental: RentalRecord,
    today: date,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> List[PaymentReminder]:
    """
    Decide which reminders a rental qualifies for on ``today``.

    - SEVEN_DAY_ADVANCE / ONE_DAY_DUE: the current cycle ends in exactly 7 / 1
      days and something is owed for it
    - OVERDUE: the overdue calculator triggers; the due date is the end of the
      last completed cycle

    Reminders are advisory. Skipping ones already sent is the caller's job.
    """
    reminders: List[PaymentReminder] = []

    boundary = current_cycle_boundary(rental.start_date, today, billing_cycle_days)
    remaining = ceil_days_between(today, boundary.cycle_end)

    for reminder_type, lead_days in ADVANCE_REMINDER_DAYS.items():
        if remaining != lead_days:
            continue
        balance = current_cycle_balance(rental, today, billing_cycle_days)
        if balance <= 0:
            logging.warning(
                f"Skipping {reminder_type.value} reminder: non-positive amount due {balance}",
                extra={"rental_id": rental.rental_id, "due_date": boundary.cycle_end.isoformat()},
            )
            continue
        reminders.append(
            PaymentReminder(
                rental_id=rental.rental_id,
                reminder_type=reminder_type,
                amount_due_cents=balance,
                due_date=boundary.cycle_end,
                billing_period=boundary,
            )
        )

    result = calculate_overdue_balance(
        start_date=rental.start_date,
        current_date=today,
        end_date=rental.end_date,
        daily_rent_cents=rental.daily_rent_cents,
        total_paid_cents=rental.total_paid_cents,
        billing_cycle_days=billing_cycle_days,
    )
    if result.should_trigger_overdue:
        last_completed = get_cycle_boundary(rental.start_date, result.completed_cycles - 1, billing_cycle_days)
        reminders.append(
            PaymentReminder(
                rental_id=rental.rental_id,
                reminder_type=ReminderType.OVERDUE,
                amount_due_cents=result.balance_due_cents,
                due_date=last_completed.cycle_end,
                billing_period=last_completed,
            )
        )

    return reminders
