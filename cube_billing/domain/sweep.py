"""Batch overdue evaluation across many rentals"""

from typing import Iterable, List

from cube_billing.domain.models import DEFAULT_BILLING_CYCLE_DAYS, Instant, OverdueRental, RentalRecord
from cube_billing.domain.overdue import calculate_overdue_balance


def evaluate_rental(
    rental: RentalRecord,
    as_of: Instant,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> OverdueRental:
    result = calculate_overdue_balance(
        start_date=rental.start_date,
        current_date=as_of,
        end_date=rental.end_date,
        daily_rent_cents=rental.daily_rent_cents,
        total_paid_cents=rental.total_paid_cents,
        billing_cycle_days=billing_cycle_days,
    )
    return OverdueRental(rental=rental, result=result)


def sweep_overdue_rentals(
    rentals: Iterable[RentalRecord],
    as_of: Instant,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> List[OverdueRental]:
    """
    Evaluate every rental against one ``as_of`` snapshot and keep the overdue ones.

    Returns:
        Overdue rentals, largest balance due first (ties ordered by rental id)
    """
    evaluated = [evaluate_rental(rental, as_of, billing_cycle_days) for rental in rentals]
    overdue = [item for item in evaluated if item.result.should_trigger_overdue]
    return sorted(overdue, key=lambda item: (-item.result.balance_due_cents, item.rental.rental_id))
