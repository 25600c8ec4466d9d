"""Overdue balance calculation - balance due from COMPLETED billing cycles only"""

from cube_billing.domain.exceptions import ConfigurationError, InvalidCycleIndexError
from cube_billing.domain.models import (
    DEFAULT_BILLING_CYCLE_DAYS,
    CycleBoundary,
    Instant,
    OverdueResult,
    RentalBillingFacts,
)
from cube_billing.utils.date_utils import add_days, ceil_days_between, whole_days_between
from cube_billing.utils.money import format_cents


def validate_billing_cycle_days(billing_cycle_days: int) -> None:
    """Reject cycle lengths the arithmetic cannot use"""
    if isinstance(billing_cycle_days, bool) or not isinstance(billing_cycle_days, int):
        raise ConfigurationError(f"billing_cycle_days must be an integer, got {billing_cycle_days!r}")
    if billing_cycle_days <= 0:
        raise ConfigurationError(f"billing_cycle_days must be positive, got {billing_cycle_days}")


def calculate_overdue_balance(
    start_date: Instant,
    current_date: Instant,
    end_date: Instant,
    daily_rent_cents: int,
    total_paid_cents: int,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> OverdueResult:
    """
    Calculate the overdue state of a rental from completed cycles only.

    The cycle currently in progress never contributes to the balance due or
    to the trigger: a tenant is overdue only for a cycle that has fully
    elapsed and is still unpaid.

    Rules:
    - days_passed is floored to whole days and clamped at 0 (a rental that
      has not started cannot be overdue)
    - completed_cycles = days_passed // billing_cycle_days
    - balance due never goes negative, overpayment is not a credit here
    - days_overdue counts days since the last completed cycle boundary, so it
      is 0 on the day a cycle completes

    Args:
        start_date: Rental's first day
        current_date: As-of snapshot; callers pass it explicitly
        end_date: Scheduled last day, only used for ``duration``
        daily_rent_cents: Rent accrued per day
        total_paid_cents: Cumulative payments received
        billing_cycle_days: Cycle length (default 14, a fortnight)

    Raises:
        ConfigurationError: If billing_cycle_days is not a positive integer

    Example:
        start 2024-01-01, now 2024-01-20, $10/day, nothing paid
        → days_passed 19, 1 completed cycle, $140 due, 5 days overdue, trigger
    """
    validate_billing_cycle_days(billing_cycle_days)

    duration = ceil_days_between(start_date, end_date)
    days_passed = max(0, whole_days_between(start_date, current_date))

    completed_cycles = days_passed // billing_cycle_days
    completed_cycles_amount = completed_cycles * billing_cycle_days * daily_rent_cents
    balance_due = max(0, completed_cycles_amount - total_paid_cents)

    last_completed_cycle_end_day = completed_cycles * billing_cycle_days
    days_overdue = max(0, days_passed - last_completed_cycle_end_day)

    # days_overdue is 0 on the day a cycle closes, so no trigger until the next day
    should_trigger_overdue = completed_cycles > 0 and balance_due > 0 and days_overdue > 0

    return OverdueResult(
        completed_cycles=completed_cycles,
        completed_cycles_amount_cents=completed_cycles_amount,
        balance_due_cents=balance_due,
        days_overdue=days_overdue,
        should_trigger_overdue=should_trigger_overdue,
        duration=duration,
        days_passed=days_passed,
        billing_cycle_days=billing_cycle_days,
        total_paid_cents=total_paid_cents,
    )


def calculate_overdue_from_facts(facts: RentalBillingFacts) -> OverdueResult:
    """Run calculate_overdue_balance on a facts snapshot"""
    return calculate_overdue_balance(
        start_date=facts.start_date,
        current_date=facts.current_date,
        end_date=facts.end_date,
        daily_rent_cents=facts.daily_rent_cents,
        total_paid_cents=facts.total_paid_cents,
        billing_cycle_days=facts.billing_cycle_days,
    )


def get_cycle_boundary(
    start_date: Instant,
    cycle_index: int,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> CycleBoundary:
    """
    Window of the 0-based billing cycle ``cycle_index``.

    Raises:
        InvalidCycleIndexError: If cycle_index is negative
        ConfigurationError: If billing_cycle_days is not a positive integer
    """
    validate_billing_cycle_days(billing_cycle_days)
    if cycle_index < 0:
        raise InvalidCycleIndexError(f"cycle_index must be non-negative, got {cycle_index}")

    return CycleBoundary(
        cycle_start=add_days(start_date, cycle_index * billing_cycle_days),
        cycle_end=add_days(start_date, (cycle_index + 1) * billing_cycle_days),
    )


def current_cycle_boundary(
    start_date: Instant,
    current_date: Instant,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> CycleBoundary:
    """Window of the cycle containing current_date (the first cycle if the rental hasn't started)"""
    validate_billing_cycle_days(billing_cycle_days)
    days_passed = max(0, whole_days_between(start_date, current_date))
    return get_cycle_boundary(start_date, days_passed // billing_cycle_days, billing_cycle_days)


def format_overdue_details(result: OverdueResult) -> str:
    """Single log line describing an overdue evaluation"""
    return " | ".join(
        [
            f"Completed Cycles: {result.completed_cycles}",
            f"Days Overdue: {result.days_overdue}",
            f"Balance Due (from completed cycles): {format_cents(result.balance_due_cents)}",
            f"Total Paid: {format_cents(result.total_paid_cents)}",
            f"Amount Due from Completed Cycles: {format_cents(result.completed_cycles_amount_cents)}",
            f"Should Trigger: {'YES' if result.should_trigger_overdue else 'NO'}",
        ]
    )
