"""Domain models - pure Python dataclasses representing billing entities"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Union

# A calendar instant: either a plain date or a datetime. Mixed kinds are aligned
# before subtraction (see utils.date_utils.align_instants).
Instant = Union[date, datetime]

DEFAULT_BILLING_CYCLE_DAYS = 14


@dataclass(frozen=True)
class RentalBillingFacts:
    """Snapshot of the facts needed to evaluate a rental's overdue state"""

    start_date: Instant
    current_date: Instant
    end_date: Instant
    daily_rent_cents: int
    total_paid_cents: int
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS


@dataclass(frozen=True)
class OverdueResult:
    """Overdue state computed from completed billing cycles only"""

    completed_cycles: int
    completed_cycles_amount_cents: int
    balance_due_cents: int
    days_overdue: int
    should_trigger_overdue: bool
    duration: int  # scheduled rental length in days, diagnostic only
    days_passed: int
    billing_cycle_days: int
    total_paid_cents: int


@dataclass(frozen=True)
class CycleBoundary:
    """Start (inclusive) and end of one billing cycle window"""

    cycle_start: Instant
    cycle_end: Instant


@dataclass(frozen=True)
class RentalRecord:
    """Rental facts as supplied by the external rental backend"""

    rental_id: str
    tenant_name: str
    start_date: date
    end_date: date
    daily_rent_cents: int
    total_paid_cents: int
    status: str = "ACTIVE"
    tenant_email: str | None = None
    cube_code: str | None = None


class ReminderType(str, Enum):
    SEVEN_DAY_ADVANCE = "SEVEN_DAY_ADVANCE"
    ONE_DAY_DUE = "ONE_DAY_DUE"
    OVERDUE = "OVERDUE"


@dataclass(frozen=True)
class PaymentReminder:
    """A reminder the caller should dispatch for a rental"""

    rental_id: str
    reminder_type: ReminderType
    amount_due_cents: int
    due_date: date
    billing_period: CycleBoundary


@dataclass(frozen=True)
class OverdueRental:
    """Rental paired with its overdue evaluation"""

    rental: RentalRecord
    result: OverdueResult
