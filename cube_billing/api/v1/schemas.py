"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional

from cube_billing.domain.models import CycleBoundary, OverdueResult, PaymentReminder, RentalRecord
from cube_billing.domain.overdue import format_overdue_details
from cube_billing.utils.date_utils import format_date_readable


class OverdueRequest(BaseModel):
    """Request body for POST /v1/overdue/calculate"""

    start_date: date = Field(..., description="Rental's first day")
    current_date: date = Field(..., description="As-of day for the calculation")
    end_date: date = Field(..., description="Rental's scheduled last day")
    daily_rent_cents: int = Field(..., ge=0, description="Rent accrued per day in cents")
    total_paid_cents: int = Field(0, ge=0, description="Cumulative payments in cents")
    billing_cycle_days: Optional[int] = Field(None, gt=0, description="Cycle length in days (default from config)")


class OverdueResponse(BaseModel):
    """Overdue state computed from completed cycles"""

    completed_cycles: int
    completed_cycles_amount_cents: int
    balance_due_cents: int
    days_overdue: int
    should_trigger_overdue: bool
    duration: int
    days_passed: int
    billing_cycle_days: int
    total_paid_cents: int
    details: str

    @classmethod
    def from_result(cls, result: OverdueResult) -> "OverdueResponse":
        return cls(
            completed_cycles=result.completed_cycles,
            completed_cycles_amount_cents=result.completed_cycles_amount_cents,
            balance_due_cents=result.balance_due_cents,
            days_overdue=result.days_overdue,
            should_trigger_overdue=result.should_trigger_overdue,
            duration=result.duration,
            days_passed=result.days_passed,
            billing_cycle_days=result.billing_cycle_days,
            total_paid_cents=result.total_paid_cents,
            details=format_overdue_details(result),
        )


class CycleBoundarySchema(BaseModel):
    """One billing cycle window"""

    cycle_start: date
    cycle_end: date

    @classmethod
    def from_boundary(cls, boundary: CycleBoundary) -> "CycleBoundarySchema":
        return cls(cycle_start=boundary.cycle_start, cycle_end=boundary.cycle_end)


class RentalSchema(BaseModel):
    """Rental facts as read from the backend"""

    rental_id: str
    tenant_name: str
    tenant_email: Optional[str] = None
    cube_code: Optional[str] = None
    start_date: date
    end_date: date
    daily_rent_cents: int
    total_paid_cents: int
    status: str

    @classmethod
    def from_record(cls, rental: RentalRecord) -> "RentalSchema":
        return cls(
            rental_id=rental.rental_id,
            tenant_name=rental.tenant_name,
            tenant_email=rental.tenant_email,
            cube_code=rental.cube_code,
            start_date=rental.start_date,
            end_date=rental.end_date,
            daily_rent_cents=rental.daily_rent_cents,
            total_paid_cents=rental.total_paid_cents,
            status=rental.status,
        )


class RentalOverdueResponse(BaseModel):
    """Response for GET /v1/rentals/{rental_id}/overdue"""

    as_of: date
    rental: RentalSchema
    overdue: OverdueResponse


class OverdueListResponse(BaseModel):
    """Response for GET /v1/rentals/overdue"""

    as_of: date
    count: int
    total_balance_due_cents: int
    rentals: List[RentalOverdueResponse]


class ReminderSchema(BaseModel):
    """Single reminder the caller should dispatch"""

    rental_id: str
    reminder_type: str
    amount_due_cents: int
    due_date: date
    billing_period: CycleBoundarySchema
    billing_period_text: str  # e.g. "1st January 2024 to 15th January 2024" for reminder copy

    @classmethod
    def from_reminder(cls, reminder: PaymentReminder) -> "ReminderSchema":
        return cls(
            rental_id=reminder.rental_id,
            reminder_type=reminder.reminder_type.value,
            amount_due_cents=reminder.amount_due_cents,
            due_date=reminder.due_date,
            billing_period=CycleBoundarySchema.from_boundary(reminder.billing_period),
            billing_period_text=(
                f"{format_date_readable(reminder.billing_period.cycle_start)} to "
                f"{format_date_readable(reminder.billing_period.cycle_end)}"
            ),
        )


class ReminderPlanResponse(BaseModel):
    """Response for GET /v1/reminders/due"""

    as_of: date
    processed: int
    reminders: List[ReminderSchema]
    errors: List[str]
