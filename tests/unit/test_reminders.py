"""Unit tests for payment reminder planning"""

import logging
import pytest
from datetime import date, datetime, timezone
from cube_billing.domain.exceptions import ConfigurationError
from cube_billing.domain.models import CycleBoundary, ReminderType
from cube_billing.domain.reminders import current_cycle_balance, days_until_due, plan_reminders


def test_days_until_due_counts_down_within_cycle(make_rental):
    rental = make_rental()

    assert days_until_due(rental, date(2024, 1, 1)) == 14
    assert days_until_due(rental, date(2024, 1, 8)) == 7
    assert days_until_due(rental, date(2024, 1, 14)) == 1
    assert days_until_due(rental, date(2024, 1, 15)) == 14  # next cycle begins


def test_days_until_due_before_start(make_rental):
    rental = make_rental()
    assert days_until_due(rental, date(2023, 12, 25)) == 21


def test_current_cycle_balance_includes_cycle_in_progress(make_rental):
    rental = make_rental(total_paid_cents=5000)

    assert current_cycle_balance(rental, date(2024, 1, 8)) == 9000
    assert current_cycle_balance(rental, date(2024, 1, 22)) == 23000


def test_current_cycle_balance_caps_final_partial_cycle(make_rental):
    """Rental ends on day 20, so the second cycle only charges 6 days"""
    rental = make_rental(end_date=date(2024, 1, 21), total_paid_cents=14000)

    assert current_cycle_balance(rental, date(2024, 1, 22)) == 6000


def test_current_cycle_balance_negative_when_paid_ahead(make_rental):
    rental = make_rental(total_paid_cents=30000)
    assert current_cycle_balance(rental, date(2024, 1, 8)) == -16000


def test_seven_day_reminder(make_rental):
    reminders = plan_reminders(make_rental(), date(2024, 1, 8))

    assert len(reminders) == 1
    reminder = reminders[0]
    assert reminder.reminder_type == ReminderType.SEVEN_DAY_ADVANCE
    assert reminder.amount_due_cents == 14000
    assert reminder.due_date == date(2024, 1, 15)
    assert reminder.billing_period == CycleBoundary(date(2024, 1, 1), date(2024, 1, 15))


def test_one_day_reminder(make_rental):
    reminders = plan_reminders(make_rental(), date(2024, 1, 14))

    assert [r.reminder_type for r in reminders] == [ReminderType.ONE_DAY_DUE]
    assert reminders[0].amount_due_cents == 14000


def test_overdue_reminder_uses_last_completed_cycle(make_rental):
    reminders = plan_reminders(make_rental(), date(2024, 1, 20))

    assert len(reminders) == 1
    reminder = reminders[0]
    assert reminder.reminder_type == ReminderType.OVERDUE
    assert reminder.amount_due_cents == 14000
    assert reminder.due_date == date(2024, 1, 15)
    assert reminder.billing_period == CycleBoundary(date(2024, 1, 1), date(2024, 1, 15))


def test_advance_and_overdue_on_same_day(make_rental):
    reminders = plan_reminders(make_rental(), date(2024, 1, 22))

    by_type = {r.reminder_type: r for r in reminders}
    assert set(by_type) == {ReminderType.SEVEN_DAY_ADVANCE, ReminderType.OVERDUE}
    assert by_type[ReminderType.SEVEN_DAY_ADVANCE].amount_due_cents == 28000
    assert by_type[ReminderType.SEVEN_DAY_ADVANCE].due_date == date(2024, 1, 29)
    assert by_type[ReminderType.OVERDUE].amount_due_cents == 14000


def test_partial_final_cycle_advance_amount(make_rental):
    rental = make_rental(end_date=date(2024, 1, 21), total_paid_cents=14000)

    reminders = plan_reminders(rental, date(2024, 1, 22))

    assert len(reminders) == 1
    assert reminders[0].reminder_type == ReminderType.SEVEN_DAY_ADVANCE
    assert reminders[0].amount_due_cents == 6000


def test_paid_ahead_skips_advance_reminder(make_rental, caplog):
    rental = make_rental(total_paid_cents=28000)

    with caplog.at_level(logging.WARNING):
        reminders = plan_reminders(rental, date(2024, 1, 22))

    assert reminders == []
    assert "SEVEN_DAY_ADVANCE" in caplog.text


def test_datetime_today_with_date_rental(make_rental):
    reminders = plan_reminders(make_rental(), datetime(2024, 1, 8, 10, 0, tzinfo=timezone.utc))

    assert [r.reminder_type for r in reminders] == [ReminderType.SEVEN_DAY_ADVANCE]
    assert reminders[0].amount_due_cents == 14000
    assert reminders[0].due_date == date(2024, 1, 15)


def test_no_reminder_on_quiet_day(make_rental):
    assert plan_reminders(make_rental(), date(2024, 1, 3)) == []


def test_plan_rejects_bad_cycle(make_rental):
    with pytest.raises(ConfigurationError):
        plan_reminders(make_rental(), date(2024, 1, 8), billing_cycle_days=0)
