"""Unit tests for the batch overdue sweep"""

from datetime import date
from cube_billing.domain.sweep import evaluate_rental, sweep_overdue_rentals


def test_sweep_keeps_overdue_sorted_by_balance(sample_rentals):
    overdue = sweep_overdue_rentals(sample_rentals, date(2024, 1, 20))

    assert [item.rental.rental_id for item in overdue] == ["rental_large", "rental_small"]
    assert [item.result.balance_due_cents for item in overdue] == [28000, 14000]
    assert all(item.result.should_trigger_overdue for item in overdue)


def test_sweep_ties_ordered_by_rental_id(make_rental):
    rentals = [make_rental("rental_b"), make_rental("rental_a")]

    overdue = sweep_overdue_rentals(rentals, date(2024, 1, 20))

    assert [item.rental.rental_id for item in overdue] == ["rental_a", "rental_b"]


def test_sweep_on_boundary_day_is_empty(sample_rentals):
    """Cycle completes on 2024-01-15 but nobody is overdue until the next day"""
    assert sweep_overdue_rentals(sample_rentals, date(2024, 1, 15)) == []


def test_sweep_empty_input():
    assert sweep_overdue_rentals([], date(2024, 1, 20)) == []


def test_evaluate_rental_pairs_record_and_result(make_rental):
    rental = make_rental(total_paid_cents=14000)

    item = evaluate_rental(rental, date(2024, 1, 20))

    assert item.rental is rental
    assert item.result.completed_cycles == 1
    assert item.result.balance_due_cents == 0
