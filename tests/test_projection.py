from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from saldo.services.transactions.projection import (
    period_months, occurrence, next_occurrence, monthly_impact, recurring_totals,
)


def test_period_months():
    assert period_months('monthly') == 1
    assert period_months('bimonthly') == 2
    assert period_months('quarterly') == 3
    assert period_months('semiannual') == 6
    assert period_months('annual') == 12


def test_period_months_unknown_frequency():
    with pytest.raises(ValueError):
        period_months('weekly')


def test_next_occurrence_advances_whole_months():
    start = date(2024, 1, 15)
    assert next_occurrence('monthly', start, date(2024, 6, 10)) == date(2024, 6, 15)


def test_next_occurrence_is_strictly_after_today():
    start = date(2024, 1, 15)
    assert next_occurrence('monthly', start, date(2024, 6, 15)) == date(2024, 7, 15)


def test_next_occurrence_future_start_is_returned_as_is():
    start = date(2025, 3, 1)
    assert next_occurrence('annual', start, date(2024, 6, 10)) == start


def test_next_occurrence_start_today_moves_one_period():
    start = date(2024, 6, 10)
    assert next_occurrence('quarterly', start, date(2024, 6, 10)) == date(2024, 9, 10)


def test_next_occurrence_quarterly_and_annual():
    start = date(2023, 2, 20)
    assert next_occurrence('quarterly', start, date(2024, 6, 10)) == date(2024, 8, 20)
    assert next_occurrence('annual', start, date(2024, 6, 10)) == date(2025, 2, 20)


def test_end_of_month_start_clamps_without_drift():
    start = date(2024, 1, 31)
    assert occurrence(start, 'monthly', 1) == date(2024, 2, 29)
    assert occurrence(start, 'monthly', 2) == date(2024, 3, 31)
    assert next_occurrence('monthly', start, date(2024, 2, 10)) == date(2024, 2, 29)
    assert next_occurrence('monthly', start, date(2024, 3, 1)) == date(2024, 3, 31)


def test_monthly_impact():
    assert monthly_impact(Decimal('300'), 'quarterly') == Decimal('100.00')
    assert monthly_impact('1200', 'annual') == Decimal('100.00')
    assert monthly_impact('100', 'semiannual') == Decimal('16.67')
    assert monthly_impact('45.50', 'monthly') == Decimal('45.50')


def test_recurring_totals():
    definitions = [
        SimpleNamespace(amount=Decimal('2000'), type='income', frequency='monthly'),
        SimpleNamespace(amount=Decimal('300'), type='expense', frequency='quarterly'),
        SimpleNamespace(amount=Decimal('1200'), type='expense', frequency='annual'),
    ]
    totals = recurring_totals(definitions)
    assert totals['monthly_income'] == Decimal('2000.00')
    assert totals['monthly_expense'] == Decimal('200.00')
    assert totals['monthly_balance'] == Decimal('1800.00')


def test_recurring_totals_empty():
    totals = recurring_totals([])
    assert totals['monthly_balance'] == Decimal('0.00')


def test_recurring_totals_round_once():
    definitions = [SimpleNamespace(amount=Decimal('100'), type='expense', frequency='quarterly')] * 3
    assert recurring_totals(definitions)['monthly_expense'] == Decimal('100.00')
