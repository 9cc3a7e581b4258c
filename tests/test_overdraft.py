from decimal import Decimal

from saldo.services.summary.overdraft import (
    check_overdraft, overdraft_check_to_dict, severity_for, ESITO_OK, ESITO_AVVISO, ESITO_BLOCCO,
)


def test_blocked_beyond_limit():
    check = check_overdraft(Decimal('100'), Decimal('50'), Decimal('200'))
    assert check.status == ESITO_BLOCCO
    assert check.remaining_balance == Decimal('-100.00')
    assert check.exceeded_by == Decimal('50.00')
    assert check.message


def test_ok_when_balance_covers_expense():
    check = check_overdraft('500.00', '1000.00', '200.00')
    assert check.status == ESITO_OK
    assert check.remaining_balance == Decimal('300.00')
    assert check.overdraft_used == Decimal('0.00')
    assert check.message is None


def test_warning_severity_tiers():
    moderate = check_overdraft('100', '1000', '200')
    assert moderate.status == ESITO_AVVISO
    assert moderate.overdraft_used == Decimal('100.00')
    assert moderate.percent_used == Decimal('10.0')
    assert moderate.severity == 'moderate'

    assert check_overdraft('100', '1000', '700').severity == 'high'
    assert check_overdraft('100', '1000', '1000').severity == 'critical'


def test_exactly_at_limit_is_a_warning():
    check = check_overdraft('0', '500', '500')
    assert check.status == ESITO_AVVISO
    assert check.severity == 'critical'
    assert check.overdraft_remaining == Decimal('0.00')


def test_zero_limit_blocks_any_negative_balance():
    assert check_overdraft('10', '0', '10.01').status == ESITO_BLOCCO


def test_edit_counts_only_the_difference():
    check = check_overdraft('100', '0', '150', previous_amount='100')
    assert check.status == ESITO_OK
    assert check.remaining_balance == Decimal('50.00')


def test_severity_boundaries():
    assert severity_for(Decimal('50')) == 'moderate'
    assert severity_for(Decimal('50.1')) == 'high'
    assert severity_for(Decimal('80')) == 'high'
    assert severity_for(Decimal('80.1')) == 'critical'


def test_to_dict():
    data = overdraft_check_to_dict(check_overdraft('100', '1000', '700'))
    assert data['status'] == 'warning'
    assert data['remainingBalance'] == '-600.00'
    assert data['overdraftUsed'] == '600.00'
    assert data['overdraftRemaining'] == '400.00'
    assert data['percentUsed'] == '60.0'
    assert data['exceededBy'] is None


def test_severity_uses_unrounded_percentage():
    just_over_80 = check_overdraft('0', '10000', '8004')
    assert just_over_80.percent_used == Decimal('80.0')
    assert just_over_80.severity == 'critical'

    just_over_50 = check_overdraft('0', '10000', '5004')
    assert just_over_50.percent_used == Decimal('50.0')
    assert just_over_50.severity == 'high'
