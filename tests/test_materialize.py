from datetime import date

from saldo import db
from saldo.models import Transaction
from saldo.services.transactions.generated_transaction_service import GeneratedTransactionService
from saldo.services.transactions.recurring_service import RecurringTransactionService


def crea_ricorrenza(user, **overrides):
    data = {
        'description': 'Mutuo',
        'amount': '600.00',
        'type': 'expense',
        'frequency': 'monthly',
        'startDate': '2024-01-31',
    }
    data.update(overrides)
    success, message, rec = RecurringTransactionService().create(user.id, data)
    assert success, message
    return rec


def date_generate(rec):
    return [t.date for t in Transaction.query.filter_by(recurring_id=rec.id).order_by(Transaction.date).all()]


def test_materialize_due_occurrences(user):
    rec = crea_ricorrenza(user)
    success, _, created = GeneratedTransactionService().materialize_due(until=date(2024, 4, 30))
    assert success
    assert created == 3
    assert date_generate(rec) == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]
    assert rec.last_processed == date(2024, 4, 30)

    generated = Transaction.query.filter_by(recurring_id=rec.id, date=date(2024, 3, 31)).one()
    assert generated.is_recurring is True
    assert generated.status == 'to_pay'


def test_materialize_is_idempotent(user):
    rec = crea_ricorrenza(user)
    service = GeneratedTransactionService()
    service.materialize_due(until=date(2024, 3, 31))
    _, _, created = service.materialize_due(until=date(2024, 3, 31))
    assert created == 0
    assert len(date_generate(rec)) == 3


def test_materialize_skips_dates_already_present(user):
    rec = crea_ricorrenza(user, startDate='2024-01-10')
    db.session.add(Transaction(user_id=user.id, description='Mutuo', amount=600, type='expense',
                               date=date(2024, 2, 10), status='paid', is_recurring=True, recurring_id=rec.id))
    db.session.commit()

    _, _, created = GeneratedTransactionService().materialize_due(until=date(2024, 3, 15))
    assert created == 1
    assert date_generate(rec) == [date(2024, 1, 10), date(2024, 2, 10), date(2024, 3, 10)]


def test_materialize_respects_end_date_and_frequency(user):
    rec = crea_ricorrenza(user, frequency='quarterly', startDate='2024-01-15', endDate='2024-08-01')
    _, _, created = GeneratedTransactionService().materialize_due(until=date(2025, 1, 1))
    assert created == 2
    assert date_generate(rec) == [date(2024, 1, 15), date(2024, 4, 15), date(2024, 7, 15)]


def test_materialize_filters_by_user(user):
    rec = crea_ricorrenza(user)
    _, _, created = GeneratedTransactionService().materialize_due(user_id=user.id + 1, until=date(2024, 4, 30))
    assert created == 0
    assert date_generate(rec) == [date(2024, 1, 31)]


def test_nothing_due_before_second_occurrence(user):
    rec = crea_ricorrenza(user, startDate='2024-05-20')
    _, _, created = GeneratedTransactionService().materialize_due(until=date(2024, 6, 1))
    assert created == 0
    assert rec.last_processed is None
