"""Servizio per il riepilogo finanziario di un utente (saldo attuale e previsto)"""
from collections import namedtuple
from datetime import date
from decimal import Decimal

from saldo.models import User, Transaction, RecurringTransaction
from saldo.services import BaseService, get_month_boundaries
from saldo.utils.formatting import to_decimal, format_decimal

Summary = namedtuple('Summary', [
    'total_income', 'total_expenses', 'current_balance', 'projected_balance', 'available_balance',
])


def calculate_summary(initial_balance, overdraft_limit, transactions, recurring=(), today=None):
    """Calcola entrate, uscite, saldo attuale e saldo previsto a fine mese.

    Il saldo previsto parte dal saldo attuale e aggiunge (entrate) o sottrae
    (uscite) le ricorrenze mensili il cui giorno di inizio cade tra domani e
    l'ultimo giorno del mese corrente. Le altre cadenze non vengono considerate.
    """
    if today is None:
        today = date.today()

    total_income = Decimal('0.00')
    total_expenses = Decimal('0.00')
    for t in transactions:
        if t.type == 'income':
            total_income += to_decimal(t.amount)
        else:
            total_expenses += to_decimal(t.amount)

    current_balance = to_decimal(initial_balance) + total_income - total_expenses

    projected_balance = current_balance
    _, fine_mese = get_month_boundaries(today)
    for r in recurring:
        if r.frequency != 'monthly':
            continue
        if today.day < r.start_date.day <= fine_mese.day:
            if r.type == 'income':
                projected_balance += to_decimal(r.amount)
            else:
                projected_balance -= to_decimal(r.amount)

    return Summary(
        total_income=total_income,
        total_expenses=total_expenses,
        current_balance=current_balance,
        projected_balance=projected_balance,
        available_balance=current_balance + to_decimal(overdraft_limit),
    )


def summary_to_dict(summary):
    return {
        'totalIncome': format_decimal(summary.total_income),
        'totalExpenses': format_decimal(summary.total_expenses),
        'currentBalance': format_decimal(summary.current_balance),
        'projectedBalance': format_decimal(summary.projected_balance),
        'availableBalance': format_decimal(summary.available_balance),
    }


class SummaryService(BaseService):
    """Rilegge ad ogni richiesta tutte le transazioni dell'utente e ricalcola"""

    def get_summary(self, user_id, today=None):
        """Restituisce il Summary dell'utente, None se l'utente non esiste"""
        user = self.db.session.get(User, user_id)
        if not user:
            return None
        transactions = Transaction.query.filter_by(user_id=user_id).all()
        recurring = RecurringTransaction.query.filter_by(user_id=user_id).all()
        return calculate_summary(user.initial_balance, user.overdraft_limit, transactions, recurring, today)
