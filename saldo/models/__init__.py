"""
Modelli del database

Import esplicito dei modelli per assicurare che siano registrati nei
metadata quando l'app crea le tabelle.
"""
from saldo.models.user import User
from saldo.models.category import Category
from saldo.models.recurring_transaction import RecurringTransaction
from saldo.models.transaction import Transaction

__all__ = ['User', 'Category', 'RecurringTransaction', 'Transaction']
