"""Modello per gli utenti e le impostazioni del conto"""
from datetime import datetime

from saldo import db
from saldo.utils.formatting import format_decimal


class User(db.Model):
    """Utente: saldo iniziale e limite di scoperto del conto"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), nullable=False, unique=True)
    email = db.Column(db.String(255), nullable=True, default='')
    # hash PBKDF2 (vedi saldo.services.users.passwords), mai la password in chiaro
    password = db.Column(db.String(255), nullable=False)
    initial_balance = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    overdraft_limit = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    transactions = db.relationship('Transaction', backref='user', lazy=True, cascade='all, delete-orphan')
    recurring_transactions = db.relationship('RecurringTransaction', backref='user', lazy=True,
                                             cascade='all, delete-orphan')

    def to_dict(self):
        # la password non esce mai dall'API
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email or '',
            'initialBalance': format_decimal(self.initial_balance),
            'overdraftLimit': format_decimal(self.overdraft_limit),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.username}>'
