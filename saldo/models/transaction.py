"""Modello per le transazioni"""
from datetime import datetime

from saldo import db
from saldo.utils.formatting import format_decimal, format_date

TIPI = ('income', 'expense')

# Stato di pagamento, significativo solo per le uscite
STATO_DA_PAGARE = 'to_pay'
STATO_PAGATA = 'paid'
STATO_IN_RITARDO = 'late'
STATI = (STATO_DA_PAGARE, STATO_PAGATA, STATO_IN_RITARDO)


class Transaction(db.Model):
    """Modello per le transazioni finanziarie"""
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    description = db.Column(db.String(200), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    date = db.Column(db.Date, nullable=False)
    type = db.Column(db.String(20), nullable=False)  # 'income' o 'expense'
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    category = db.relationship('Category', backref=db.backref('transactions', lazy=True))
    attachment = db.Column(db.String(255), nullable=True)  # es. /uploads/1700000000-123.pdf
    status = db.Column(db.String(20), nullable=False, default=STATO_DA_PAGARE)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    # la prima occorrenza di una ricorrenza punta alla sua definizione
    is_recurring = db.Column(db.Boolean, nullable=False, default=False)
    recurring_id = db.Column(db.Integer, db.ForeignKey('recurring_transactions.id'), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'description': self.description,
            'amount': format_decimal(self.amount),
            'date': format_date(self.date),
            'type': self.type,
            'categoryId': self.category_id,
            'category': self.category.to_dict() if self.category else None,
            'attachment': self.attachment,
            'status': self.status,
            'isRecurring': bool(self.is_recurring),
            'recurringId': self.recurring_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Transaction {self.description}: {self.amount} ({self.type})>'
