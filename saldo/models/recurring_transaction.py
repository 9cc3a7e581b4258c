"""
Modello per le transazioni ricorrenti (entrate/uscite)

Contiene le informazioni necessarie per pianificare addebiti / accrediti ricorrenti:
- descrizione, tipo ('income' o 'expense') e importo
- frequency: 'monthly', 'bimonthly', 'quarterly', 'semiannual', 'annual'
- start_date: data della prima occorrenza (creata insieme alla ricorrenza)
- end_date: data opzionale oltre la quale non ci sono più occorrenze
- last_processed: ultima occorrenza scritta dallo script di materializzazione
"""
from datetime import datetime

from saldo import db
from saldo.utils.formatting import format_decimal, format_date


class RecurringTransaction(db.Model):
    __tablename__ = 'recurring_transactions'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    description = db.Column(db.String(200), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    type = db.Column(db.String(20), nullable=False)  # 'income' o 'expense'
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    frequency = db.Column(db.String(20), nullable=False, default='monthly')
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=True)
    last_processed = db.Column(db.Date, nullable=True)
    attachment = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    category = db.relationship('Category', backref=db.backref('recurring_transactions', lazy=True))
    occurrences = db.relationship('Transaction', backref='recurring', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'description': self.description,
            'amount': format_decimal(self.amount),
            'type': self.type,
            'categoryId': self.category_id,
            'category': self.category.to_dict() if self.category else None,
            'frequency': self.frequency,
            'startDate': format_date(self.start_date),
            'endDate': format_date(self.end_date),
            'lastProcessed': format_date(self.last_processed),
            'attachment': self.attachment,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<RecurringTransaction {self.description} {self.amount} {self.frequency}>"
