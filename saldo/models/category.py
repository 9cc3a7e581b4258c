"""Categorie di transazioni, condivise da tutti gli utenti"""
from saldo import db
from saldo.defaults import ICONA_DEFAULT


class Category(db.Model):
    """Modello per le categorie di transazioni"""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(20), nullable=False)  # 'income' o 'expense'
    icon = db.Column(db.String(100), nullable=False, default=ICONA_DEFAULT)

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'type': self.type, 'icon': self.icon}

    def __repr__(self):
        return f'<Category {self.name} ({self.type})>'
