"""
Servizio per la gestione delle categorie
"""
import logging

from saldo.defaults import CATEGORIE_DEFAULT, ICONA_DEFAULT
from saldo.models import Category
from saldo.services import BaseService

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    """Servizio per la gestione delle categorie"""

    def get_categories(self, type_=None):
        """Recupera le categorie, filtrate per tipo (income/expense) se indicato"""
        query = Category.query
        if type_:
            query = query.filter_by(type=type_)
        return query.order_by(Category.type.asc(), Category.name.asc()).all()

    def create_category(self, name, type_, icon=None):
        """Crea una nuova categoria"""
        existing = Category.query.filter_by(name=name, type=type_).first()
        if existing:
            return False, f"Categoria '{name}' ({type_}) già esistente", existing

        category = Category(name=name, type=type_, icon=icon or ICONA_DEFAULT)
        success, message = self.save(category)
        if not success:
            return False, message, None
        return True, f"Categoria '{name}' creata con successo", category

    def ensure_defaults(self):
        """Inserisce le categorie predefinite mancanti; restituisce quante ne ha create"""
        created = 0
        for name, type_, icon in CATEGORIE_DEFAULT:
            success, _, _ = self.create_category(name, type_, icon)
            if success:
                created += 1
        if created:
            logger.info('Create %s categorie predefinite', created)
        return created
