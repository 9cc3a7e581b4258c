"""
Servizio base per la gestione della business logic
"""
import calendar
import logging
from datetime import date

from saldo import db

__all__ = ['BaseService', 'get_month_boundaries']

logger = logging.getLogger(__name__)


class BaseService:
    """Classe base per i servizi con metodi comuni"""

    def __init__(self):
        self.db = db

    def save(self, obj):
        """Salva un oggetto nel database"""
        try:
            self.db.session.add(obj)
            self.db.session.commit()
            return True, "Operazione completata con successo"
        except Exception as e:
            self.db.session.rollback()
            logger.exception('save failed for %r', obj)
            return False, str(e)

    def delete(self, obj):
        """Elimina un oggetto dal database"""
        try:
            self.db.session.delete(obj)
            self.db.session.commit()
            return True, "Eliminazione completata con successo"
        except Exception as e:
            self.db.session.rollback()
            logger.exception('delete failed for %r', obj)
            return False, str(e)

    def update(self, obj, **kwargs):
        """Aggiorna un oggetto con i parametri forniti"""
        try:
            for key, value in kwargs.items():
                if hasattr(obj, key):
                    setattr(obj, key, value)
            self.db.session.commit()
            return True, "Aggiornamento completato con successo"
        except Exception as e:
            self.db.session.rollback()
            logger.exception('update failed for %r', obj)
            return False, str(e)


def get_month_boundaries(date_obj):
    """Primo e ultimo giorno del mese solare che contiene `date_obj`"""
    last_day = calendar.monthrange(date_obj.year, date_obj.month)[1]
    return date(date_obj.year, date_obj.month, 1), date(date_obj.year, date_obj.month, last_day)
