"""
Service per la gestione delle transazioni ricorrenti.
Fornisce operazioni CRUD complete per RecurringTransaction.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple

from saldo import db
from saldo.models import RecurringTransaction, Transaction, Category
from saldo.models.transaction import TIPI
from saldo.services import BaseService
from saldo.services.transactions.projection import FREQUENZE, next_occurrence, monthly_impact
from saldo.services.transactions.transaction_service import default_status
from saldo.utils import FieldValidator, ValidationUtils, ValidationError, SecurityUtils
from saldo.utils.formatting import format_decimal, format_date

logger = logging.getLogger(__name__)


class RecurringTransactionService(BaseService):
    """Service per gestire le transazioni ricorrenti"""

    def get_all(self, user_id: int) -> List[RecurringTransaction]:
        """
        Recupera tutte le transazioni ricorrenti dell'utente

        Returns:
            Lista di RecurringTransaction ordinata per data di inizio
        """
        return RecurringTransaction.query.filter_by(user_id=user_id).order_by(
            RecurringTransaction.start_date.asc(),
            RecurringTransaction.id.asc()
        ).all()

    def get_by_id(self, recurring_id: int) -> Optional[RecurringTransaction]:
        return db.session.get(RecurringTransaction, recurring_id)

    def _validate(self, data, partial=False):
        """Valida i campi presenti; con `partial` solo quelli forniti"""
        v = FieldValidator(data)
        fields = {}

        def wanted(name):
            return not partial or name in data

        if wanted('description'):
            fields['description'] = v.field('description', ValidationUtils.validate_required_field, 'descrizione')
        if wanted('amount'):
            fields['amount'] = v.field('amount', ValidationUtils.validate_amount)
        if wanted('type'):
            fields['type'] = v.field('type', ValidationUtils.validate_choice, TIPI, 'tipo')
        if wanted('frequency'):
            fields['frequency'] = v.field('frequency', ValidationUtils.validate_choice, FREQUENZE, 'frequenza')
        if wanted('startDate'):
            fields['start_date'] = v.field('startDate', ValidationUtils.validate_date)
        if 'categoryId' in data:
            category_id = v.field('categoryId', ValidationUtils.validate_id, 'categoria', required=False)
            if category_id and not db.session.get(Category, category_id):
                v.errors['categoryId'] = f"Categoria con ID {category_id} non trovata"
            fields['category_id'] = category_id
        if 'endDate' in data:
            raw = data.get('endDate')
            fields['end_date'] = v.field('endDate', ValidationUtils.validate_date) if raw else None
        v.raise_if_errors("Dati della transazione ricorrente non validi")
        return fields

    def create(self, user_id: int, data: dict, attachment: str = None
               ) -> Tuple[bool, str, Optional[RecurringTransaction]]:
        """
        Crea una nuova transazione ricorrente insieme alla sua prima occorrenza

        La prima occorrenza (datata start_date) viene scritta in `transactions`
        con recurring_id e is_recurring=True. Le successive non vengono create
        qui: vedi GeneratedTransactionService.

        Returns:
            Tuple (success: bool, message: str, ricorrente: RecurringTransaction)

        Raises:
            ValidationError: dati mancanti o non validi
        """
        fields = self._validate(data)
        if fields.get('end_date') and fields['end_date'] < fields['start_date']:
            raise ValidationError("Dati della transazione ricorrente non validi",
                                  {'endDate': "La data di fine precede la data di inizio"})

        description = SecurityUtils.sanitize_string(fields['description'], 200)
        try:
            recurring = RecurringTransaction(
                user_id=user_id,
                description=description,
                amount=fields['amount'],
                type=fields['type'],
                category_id=fields.get('category_id'),
                frequency=fields['frequency'],
                start_date=fields['start_date'],
                end_date=fields.get('end_date'),
                attachment=attachment,
            )
            db.session.add(recurring)
            db.session.flush()

            first = Transaction(
                user_id=user_id,
                description=description,
                amount=recurring.amount,
                date=recurring.start_date,
                type=recurring.type,
                category_id=recurring.category_id,
                attachment=attachment,
                status=default_status(recurring.type),
                is_recurring=True,
                recurring_id=recurring.id,
            )
            db.session.add(first)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.exception('Creazione transazione ricorrente fallita')
            return False, f"Errore durante la creazione: {str(e)}", None

        return True, "Transazione ricorrente creata con successo", recurring

    def update(self, recurring: RecurringTransaction, data: dict, attachment: str = None) -> Tuple[bool, str]:
        """
        Aggiorna una transazione ricorrente esistente (solo i campi forniti)

        Le occorrenze già registrate non vengono modificate.

        Raises:
            ValidationError: valori non validi o nessun campo da aggiornare
        """
        fields = self._validate(data, partial=True)
        if attachment:
            fields['attachment'] = attachment
        if not fields:
            raise ValidationError("Nessun campo valido per l'aggiornamento")
        if 'description' in fields:
            fields['description'] = SecurityUtils.sanitize_string(fields['description'], 200)

        start = fields.get('start_date', recurring.start_date)
        end = fields.get('end_date', recurring.end_date)
        if end and end < start:
            raise ValidationError("Dati della transazione ricorrente non validi",
                                  {'endDate': "La data di fine precede la data di inizio"})

        success, message = super().update(recurring, **fields)
        if not success:
            return False, f"Errore durante l'aggiornamento: {message}"
        return True, "Transazione ricorrente aggiornata con successo"

    def delete(self, recurring: RecurringTransaction) -> Tuple[bool, str]:
        """
        Elimina una transazione ricorrente

        Le transazioni già generate restano, con recurring_id azzerato.
        """
        descrizione = recurring.description
        try:
            Transaction.query.filter_by(recurring_id=recurring.id).update(
                {Transaction.recurring_id: None}, synchronize_session=False
            )
            db.session.delete(recurring)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.exception('Eliminazione ricorrenza %s fallita', recurring.id)
            return False, f"Errore durante l'eliminazione: {str(e)}"
        return True, f"Transazione ricorrente '{descrizione}' eliminata con successo"

    def clear(self, user_id: int) -> Tuple[bool, str, int]:
        """Elimina tutte le ricorrenze dell'utente, scollegando le transazioni"""
        try:
            ids = [r.id for r in RecurringTransaction.query.filter_by(user_id=user_id).all()]
            if not ids:
                return True, "Nessuna transazione ricorrente trovata", 0
            Transaction.query.filter(Transaction.recurring_id.in_(ids)).update(
                {Transaction.recurring_id: None}, synchronize_session=False
            )
            deleted = RecurringTransaction.query.filter(RecurringTransaction.id.in_(ids)).delete(
                synchronize_session=False
            )
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.exception('Pulizia ricorrenze utente %s fallita', user_id)
            return False, str(e), 0
        logger.info('Eliminate %s transazioni ricorrenti per utente %s', deleted, user_id)
        return True, f"{deleted} transazioni ricorrenti eliminate con successo", deleted

    def to_dict_with_projection(self, recurring: RecurringTransaction, today: date = None) -> dict:
        """Dati della ricorrenza con prossima occorrenza e impatto mensile"""
        item = recurring.to_dict()
        item['nextOccurrence'] = format_date(next_occurrence(recurring.frequency, recurring.start_date, today))
        item['monthlyImpact'] = format_decimal(monthly_impact(recurring.amount, recurring.frequency))
        return item
