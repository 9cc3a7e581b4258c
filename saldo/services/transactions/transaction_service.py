"""Servizio per la gestione delle transazioni"""
import logging
from datetime import date

from saldo import db
from saldo.models import Transaction, Category, RecurringTransaction
from saldo.models.transaction import TIPI, STATI, STATO_DA_PAGARE, STATO_PAGATA, STATO_IN_RITARDO
from saldo.services import BaseService
from saldo.utils import FieldValidator, ValidationUtils, ValidationError, SecurityUtils

logger = logging.getLogger(__name__)


def default_status(type_):
    """Le entrate nascono pagate, le uscite da pagare"""
    return STATO_PAGATA if type_ == 'income' else STATO_DA_PAGARE


class TransactionService(BaseService):
    """Servizio per la gestione delle transazioni"""

    def get_by_id(self, transaction_id):
        return self.db.session.get(Transaction, transaction_id)

    def get_transactions(self, user_id, limit=None):
        """Transazioni dell'utente dalla più recente, al massimo `limit` se indicato"""
        query = Transaction.query.filter_by(user_id=user_id).order_by(
            Transaction.date.desc(), Transaction.id.desc()
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def mark_overdue(self, user_id, today=None):
        """Segna come in ritardo le uscite da pagare con data già passata"""
        if today is None:
            today = date.today()
        try:
            updated = Transaction.query.filter(
                Transaction.user_id == user_id,
                Transaction.type == 'expense',
                Transaction.date < today,
                Transaction.status == STATO_DA_PAGARE,
            ).update({Transaction.status: STATO_IN_RITARDO}, synchronize_session=False)
            db.session.commit()
            return updated
        except Exception:
            # l'elenco va restituito comunque, anche se l'aggiornamento fallisce
            db.session.rollback()
            logger.exception('Aggiornamento stato transazioni scadute fallito (utente %s)', user_id)
            return 0

    def _validate_category(self, v, category_id):
        if category_id and not self.db.session.get(Category, category_id):
            v.errors['categoryId'] = f"Categoria con ID {category_id} non trovata"

    def _validate_recurring(self, v, recurring_id, user_id):
        if not recurring_id:
            return
        recurring = self.db.session.get(RecurringTransaction, recurring_id)
        if not recurring or recurring.user_id != user_id:
            v.errors['recurringId'] = f"Transazione ricorrente con ID {recurring_id} non trovata"

    def create_transaction(self, user_id, data, attachment=None):
        """
        Crea una nuova transazione

        Args:
            user_id: ID dell'utente proprietario (già verificato)
            data: campi in camelCase come arrivano dall'API
            attachment: path pubblico dell'allegato già salvato, se presente

        Returns:
            Tuple (success: bool, message: str, transaction: Transaction)

        Raises:
            ValidationError: dati mancanti o non validi
        """
        v = FieldValidator(data)
        description = v.field('description', ValidationUtils.validate_required_field, 'descrizione')
        amount = v.field('amount', ValidationUtils.validate_amount)
        on_date = v.field('date', ValidationUtils.validate_date)
        type_ = v.field('type', ValidationUtils.validate_choice, TIPI, 'tipo')
        category_id = v.field('categoryId', ValidationUtils.validate_id, 'categoria', required=False)
        recurring_id = v.field('recurringId', ValidationUtils.validate_id, 'ricorrenza', required=False)
        is_recurring = v.field('isRecurring', ValidationUtils.validate_bool, required=False, default=False)
        status = v.field('status', ValidationUtils.validate_choice, STATI, 'stato', required=False)
        self._validate_category(v, category_id)
        self._validate_recurring(v, recurring_id, user_id)
        v.raise_if_errors("Dati di transazione non validi")

        transaction = Transaction(
            user_id=user_id,
            description=SecurityUtils.sanitize_string(description, 200),
            amount=amount,
            date=on_date,
            type=type_,
            category_id=category_id,
            attachment=attachment,
            status=status or default_status(type_),
            is_recurring=bool(is_recurring or recurring_id),
            recurring_id=recurring_id,
        )
        success, message = self.save(transaction)
        if not success:
            return False, message, None
        return True, "Transazione creata con successo", transaction

    def update_transaction(self, transaction, data, attachment=None):
        """
        Aggiorna solo i campi presenti in `data`

        Raises:
            ValidationError: nessun campo valido o valori non validi
        """
        v = FieldValidator(data)
        changes = {}
        if 'description' in data:
            changes['description'] = v.field('description', ValidationUtils.validate_required_field, 'descrizione')
        if 'amount' in data:
            changes['amount'] = v.field('amount', ValidationUtils.validate_amount)
        if 'date' in data:
            changes['date'] = v.field('date', ValidationUtils.validate_date)
        if 'type' in data:
            changes['type'] = v.field('type', ValidationUtils.validate_choice, TIPI, 'tipo')
        if 'categoryId' in data:
            changes['category_id'] = v.field('categoryId', ValidationUtils.validate_id, 'categoria', required=False)
            self._validate_category(v, changes['category_id'])
        if 'status' in data:
            changes['status'] = v.field('status', ValidationUtils.validate_choice, STATI, 'stato')
        if attachment:
            changes['attachment'] = attachment
        v.raise_if_errors("Dati di transazione non validi")

        if not changes:
            raise ValidationError("Nessun campo valido per l'aggiornamento")

        # lo stato ha senso solo per le uscite: se cambia il tipo riparte dal default
        if changes.get('type') and changes['type'] != transaction.type and 'status' not in changes:
            changes['status'] = default_status(changes['type'])

        success, message = self.update(transaction, **changes)
        if not success:
            return False, message
        return True, "Transazione aggiornata con successo"
