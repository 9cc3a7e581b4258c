from datetime import date
import logging

from saldo import db
from saldo.models import RecurringTransaction, Transaction
from saldo.services import BaseService
from saldo.services.transactions.projection import occurrence
from saldo.services.transactions.transaction_service import default_status

logger = logging.getLogger(__name__)


class GeneratedTransactionService(BaseService):
    """Servizio che scrive nella tabella `transactions` le occorrenze dovute delle ricorrenze.

    Non viene mai invocato da una richiesta HTTP: lo lancia un operatore con
    `scripts/materialize_recurring.py`.
    """

    def due_dates(self, recurring, until):
        """Date delle occorrenze successive all'ultima elaborata, fino a `until` compreso"""
        limit = min(until, recurring.end_date) if recurring.end_date else until
        # la prima occorrenza (start_date) nasce insieme alla ricorrenza
        after = recurring.last_processed or recurring.start_date
        dates = []
        index = 1
        candidate = occurrence(recurring.start_date, recurring.frequency, index)
        while candidate <= limit:
            if candidate > after:
                dates.append(candidate)
            index += 1
            candidate = occurrence(recurring.start_date, recurring.frequency, index)
        return dates

    def materialize_due(self, user_id=None, until=None):
        """
        Genera le transazioni dovute per le ricorrenze (di un utente o di tutti)

        Le date che hanno già una transazione con lo stesso recurring_id vengono
        saltate; last_processed avanza all'ultima data considerata.

        Returns:
            Tuple (success: bool, message: str, created: int)
        """
        if until is None:
            until = date.today()

        query = RecurringTransaction.query
        if user_id is not None:
            query = query.filter_by(user_id=user_id)

        created = 0
        try:
            for r in query.order_by(RecurringTransaction.id.asc()).all():
                dates = self.due_dates(r, until)
                if not dates:
                    continue
                existing = {
                    row.date for row in Transaction.query.filter(
                        Transaction.recurring_id == r.id,
                        Transaction.date.in_(dates),
                    ).all()
                }
                for d in dates:
                    if d in existing:
                        continue
                    db.session.add(Transaction(
                        user_id=r.user_id,
                        description=r.description,
                        amount=r.amount,
                        date=d,
                        type=r.type,
                        category_id=r.category_id,
                        attachment=r.attachment,
                        status=default_status(r.type),
                        is_recurring=True,
                        recurring_id=r.id,
                    ))
                    created += 1
                r.last_processed = dates[-1]
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.exception('Generazione transazioni ricorrenti fallita')
            return False, f"Errore durante la generazione: {str(e)}", 0

        logger.info('Generate %s transazioni da ricorrenze (fino al %s)', created, until.isoformat())
        return True, f"{created} transazioni generate", created
