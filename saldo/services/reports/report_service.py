"""
Report sulle transazioni di un utente: totali per categoria, prossime
scadenze ed esportazione in Excel.
"""
import io
import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

import openpyxl
from openpyxl.styles import Font
from sqlalchemy import func

from saldo import db
from saldo.models import Transaction, Category
from saldo.services import BaseService
from saldo.utils.formatting import to_decimal, format_decimal

logger = logging.getLogger(__name__)

INTESTAZIONI_EXPORT = ['Data', 'Descrizione', 'Tipo', 'Categoria', 'Importo', 'Stato', 'Ricorrente', 'Allegato']


class ReportService(BaseService):
    """Servizio per i report: riepilogo per categoria, scadenze, export"""

    def category_summary(self, user_id, type_):
        """
        Totale per categoria delle transazioni di un tipo, dal più alto

        Le transazioni senza categoria non vengono conteggiate.

        Returns:
            Lista di dict con categoryId, name, icon, total e percentage
        """
        rows = db.session.query(
            Category.id, Category.name, Category.icon, func.sum(Transaction.amount)
        ).join(
            Transaction, Transaction.category_id == Category.id
        ).filter(
            Transaction.user_id == user_id,
            Transaction.type == type_,
        ).group_by(Category.id, Category.name, Category.icon).all()

        totals = [(cid, name, icon, to_decimal(total)) for cid, name, icon, total in rows]
        grand_total = sum((t[3] for t in totals), Decimal('0.00'))

        result = []
        for cid, name, icon, total in sorted(totals, key=lambda t: t[3], reverse=True):
            percentage = Decimal('0.0')
            if grand_total > 0:
                percentage = (total / grand_total * 100).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
            result.append({
                'categoryId': cid,
                'name': name,
                'icon': icon,
                'total': format_decimal(total),
                'percentage': format_decimal(percentage, 1),
            })
        return result

    def upcoming_bills(self, user_id, today=None, days=30):
        """Uscite con data compresa tra oggi e oggi + `days`, in ordine di data"""
        if today is None:
            today = date.today()
        return Transaction.query.filter(
            Transaction.user_id == user_id,
            Transaction.type == 'expense',
            Transaction.date >= today,
            Transaction.date <= today + timedelta(days=days),
        ).order_by(Transaction.date.asc(), Transaction.id.asc()).all()

    def export_xlsx(self, user_id):
        """Tutte le transazioni dell'utente in un file xlsx (bytes)"""
        transactions = Transaction.query.filter_by(user_id=user_id).order_by(
            Transaction.date.asc(), Transaction.id.asc()
        ).all()

        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = 'Transazioni'
        for i, h in enumerate(INTESTAZIONI_EXPORT, 1):
            ws.cell(row=1, column=i, value=h).font = Font(bold=True)
        for r_idx, t in enumerate(transactions, 2):
            row = [
                t.date,
                t.description,
                'Entrata' if t.type == 'income' else 'Uscita',
                t.category.name if t.category else '',
                to_decimal(t.amount),
                t.status if t.type == 'expense' else '',
                'Sì' if t.is_recurring else 'No',
                t.attachment or '',
            ]
            for c_idx, val in enumerate(row, 1):
                cell = ws.cell(row=r_idx, column=c_idx, value=val)
                if c_idx == 1:
                    cell.number_format = 'YYYY-MM-DD'
                elif c_idx == 5:
                    cell.number_format = '#,##0.00'

        buffer = io.BytesIO()
        wb.save(buffer)
        logger.info('Esportate %s transazioni per utente %s', len(transactions), user_id)
        return buffer.getvalue()
