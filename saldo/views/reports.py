"""Blueprint per riepilogo, report per categoria, scadenze, export e verifica scoperto."""
from io import BytesIO

from flask import Blueprint, current_app, jsonify, send_file

from saldo.models.transaction import TIPI
from saldo.services.reports.report_service import ReportService
from saldo.services.summary.overdraft import check_overdraft, overdraft_check_to_dict
from saldo.services.summary.summary_service import SummaryService, summary_to_dict
from saldo.services.users.user_service import UserService
from saldo.utils import FieldValidator, ValidationError, ValidationUtils
from saldo.views import request_data, validation_error, not_found, server_error

reports_bp = Blueprint('reports', __name__)
report_service = ReportService()
summary_service = SummaryService()
user_service = UserService()


@reports_bp.route('/summary/<int:user_id>', methods=['GET'])
def riepilogo(user_id):
    """Entrate, uscite, saldo attuale e saldo previsto a fine mese"""
    try:
        summary = summary_service.get_summary(user_id)
        if summary is None:
            return not_found("Utente non trovato")
        return jsonify(summary_to_dict(summary))
    except Exception as e:
        return server_error("Errore nel calcolo del riepilogo", e)


@reports_bp.route('/category-summary/<int:user_id>/<type_>', methods=['GET'])
def riepilogo_categorie(user_id, type_):
    if type_ not in TIPI:
        return jsonify({'message': "Tipo non valido", 'errors': {'type': f"Valori ammessi: {', '.join(TIPI)}"}}), 400
    try:
        if not user_service.get_by_id(user_id):
            return not_found("Utente non trovato")
        return jsonify(report_service.category_summary(user_id, type_))
    except Exception as e:
        return server_error("Errore nel riepilogo per categoria", e)


@reports_bp.route('/upcoming/<int:user_id>', methods=['GET'])
def scadenze(user_id):
    """Uscite dei prossimi giorni (UPCOMING_DAYS)"""
    try:
        if not user_service.get_by_id(user_id):
            return not_found("Utente non trovato")
        days = current_app.config.get('UPCOMING_DAYS', 30)
        return jsonify([t.to_dict() for t in report_service.upcoming_bills(user_id, days=days)])
    except Exception as e:
        return server_error("Errore nel recupero delle prossime scadenze", e)


@reports_bp.route('/reports/<int:user_id>/export.xlsx', methods=['GET'])
def export_xlsx(user_id):
    try:
        user = user_service.get_by_id(user_id)
        if not user:
            return not_found("Utente non trovato")
        content = report_service.export_xlsx(user_id)
        return send_file(
            BytesIO(content),
            mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            as_attachment=True,
            download_name=f'transazioni_{user.username}.xlsx',
        )
    except Exception as e:
        return server_error("Errore durante l'esportazione", e)


@reports_bp.route('/overdraft-check/<int:user_id>', methods=['POST'])
def verifica_scoperto(user_id):
    """
    Esito della verifica scoperto per una uscita (amount, previousAmount)

    Solo consultivo: nessuna transazione viene creata o rifiutata.
    """
    data = request_data()
    try:
        v = FieldValidator(data)
        amount = v.field('amount', ValidationUtils.validate_amount)
        previous = v.field('previousAmount', ValidationUtils.validate_amount, required=False, default=0)
        v.raise_if_errors("Importo non valido")

        user = user_service.get_by_id(user_id)
        if not user:
            return not_found("Utente non trovato")
        summary = summary_service.get_summary(user_id)
        check = check_overdraft(summary.current_balance, user.overdraft_limit, amount, previous)
        return jsonify(overdraft_check_to_dict(check))
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error("Errore nella verifica dello scoperto", e)
