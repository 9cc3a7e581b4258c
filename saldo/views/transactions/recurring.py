"""Blueprint per la gestione delle transazioni ricorrenti."""
from flask import Blueprint, jsonify, request

from saldo.services.transactions.projection import recurring_totals
from saldo.services.transactions.recurring_service import RecurringTransactionService
from saldo.services.users.user_service import UserService
from saldo.utils import ValidationError, ValidationUtils
from saldo.utils.formatting import format_decimal
from saldo.utils.uploads import save_attachment
from saldo.views import request_data, validation_error, not_found, server_error

recurring_bp = Blueprint('recurring', __name__)
service = RecurringTransactionService()
user_service = UserService()


@recurring_bp.route('/<int:user_id>', methods=['GET'])
def lista(user_id):
    """Ricorrenze dell'utente con prossima occorrenza, impatto mensile e totali"""
    try:
        if not user_service.get_by_id(user_id):
            return not_found("Utente non trovato")
        ricorrenti = service.get_all(user_id)
        totals = recurring_totals(ricorrenti)
        return jsonify({
            'items': [service.to_dict_with_projection(r) for r in ricorrenti],
            'totals': {
                'monthlyIncome': format_decimal(totals['monthly_income']),
                'monthlyExpense': format_decimal(totals['monthly_expense']),
                'monthlyBalance': format_decimal(totals['monthly_balance']),
            },
        })
    except Exception as e:
        return server_error("Errore nel caricamento delle transazioni ricorrenti", e)


@recurring_bp.route('/item/<int:recurring_id>', methods=['GET'])
def dettaglio(recurring_id):
    try:
        ricorrente = service.get_by_id(recurring_id)
        if not ricorrente:
            return not_found("Transazione ricorrente non trovata")
        return jsonify(service.to_dict_with_projection(ricorrente))
    except Exception as e:
        return server_error("Errore nel recupero della transazione ricorrente", e)


@recurring_bp.route('', methods=['POST'])
@recurring_bp.route('/', methods=['POST'])
def aggiungi():
    """Crea la ricorrenza e la sua prima occorrenza"""
    data = request_data()
    try:
        user_id = ValidationUtils.validate_id(data.get('userId'), 'utente')
    except ValueError as e:
        return jsonify({'message': "Utente non valido", 'errors': {'userId': str(e)}}), 400
    if not user_id:
        return jsonify({'message': "Utente non valido", 'errors': {'userId': "Il campo utente è obbligatorio"}}), 400

    try:
        if not user_service.get_by_id(user_id):
            return not_found("Utente non trovato")
        attachment = save_attachment(request.files.get('attachment'))
        success, message, ricorrente = service.create(user_id, data, attachment)
        if not success:
            return server_error("Errore nell'aggiunta della transazione ricorrente", message)
        return jsonify(service.to_dict_with_projection(ricorrente)), 201
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error("Errore nell'aggiunta della transazione ricorrente", e)


@recurring_bp.route('/<int:recurring_id>', methods=['PATCH'])
def modifica(recurring_id):
    """Modifica la definizione; le occorrenze già registrate restano invariate"""
    try:
        ricorrente = service.get_by_id(recurring_id)
        if not ricorrente:
            return not_found("Transazione ricorrente non trovata")
        attachment = save_attachment(request.files.get('attachment'))
        success, message = service.update(ricorrente, request_data(), attachment)
        if not success:
            return server_error("Errore nella modifica della transazione ricorrente", message)
        return jsonify(service.to_dict_with_projection(ricorrente))
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error("Errore nella modifica della transazione ricorrente", e)


@recurring_bp.route('/<int:recurring_id>', methods=['DELETE'])
def elimina(recurring_id):
    try:
        ricorrente = service.get_by_id(recurring_id)
        if not ricorrente:
            return not_found("Transazione ricorrente non trovata")
        success, message = service.delete(ricorrente)
        if not success:
            return server_error("Errore nell'eliminazione della transazione ricorrente", message)
        return jsonify({'message': message})
    except Exception as e:
        return server_error("Errore nell'eliminazione della transazione ricorrente", e)


@recurring_bp.route('/clear/<int:user_id>', methods=['DELETE'])
def svuota(user_id):
    """Elimina tutte le ricorrenze dell'utente"""
    try:
        if not user_service.get_by_id(user_id):
            return not_found("Utente non trovato")
        success, message, deleted = service.clear(user_id)
        if not success:
            return server_error("Errore nella pulizia delle transazioni ricorrenti", message)
        return jsonify({'message': message, 'deleted': deleted})
    except Exception as e:
        return server_error("Errore nella pulizia delle transazioni ricorrenti", e)
