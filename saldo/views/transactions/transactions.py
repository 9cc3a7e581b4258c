"""Blueprint per le transazioni (entrate e uscite)."""
from flask import Blueprint, jsonify, request

from saldo.services.transactions.transaction_service import TransactionService
from saldo.services.users.user_service import UserService
from saldo.utils import ValidationError, ValidationUtils
from saldo.utils.uploads import save_attachment
from saldo.views import request_data, validation_error, not_found, server_error

transactions_bp = Blueprint('transactions', __name__)
service = TransactionService()
user_service = UserService()


@transactions_bp.route('/<int:user_id>', methods=['GET'])
def lista(user_id):
    """Transazioni dell'utente; prima segna come in ritardo le uscite scadute"""
    limit = request.args.get('limit', type=int)
    try:
        if not user_service.get_by_id(user_id):
            return not_found("Utente non trovato")
        service.mark_overdue(user_id)
        return jsonify([t.to_dict() for t in service.get_transactions(user_id, limit)])
    except Exception as e:
        return server_error("Errore nel recupero delle transazioni", e)


@transactions_bp.route('', methods=['POST'])
@transactions_bp.route('/', methods=['POST'])
def crea():
    """Crea una transazione da JSON o da form multipart con `attachment`"""
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
        success, message, transaction = service.create_transaction(user_id, data, attachment)
        if not success:
            return server_error("Errore nella creazione della transazione", message)
        return jsonify(transaction.to_dict()), 201
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error("Errore nella creazione della transazione", e)


@transactions_bp.route('/<int:transaction_id>', methods=['PATCH'])
def modifica(transaction_id):
    """Aggiorna i campi forniti (es. solo `status`)"""
    try:
        transaction = service.get_by_id(transaction_id)
        if not transaction:
            return not_found("Transazione non trovata")
        attachment = save_attachment(request.files.get('attachment'))
        success, message = service.update_transaction(transaction, request_data(), attachment)
        if not success:
            return server_error("Errore nell'aggiornamento della transazione", message)
        return jsonify(transaction.to_dict())
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error("Errore nell'aggiornamento della transazione", e)


@transactions_bp.route('/<int:transaction_id>', methods=['DELETE'])
def elimina(transaction_id):
    try:
        transaction = service.get_by_id(transaction_id)
        if not transaction:
            return not_found("Transazione non trovata")
        success, message = service.delete(transaction)
        if not success:
            return server_error("Errore nell'eliminazione della transazione", message)
        return jsonify({'message': "Transazione eliminata con successo"})
    except Exception as e:
        return server_error("Errore nell'eliminazione della transazione", e)
