"""Blueprint per utenti, login e impostazioni del conto."""
from flask import Blueprint, current_app, jsonify

from saldo.services.summary.summary_service import SummaryService, summary_to_dict
from saldo.services.users.user_service import UserService
from saldo.utils import ValidationError
from saldo.views import request_data, validation_error, not_found, server_error

users_bp = Blueprint('users', __name__)
account_bp = Blueprint('account', __name__)
service = UserService()
summary_service = SummaryService()


@users_bp.route('/<int:user_id>', methods=['GET'])
def dettaglio(user_id):
    """Dati dell'utente (senza password)"""
    try:
        user = service.get_by_id(user_id)
        if not user:
            return not_found("Utente non trovato")
        return jsonify(user.to_dict())
    except Exception as e:
        return server_error("Errore nel recupero dell'utente", e)


@users_bp.route('/login', methods=['POST'])
def login():
    data = request_data()
    if not data.get('username') or not data.get('password'):
        return jsonify({'message': "Username e password sono obbligatori"}), 400
    try:
        user = service.authenticate(data['username'], data['password'])
        if not user:
            current_app.logger.info('Login fallito per %s', data['username'])
            return jsonify({'message': "Credenziali non valide"}), 401
        return jsonify(user.to_dict())
    except Exception as e:
        return server_error("Errore durante il login", e)


@users_bp.route('/register', methods=['POST'])
def register():
    try:
        success, message, user = service.register(request_data())
        if not success:
            return jsonify({'message': message}), 400
        return jsonify(user.to_dict()), 201
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error("Errore durante la registrazione", e)


@users_bp.route('/<int:user_id>', methods=['PATCH'])
@users_bp.route('/<int:user_id>/settings', methods=['PATCH'])
def impostazioni(user_id):
    """Aggiorna saldo iniziale e limite di scoperto, restituisce anche il nuovo riepilogo"""
    try:
        user = service.get_by_id(user_id)
        if not user:
            return not_found("Utente non trovato")
        success, message = service.update_settings(user, request_data())
        if not success:
            return server_error("Errore nell'aggiornamento delle impostazioni", message)
        summary = summary_service.get_summary(user_id)
        return jsonify({'user': user.to_dict(), 'summary': summary_to_dict(summary)})
    except ValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error("Errore nell'aggiornamento delle impostazioni", e)


@users_bp.route('/<int:user_id>/reset', methods=['POST'])
def reset(user_id):
    """Elimina tutte le transazioni e le ricorrenze dell'utente e azzera le impostazioni"""
    try:
        user = service.get_by_id(user_id)
        if not user:
            return not_found("Utente non trovato")
        success, message, counts = service.reset_account(user)
        if not success:
            return server_error("Errore durante il reset dei dati", message)
        return jsonify({'message': message, **counts})
    except Exception as e:
        return server_error("Errore durante il reset dei dati", e)


@account_bp.route('/reset/<int:user_id>', methods=['DELETE'])
def reset_account(user_id):
    """Alias di POST /api/user/<id>/reset"""
    return reset(user_id)
