"""Blueprint JSON dell'API e risposte di errore comuni."""
from flask import current_app, jsonify, request

from saldo import db


def request_data():
    """Campi della richiesta: form se multipart, altrimenti corpo JSON"""
    if request.mimetype in ('multipart/form-data', 'application/x-www-form-urlencoded'):
        return request.form.to_dict()
    data = request.get_json(silent=True)
    # un corpo JSON che non è un oggetto (lista, numero) vale come vuoto
    return data if isinstance(data, dict) else {}


def validation_error(e):
    return jsonify({'message': e.message, 'errors': e.errors}), 400


def not_found(message):
    return jsonify({'message': message}), 404


def server_error(message, e):
    """Risposta 500 con messaggio e dettaglio; annulla la sessione corrente"""
    db.session.rollback()
    current_app.logger.error('%s: %s', message, e, exc_info=isinstance(e, Exception))
    return jsonify({'message': message, 'error': str(e)}), 500
