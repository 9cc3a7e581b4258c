"""Blueprint che serve gli allegati caricati."""
from flask import Blueprint, current_app, send_from_directory

uploads_bp = Blueprint('uploads', __name__)


@uploads_bp.route('/<path:filename>', methods=['GET'])
def allegato(filename):
    """Restituisce un allegato; send_from_directory rifiuta i path fuori dalla cartella"""
    response = send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
    # gli allegati non devono mai essere interpretati come pagine attive
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Content-Security-Policy'] = "default-src 'none'; img-src 'self'; style-src 'unsafe-inline'"
    return response
