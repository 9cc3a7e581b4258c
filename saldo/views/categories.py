"""Blueprint per le categorie."""
from flask import Blueprint, jsonify, request

from saldo.models.transaction import TIPI
from saldo.services.categories.category_service import CategoryService
from saldo.views import server_error

categories_bp = Blueprint('categories', __name__)
service = CategoryService()


@categories_bp.route('', methods=['GET'])
@categories_bp.route('/', methods=['GET'])
def lista():
    """Elenco delle categorie, filtrabile con ?type=income|expense"""
    type_ = request.args.get('type')
    if type_ and type_ not in TIPI:
        return jsonify({'message': "Tipo non valido", 'errors': {'type': f"Valori ammessi: {', '.join(TIPI)}"}}), 400
    try:
        return jsonify([c.to_dict() for c in service.get_categories(type_)])
    except Exception as e:
        return server_error("Errore nel recupero delle categorie", e)
