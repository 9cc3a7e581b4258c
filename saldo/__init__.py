"""Applicazione Flask per la gestione delle finanze personali"""

import os

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from saldo.config import config

# Istanze globali
db = SQLAlchemy()


def create_app(config_name='default'):
    """Factory pattern per creare l'applicazione Flask"""
    app = Flask(__name__)

    app.config.from_object(config[config_name])
    # mantiene l'ordine dei campi definito nei to_dict()
    app.json.sort_keys = False

    # Inizializza le estensioni
    db.init_app(app)

    # Importa e registra i blueprint
    from saldo.views.users import users_bp, account_bp
    from saldo.views.categories import categories_bp
    from saldo.views.transactions.transactions import transactions_bp
    from saldo.views.transactions.recurring import recurring_bp
    from saldo.views.reports import reports_bp
    from saldo.views.uploads import uploads_bp

    app.register_blueprint(users_bp, url_prefix='/api/user')
    app.register_blueprint(account_bp, url_prefix='/api/account')
    app.register_blueprint(categories_bp, url_prefix='/api/categories')
    app.register_blueprint(transactions_bp, url_prefix='/api/transactions')
    app.register_blueprint(recurring_bp, url_prefix='/api/recurring')
    app.register_blueprint(reports_bp, url_prefix='/api')
    app.register_blueprint(uploads_bp, url_prefix='/uploads')

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'message': 'Risorsa non trovata'}), 404

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({'message': 'Allegato troppo grande (massimo 15MB)'}), 413

    # Con SQLite crea le tabelle all'avvio se mancano, così test e run
    # locali partono senza migrazioni. Per altri database si usa INIT_DB=1.
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:'):
        if db_uri.startswith('sqlite:///'):
            os.makedirs(os.path.dirname(db_uri[len('sqlite:///'):]) or '.', exist_ok=True)
        with app.app_context():
            import saldo.models  # noqa: F401  popola i metadata
            db.create_all()

    return app
