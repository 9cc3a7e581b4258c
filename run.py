"""Entry point per l'applicazione.

Questo script avvia l'app Flask e può inizializzare il database se
la variabile d'ambiente `INIT_DB` è impostata (es. INIT_DB=1).
"""

import os
from saldo import create_app, db


def init_database():
    """Crea le tabelle, le categorie predefinite e l'utente demo.
    Eseguita solo quando INIT_DB=1.
    """
    import saldo.models  # noqa: F401
    from saldo.services.categories.category_service import CategoryService
    from saldo.services.users.user_service import UserService

    db.create_all()
    CategoryService().ensure_defaults()
    UserService().ensure_demo_user()


def main():
    app = create_app()

    # Inizializzazione opzionale del DB (solo in fase di provisioning)
    if os.environ.get('INIT_DB') == '1':
        with app.app_context():
            init_database()

    app.run(host=app.config.get('HOST', '0.0.0.0'), port=app.config.get('PORT', 5001),
            debug=os.environ.get('FLASK_DEBUG') == '1')


if __name__ == '__main__':
    main()
