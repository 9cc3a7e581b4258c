"""Popola il database con le categorie predefinite e l'utente demo (demo / demo123).

Uso: eseguire nello stesso ambiente dell'app Flask (usa create_app()).
Opzioni:
  --no-demo : crea solo le categorie
"""
import argparse
import logging

from saldo import create_app, db


def main(argv=None):
    parser = argparse.ArgumentParser(description='Seed del database: categorie predefinite e utente demo')
    parser.add_argument('--no-demo', action='store_true', help="Non creare l'utente demo")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    app = create_app()
    with app.app_context():
        import saldo.models  # noqa: F401
        from saldo.services.categories.category_service import CategoryService
        from saldo.services.users.user_service import UserService

        db.create_all()
        created = CategoryService().ensure_defaults()
        print(f"Categorie create: {created}")

        if not args.no_demo:
            _, message, _ = UserService().ensure_demo_user()
            print(message)


if __name__ == '__main__':
    main()
