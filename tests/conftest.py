from decimal import Decimal

import pytest

from saldo import create_app, db
from saldo.models import User, Category
from saldo.services.categories.category_service import CategoryService
from saldo.services.users.passwords import hash_password


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    u = User(
        username='mario',
        email='mario@example.com',
        password=hash_password('segreta'),
        initial_balance=Decimal('1000.00'),
        overdraft_limit=Decimal('500.00'),
    )
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def categories(app):
    """Categorie predefinite indicizzate per (tipo, nome)"""
    CategoryService().ensure_defaults()
    return {(c.type, c.name): c for c in Category.query.all()}
