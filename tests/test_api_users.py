from datetime import date

from saldo import db
from saldo.models import Transaction, RecurringTransaction, User


def test_register_and_login(client):
    resp = client.post('/api/user/register', json={'username': 'anna', 'password': 'pw123'})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['username'] == 'anna'
    assert body['initialBalance'] == '0.00'
    assert 'password' not in body

    stored = db.session.get(User, body['id'])
    assert stored.password != 'pw123'

    resp = client.post('/api/user/login', json={'username': 'anna', 'password': 'pw123'})
    assert resp.status_code == 200
    assert resp.get_json()['id'] == body['id']


def test_register_duplicate_username(client, user):
    resp = client.post('/api/user/register', json={'username': 'mario', 'password': 'altro'})
    assert resp.status_code == 400
    assert resp.get_json()['message'] == "Username già esistente"


def test_register_missing_fields(client):
    resp = client.post('/api/user/register', json={'username': 'anna'})
    assert resp.status_code == 400
    assert 'password' in resp.get_json()['errors']


def test_login_wrong_password(client, user):
    resp = client.post('/api/user/login', json={'username': 'mario', 'password': 'sbagliata'})
    assert resp.status_code == 401


def test_login_missing_fields(client):
    assert client.post('/api/user/login', json={}).status_code == 400


def test_get_user(client, user):
    resp = client.get(f'/api/user/{user.id}')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['username'] == 'mario'
    assert body['overdraftLimit'] == '500.00'
    assert 'password' not in body


def test_get_unknown_user(client):
    resp = client.get('/api/user/999')
    assert resp.status_code == 404
    assert 'message' in resp.get_json()


def test_update_settings_returns_user_and_summary(client, user):
    resp = client.patch(f'/api/user/{user.id}/settings',
                        json={'initialBalance': '-200.50', 'overdraftLimit': '1000'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['user']['initialBalance'] == '-200.50'
    assert body['user']['overdraftLimit'] == '1000.00'
    assert body['summary']['currentBalance'] == '-200.50'
    assert body['summary']['availableBalance'] == '799.50'


def test_update_settings_without_suffix(client, user):
    resp = client.patch(f'/api/user/{user.id}', json={'initialBalance': '10', 'overdraftLimit': '0'})
    assert resp.status_code == 200
    assert resp.get_json()['user']['initialBalance'] == '10.00'


def test_update_settings_invalid(client, user):
    resp = client.patch(f'/api/user/{user.id}/settings',
                        json={'initialBalance': 'abc', 'overdraftLimit': '-5'})
    assert resp.status_code == 400
    errors = resp.get_json()['errors']
    assert set(errors) == {'initialBalance', 'overdraftLimit'}


def test_reset_account(client, user):
    rec = RecurringTransaction(user_id=user.id, description='Affitto', amount=700, type='expense',
                               frequency='monthly', start_date=date(2024, 1, 5))
    db.session.add(rec)
    db.session.flush()
    db.session.add(Transaction(user_id=user.id, description='Affitto', amount=700, type='expense',
                               date=date(2024, 1, 5), status='paid', is_recurring=True, recurring_id=rec.id))
    db.session.add(Transaction(user_id=user.id, description='Spesa', amount=50, type='expense',
                               date=date(2024, 1, 6), status='paid'))
    db.session.commit()

    resp = client.post(f'/api/user/{user.id}/reset')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['transactionsDeleted'] == 2
    assert body['recurringTransactionsDeleted'] == 1

    assert Transaction.query.filter_by(user_id=user.id).count() == 0
    assert RecurringTransaction.query.filter_by(user_id=user.id).count() == 0
    resp = client.get(f'/api/user/{user.id}')
    assert resp.get_json()['initialBalance'] == '0.00'
    assert resp.get_json()['overdraftLimit'] == '0.00'


def test_reset_unknown_user(client):
    assert client.post('/api/user/999/reset').status_code == 404


def test_account_reset_alias(client, user):
    db.session.add(Transaction(user_id=user.id, description='Spesa', amount=50, type='expense',
                               date=date(2024, 1, 6), status='paid'))
    db.session.commit()

    resp = client.delete(f'/api/account/reset/{user.id}')
    assert resp.status_code == 200
    assert resp.get_json()['transactionsDeleted'] == 1
    assert client.delete('/api/account/reset/999').status_code == 404
