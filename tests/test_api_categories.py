from saldo.services.categories.category_service import CategoryService


def test_health(client):
    resp = client.get('/api/health')
    assert resp.status_code == 200
    assert resp.get_json() == {'status': 'ok'}


def test_list_categories(client, categories):
    resp = client.get('/api/categories')
    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body) == len(categories)
    assert {'id', 'name', 'type', 'icon'} <= set(body[0])


def test_filter_by_type(client, categories):
    body = client.get('/api/categories?type=income').get_json()
    assert body
    assert all(c['type'] == 'income' for c in body)
    assert 'Stipendio' in [c['name'] for c in body]


def test_invalid_type(client):
    assert client.get('/api/categories?type=altro').status_code == 400


def test_defaults_are_seeded_once(app, categories):
    assert CategoryService().ensure_defaults() == 0


def test_unknown_route_is_json_404(client):
    resp = client.get('/api/non-esiste')
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'Risorsa non trovata'
