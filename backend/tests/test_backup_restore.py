"""Full-store backup export and atomic restore."""

import json

from app.models import Product, Sale, SaleItem, Expense, ExpenseCategory
from app.services import backup_service


TABLE_KEYS = ['products', 'sales', 'sale_items', 'expenses', 'expense_categories']


def _download(client) -> dict:
    response = client.get('/api/backup')
    assert response.status_code == 200
    return json.loads(response.data)


def _counts(db_session) -> dict:
    return {
        'products': db_session.query(Product).count(),
        'sales': db_session.query(Sale).count(),
        'sale_items': db_session.query(SaleItem).count(),
        'expenses': db_session.query(Expense).count(),
        'expense_categories': db_session.query(ExpenseCategory).count(),
    }


class TestBackupExport:

    def test_envelope_shape(self, client, populated_store):
        response = client.get('/api/backup')

        assert response.status_code == 200
        assert response.mimetype == 'application/json'
        assert 'attachment' in response.headers['Content-Disposition']
        assert 'pos_backup.json' in response.headers['Content-Disposition']

        document = json.loads(response.data)
        assert document['version'] == '1.0'
        assert document['timestamp'].endswith('Z')
        assert list(document['data'].keys()) == TABLE_KEYS

    def test_contains_every_row(self, client, populated_store):
        data = _download(client)['data']

        assert {k: len(v) for k, v in data.items()} == {
            'products': 2, 'sales': 1, 'sale_items': 2, 'expenses': 1, 'expense_categories': 2,
        }
        assert data['sales'][0]['id'] == 'SALE-100'
        assert data['sales'][0]['status'] == 'COMPLETED'
        assert {i['sale_id'] for i in data['sale_items']} == {'SALE-100'}

    def test_empty_store(self, client):
        data = _download(client)['data']

        assert all(rows == [] for rows in data.values())


class TestRestore:

    def test_round_trip_preserves_rows_and_ids(self, client, db_session, populated_store):
        document = _download(client)

        # Wipe, then load the exact document back
        backup_service.restore_backup(db_session, {})
        assert all(count == 0 for count in _counts(db_session).values())

        response = client.post('/api/restore', json=document)

        assert response.status_code == 200
        assert response.json['success'] is True
        assert _download(client)['data'] == document['data']

    def test_restore_replaces_existing_rows(self, client, db_session, populated_store):
        document = _download(client)
        client.post('/api/products', json={'name': 'Nouveau', 'price': 100, 'category': 'Plats'})
        client.post('/api/expenses', json={'description': 'Extra', 'amount': 10, 'category': 'Autres'})

        response = client.post('/api/restore', json=document)

        assert response.status_code == 200
        assert _download(client)['data'] == document['data']

    def test_missing_table_restores_empty(self, client, db_session, populated_store):
        document = _download(client)
        del document['data']['expenses']

        response = client.post('/api/restore', json=document)

        assert response.status_code == 200
        assert db_session.query(Expense).count() == 0
        assert db_session.query(Product).count() == 2

    def test_accepts_integer_availability_flags(self, client, db_session):
        response = client.post('/api/restore', json={'data': {
            'products': [
                {'id': 7, 'name': 'Tiramisu', 'price': 2500, 'category': 'Desserts', 'image_url': None, 'is_available': 0},
            ],
        }})

        assert response.status_code == 200
        product = db_session.get(Product, 7)
        assert product.is_available is False

    def test_new_ids_continue_after_restored_ids(self, client, db_session):
        client.post('/api/restore', json={'data': {
            'products': [{'id': 40, 'name': 'Coca Cola', 'price': 500, 'category': 'Boissons', 'is_available': 1}],
        }})

        response = client.post('/api/products', json={'name': 'Fanta', 'price': 500, 'category': 'Boissons'})

        assert response.status_code == 201
        assert response.json['id'] > 40


class TestRestoreAtomicity:
    """A bad row anywhere leaves all five tables exactly as they were."""

    def _assert_unchanged(self, client, before):
        assert _download(client)['data'] == before['data']

    def test_sale_item_with_unknown_sale(self, client, populated_store):
        before = _download(client)
        document = json.loads(json.dumps(before))
        document['data']['sale_items'].append(
            {'id': 999, 'sale_id': 'SALE-UNKNOWN', 'product_id': document['data']['products'][0]['id'],
             'quantity': 1, 'unit_price': 100},
        )

        response = client.post('/api/restore', json=document)

        assert response.status_code == 500
        assert 'sale_items' in response.json['error']
        self._assert_unchanged(client, before)

    def test_sale_item_with_bad_type(self, client, populated_store):
        before = _download(client)
        document = json.loads(json.dumps(before))
        document['data']['sale_items'][1]['quantity'] = 'deux'

        response = client.post('/api/restore', json=document)

        assert response.status_code == 500
        assert 'sale_items[1]' in response.json['error']
        self._assert_unchanged(client, before)

    def test_row_missing_required_column(self, client, populated_store):
        before = _download(client)
        document = json.loads(json.dumps(before))
        del document['data']['expenses'][0]['amount']

        response = client.post('/api/restore', json=document)

        assert response.status_code == 500
        self._assert_unchanged(client, before)

    def test_duplicate_ids_in_document(self, client, populated_store):
        before = _download(client)
        document = json.loads(json.dumps(before))
        document['data']['products'].append(dict(document['data']['products'][0]))

        response = client.post('/api/restore', json=document)

        assert response.status_code == 500
        self._assert_unchanged(client, before)


class TestRestoreValidation:

    def test_missing_data_field(self, client, populated_store):
        before = _download(client)

        response = client.post('/api/restore', json={'version': '1.0'})

        assert response.status_code == 400
        assert response.json['error'] == 'No data provided'
        assert _download(client)['data'] == before['data']

    def test_data_must_be_object(self, client):
        response = client.post('/api/restore', json={'data': [1, 2, 3]})

        assert response.status_code == 400

    def test_table_must_be_list(self, client):
        response = client.post('/api/restore', json={'data': {'products': {'id': 1}}})

        assert response.status_code == 400
        assert 'products' in response.json['error']
