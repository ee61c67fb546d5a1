"""Product CRUD through /api/products."""

from app.models import Product


class TestProductCRUD:
    """Product create, read, update, delete tests."""

    def test_list_products_empty(self, client):
        response = client.get('/api/products')

        assert response.status_code == 200
        assert response.json == []

    def test_create_product(self, client, db_session):
        """
        SCENARIO: Create a product with name, price and category
        EXPECTED: HTTP 201 with the generated id; product available by default
        """
        response = client.post('/api/products', json={
            'name': 'Pizza Margherita',
            'price': 5000,
            'category': 'Plats',
        })

        assert response.status_code == 201
        product_id = response.json['id']

        product = db_session.get(Product, product_id)
        assert product.name == 'Pizza Margherita'
        assert product.price == 5000
        assert product.category == 'Plats'
        assert product.is_available is True

    def test_list_returns_created_products(self, client, burger, coke):
        response = client.get('/api/products')

        assert response.status_code == 200
        names = [p['name'] for p in response.json]
        assert names == ['Burger Classique', 'Coca Cola']
        assert set(response.json[0].keys()) == {'id', 'name', 'price', 'category', 'image_url', 'is_available'}

    def test_update_product(self, client, db_session, burger):
        response = client.put(f'/api/products/{burger.id}', json={
            'name': 'Burger Double',
            'price': 4500,
            'category': 'Plats',
            'is_available': 1,
        })

        assert response.status_code == 200
        assert response.json == {'success': True}

        db_session.refresh(burger)
        assert burger.name == 'Burger Double'
        assert burger.price == 4500

    def test_update_ignores_id_and_extra_fields(self, client, db_session, burger):
        """The UI posts the whole product back, id included."""
        body = dict(burger.to_dict(), price=3000)

        response = client.put(f'/api/products/{burger.id}', json=body)

        assert response.status_code == 200
        db_session.refresh(burger)
        assert burger.price == 3000

    def test_toggle_availability_twice_restores_value(self, client, db_session, burger):
        original = burger.is_available

        for _ in range(2):
            current = client.get('/api/products').json[0]
            response = client.put(f'/api/products/{burger.id}', json={
                **current,
                'is_available': 0 if current['is_available'] else 1,
            })
            assert response.status_code == 200

        db_session.refresh(burger)
        assert burger.is_available is original

    def test_toggle_availability_once(self, client, db_session, burger):
        response = client.put(f'/api/products/{burger.id}', json={'is_available': False})

        assert response.status_code == 200
        db_session.refresh(burger)
        assert burger.is_available is False
        # Other fields untouched by a partial update
        assert burger.price == 3500

    def test_delete_product(self, client, db_session, burger):
        product_id = burger.id

        response = client.delete(f'/api/products/{product_id}')

        assert response.status_code == 200
        assert response.json == {'success': True}
        assert db_session.query(Product).filter_by(id=product_id).count() == 0

    def test_delete_missing_product_is_noop_success(self, client):
        response = client.delete('/api/products/999999')

        assert response.status_code == 200
        assert response.json == {'success': True}

    def test_update_missing_product_is_noop_success(self, client, db_session):
        response = client.put('/api/products/999999', json={'name': 'Ghost'})

        assert response.status_code == 200
        assert db_session.query(Product).count() == 0


class TestProductValidation:
    """Input shape checks happen before any write."""

    def test_create_missing_required_fields(self, client, db_session):
        response = client.post('/api/products', json={'name': 'Sans prix'})

        assert response.status_code == 400
        assert 'category' in response.json['error']
        assert 'price' in response.json['error']
        assert db_session.query(Product).count() == 0

    def test_create_rejects_non_positive_price(self, client):
        response = client.post('/api/products', json={'name': 'Gratuit', 'price': 0, 'category': 'Plats'})

        assert response.status_code == 400
        assert 'price' in response.json['error']

    def test_create_rejects_non_numeric_price(self, client):
        response = client.post('/api/products', json={'name': 'Burger', 'price': 'cher', 'category': 'Plats'})

        assert response.status_code == 400

    def test_create_rejects_blank_name(self, client):
        response = client.post('/api/products', json={'name': '   ', 'price': 100, 'category': 'Plats'})

        assert response.status_code == 400
        assert 'name' in response.json['error']

    def test_create_without_json_body(self, client):
        response = client.post('/api/products', data='not json', content_type='text/plain')

        assert response.status_code == 400

    def test_update_rejects_null_name(self, client, burger):
        response = client.put(f'/api/products/{burger.id}', json={'name': None})

        assert response.status_code == 400
