"""
Integration tests for the orders and products endpoints

Repositories and services are patched; authentication runs for real with
tokens signed by the test secret.

Author: TM3
Date: 2026-10-19
"""
import pytest
from decimal import Decimal
from unittest.mock import patch

from fastapi.testclient import TestClient

from marketlink.core.exceptions import MixedSupplierError, OrderNotFoundError
from marketlink.domain.order import Order, OrderItem
from marketlink.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def created_order():
    return Order(
        id='ORD1',
        supplier_id='SUP1',
        supermarket_id='SM1',
        status='pending',
        total_amount=Decimal('25.00'),
        delivery_address='45 Temple St, Kandy',
        payment_method='cash',
        items=[
            OrderItem(product_id='A', product_name='Basmati Rice', qty=2, price=Decimal('10.00')),
            OrderItem(product_id='C', product_name='Red Lentils', qty=2, price=Decimal('2.50')),
        ],
    )


CHECKOUT_PAYLOAD = {
    'supplier_id': 'SUP1',
    'items': [
        {'product_id': 'A', 'qty': 2, 'price': '10.00'},
        {'product_id': 'C', 'qty': 2, 'price': '2.50'},
    ],
    'delivery_address': '45 Temple St, Kandy',
    'delivery_date': '',
    'payment_method': 'cash',
    'note': '',
    'total_amount': '25.00',
}


class TestAuthentication:

    def test_missing_token_is_rejected(self, client):
        response = client.get('/api/orders')

        assert response.status_code == 401
        assert response.json()['detail'] == 'Authentication required'

    def test_garbage_token_is_rejected(self, client):
        response = client.get('/api/orders', headers={'Authorization': 'Bearer not-a-jwt'})

        assert response.status_code == 401

    def test_supplier_cannot_place_orders(self, client, supplier_headers):
        response = client.post('/api/orders', json=CHECKOUT_PAYLOAD, headers=supplier_headers)

        assert response.status_code == 403

    def test_supermarket_cannot_read_supplier_inbox(self, client, supermarket_headers):
        response = client.get('/api/orders/supplier', headers=supermarket_headers)

        assert response.status_code == 403

    def test_auth_me_echoes_token_user(self, client, supplier_headers):
        response = client.get('/api/auth/me', headers=supplier_headers)

        assert response.status_code == 200
        assert response.json()['id'] == 'SUP1'
        assert response.json()['role'] == 'supplier'


class TestCreateOrder:

    @patch('marketlink.api.orders.OrderService')
    def test_create_order_returns_201(self, mock_service_cls, client, supermarket_headers, created_order):
        # Arrange
        mock_service_cls.return_value.create_order.return_value = created_order

        # Act
        response = client.post('/api/orders', json=CHECKOUT_PAYLOAD, headers=supermarket_headers)

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data['id'] == 'ORD1'
        assert data['status'] == 'pending'
        assert len(data['items']) == 2

        supermarket_id, request = mock_service_cls.return_value.create_order.call_args.args
        assert supermarket_id == 'SM1'
        assert request.delivery_date is None
        assert request.computed_total == Decimal('25.00')

    @patch('marketlink.api.orders.OrderService')
    def test_mixed_supplier_is_400(self, mock_service_cls, client, supermarket_headers):
        mock_service_cls.return_value.create_order.side_effect = MixedSupplierError()

        response = client.post('/api/orders', json=CHECKOUT_PAYLOAD, headers=supermarket_headers)

        assert response.status_code == 400
        assert 'ONE supplier' in response.json()['detail']

    def test_quantity_over_limit_is_422(self, client, supermarket_headers):
        payload = dict(CHECKOUT_PAYLOAD, items=[{'product_id': 'A', 'qty': 1000, 'price': '10.00'}])

        response = client.post('/api/orders', json=payload, headers=supermarket_headers)

        assert response.status_code == 422

    def test_unknown_payment_method_is_422(self, client, supermarket_headers):
        payload = dict(CHECKOUT_PAYLOAD, payment_method='crypto')

        response = client.post('/api/orders', json=payload, headers=supermarket_headers)

        assert response.status_code == 422


class TestReadOrders:

    @patch('marketlink.api.orders.OrderRepository')
    def test_my_orders(self, mock_repo_cls, client, supermarket_headers, created_order):
        mock_repo_cls.return_value.find_for_supermarket.return_value = ([created_order], 1)

        response = client.get('/api/orders', headers=supermarket_headers)

        assert response.status_code == 200
        body = response.json()
        assert body['status'] == 'success'
        assert body['count'] == 1
        assert body['data'][0]['total_amount'] == 25.0
        mock_repo_cls.return_value.find_for_supermarket.assert_called_once_with('SM1', limit=100, offset=0)

    @patch('marketlink.api.orders.OrderRepository')
    def test_supplier_orders_with_status_filter(self, mock_repo_cls, client, supplier_headers, created_order):
        mock_repo_cls.return_value.find_for_supplier.return_value = ([created_order], 1)

        response = client.get('/api/orders/supplier?status=pending', headers=supplier_headers)

        assert response.status_code == 200
        mock_repo_cls.return_value.find_for_supplier.assert_called_once_with(
            'SUP1', status='pending', limit=100, offset=0
        )

    @patch('marketlink.api.orders.OrderRepository')
    def test_order_detail_for_party(self, mock_repo_cls, client, supplier_headers, created_order):
        mock_repo_cls.return_value.find_by_id.return_value = created_order

        response = client.get('/api/orders/ORD1', headers=supplier_headers)

        assert response.status_code == 200
        assert response.json()['data']['id'] == 'ORD1'

    @patch('marketlink.api.orders.OrderRepository')
    def test_order_detail_hidden_from_other_buyers(self, mock_repo_cls, client, created_order):
        from marketlink.core.auth import TokenUser, create_access_token
        other = TokenUser(id='SM2', email='buy@keells.lk', role='supermarket')
        headers = {'Authorization': f'Bearer {create_access_token(other)}'}
        mock_repo_cls.return_value.find_by_id.return_value = created_order

        response = client.get('/api/orders/ORD1', headers=headers)

        assert response.status_code == 404

    @patch('marketlink.api.orders.OrderRepository')
    def test_repository_failure_is_500(self, mock_repo_cls, client, supermarket_headers):
        mock_repo_cls.return_value.find_for_supermarket.side_effect = Exception('connection refused')

        response = client.get('/api/orders', headers=supermarket_headers)

        assert response.status_code == 500
        assert 'connection refused' in response.json()['detail']


class TestUpdateStatus:

    @patch('marketlink.api.orders.OrderService')
    def test_supplier_updates_status(self, mock_service_cls, client, supplier_headers, created_order):
        mock_service_cls.return_value.update_status.return_value = created_order.model_copy(
            update={'status': 'Delivered'}
        )

        response = client.patch('/api/orders/ORD1/status', json={'status': 'Delivered'}, headers=supplier_headers)

        assert response.status_code == 200
        assert response.json()['data']['status'] == 'Delivered'
        mock_service_cls.return_value.update_status.assert_called_once_with('ORD1', 'SUP1', 'Delivered')

    @patch('marketlink.api.orders.OrderService')
    def test_foreign_order_is_404(self, mock_service_cls, client, supplier_headers):
        mock_service_cls.return_value.update_status.side_effect = OrderNotFoundError()

        response = client.patch('/api/orders/ORD9/status', json={'status': 'shipped'}, headers=supplier_headers)

        assert response.status_code == 404

    def test_blank_status_is_422(self, client, supplier_headers):
        response = client.patch('/api/orders/ORD1/status', json={'status': '  '}, headers=supplier_headers)

        assert response.status_code == 422


class TestProducts:

    @patch('marketlink.api.products.ProductRepository')
    def test_list_products(self, mock_repo_cls, client, supermarket_headers, item_a, item_c):
        mock_repo_cls.return_value.find_all.return_value = ([item_a, item_c], 2)

        response = client.get('/api/products?search=rice', headers=supermarket_headers)

        assert response.status_code == 200
        body = response.json()
        assert body['total'] == 2
        assert [p['id'] for p in body['data']] == ['A', 'C']
        assert mock_repo_cls.return_value.find_all.call_args.kwargs['search'] == 'rice'
