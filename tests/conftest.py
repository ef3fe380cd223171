from __future__ import annotations

import base64
from unittest.mock import MagicMock

import pytest

from xendit_gateway import create_app
from xendit_gateway.models import ContactNumber, db


@pytest.fixture
def app():
    app = create_app('config.TestConfig')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def contact(app):
    db.session.add(ContactNumber(contact_id=5, number='+62 (812) 3456-7890', type='phone'))
    db.session.add(ContactNumber(contact_id=5, number='+62 21 000 000', type='fax'))
    db.session.commit()
    return {
        'id': 5,
        'client_id': 77,
        'first_name': 'Budi',
        'last_name': 'Santoso',
        'address1': 'Jl. Sudirman 1',
        'address2': None,
        'city': 'Jakarta',
        'state': {'code': 'JK', 'name': 'DKI Jakarta'},
        'country': {'alpha2': 'ID', 'name': 'Indonesia'},
        'zip': '10220',
    }


def b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


def fake_response(payload, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = str(payload)
    return resp


@pytest.fixture
def paid_webhook() -> dict:
    return {
        'id': 'inv_1',
        'external_id': b64('42=100.00'),
        'status': 'PAID',
        'paid_amount': 103.00,
        'amount': 103.00,
        'payment_id': 'pay_1',
        'success_redirect_url': 'https://billing.example.com/pay/return?client_id=77&invoice_id=42',
    }
