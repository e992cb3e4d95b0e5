from datetime import datetime
from unittest.mock import patch

import pytest

from hotspot import create_app, db
from hotspot.models.profile import Profile
from hotspot.models.purchased_voucher import PurchasedVoucher
from hotspot.models.voucher import Voucher


@pytest.fixture
def app():
    """Application bound to a fresh in-memory SQLite database."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sms_gateway():
    """Patch the gateway call; by default every message is accepted."""
    with patch('hotspot.services.sms.requests.post') as mock_post:
        mock_post.return_value.ok = True
        mock_post.return_value.status_code = 200
        mock_post.return_value.json.return_value = {'status': 'success'}
        yield mock_post


@pytest.fixture
def make_vouchers(app):
    def _make(plan_id, *codes, is_used=False):
        vouchers = [Voucher(code=code, plan_id=plan_id, is_used=is_used) for code in codes]
        db.session.add_all(vouchers)
        db.session.commit()
        return vouchers
    return _make


@pytest.fixture
def make_purchase(app):
    """Record a sold voucher for a phone with an explicit expiry."""
    def _make(phone_number, code, plan_id, expires_at, purchased_at=datetime(2024, 1, 1)):
        voucher = Voucher(code=code, plan_id=plan_id, is_used=True, used_at=purchased_at)
        db.session.add(voucher)
        db.session.flush()
        purchase = PurchasedVoucher(
            voucher_id=voucher.id,
            phone_number=phone_number,
            purchased_at=purchased_at,
            expires_at=expires_at,
        )
        db.session.add(purchase)
        db.session.commit()
        return purchase
    return _make


@pytest.fixture
def admin_profile(app):
    profile = Profile(username='admin')
    profile.password = 'S3cret!pass'
    return profile.save()


@pytest.fixture
def admin_headers(client, admin_profile):
    response = client.post('/api/admin/login', json={'username': 'admin', 'password': 'S3cret!pass'})
    assert response.status_code == 200
    return {'Authorization': f"Bearer {response.get_json()['access_token']}"}
