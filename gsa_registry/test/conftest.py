"""
Pytest configuration and fixtures for the GSA asset registry
"""
import os
import tempfile

import pytest

# Set SECRET_KEY if not set (for testing)
if not os.environ.get('SECRET_KEY'):
    os.environ['SECRET_KEY'] = 'test_secret_key_for_gsa_registry_testing'

# Keep test logs out of the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='gsa_registry_logs_'))
os.environ.setdefault('LOG_LEVEL', 'WARNING')

from gsa_registry import create_app
from gsa_registry import db as _db
from gsa_registry.build import build_models
from gsa_registry.buisness.gsa.asset_registry import InMemoryAssetRegistry


TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'RATELIMIT_ENABLED': False,
    'GSA_REGISTRY_URL': '',
}


@pytest.fixture(scope='function')
def app():
    """Create Flask application with a fresh in-memory database per test"""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        build_models()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def registry():
    """In-memory registry holding two Ministry of Health sedans"""
    return InMemoryAssetRegistry({
        'vehicle': [
            {'id': 'VH001', 'department': 'Ministry of Health', 'vehicleType': 'sedan', 'gsaCode': 'GSA-MOH-02-001'},
            {'id': 'VH002', 'department': 'Ministry of Health', 'vehicleType': 'sedan', 'gsaCode': 'GSA-MOH-02-002'},
        ]
    })


def vehicle_payload(**overrides):
    """Minimal valid vehicle registration body"""
    payload = {
        'plateNumber': 'LBR-100-GOV',
        'vehicleType': 'car',
        'make': 'Toyota',
        'model': 'Corolla',
        'vinNumber': 'JT2BF22K1W0123456',
        'department': 'Ministry of Health',
    }
    payload.update(overrides)
    return payload


def equipment_payload(**overrides):
    """Minimal valid equipment registration body"""
    payload = {
        'name': 'Dell OptiPlex 7090',
        'equipmentClass': 'Computer',
        'serialNumber': 'DOP7090-001',
        'department': 'Ministry of Health',
    }
    payload.update(overrides)
    return payload
