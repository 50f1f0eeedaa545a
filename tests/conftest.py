import pytest
from datetime import date, timedelta
import uuid

from salon import create_app
from salon.services.kv_store import KeyValueStore, MemoryBackend


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing (fresh in-memory storage)."""
    app = create_app('config.TestConfig')
    return app


@pytest.fixture(scope='function')
def store(app):
    """Key-value store of the test app."""
    return app.extensions['kv_store']


@pytest.fixture(scope='function')
def memory_store():
    """Standalone store, no Flask app involved."""
    return KeyValueStore(MemoryBackend())


@pytest.fixture(scope='function')
def accounts(app):
    return app.extensions['accounts']


@pytest.fixture(scope='function')
def auth(app):
    return app.extensions['auth']


@pytest.fixture(scope='function')
def dataset(app):
    return app.extensions['dataset']


@pytest.fixture(scope='function')
def tenant1(accounts):
    """Create first test salon, paid today."""
    suffix = str(uuid.uuid4())[:8]
    return accounts.create_account(
        name=f'Salon One {suffix}',
        owner_name='Alice',
        phone='+237 600 000 001',
        email=f'owner1-{suffix}@test.com',
        password='password123',
    )


@pytest.fixture(scope='function')
def tenant2(accounts):
    """Create second test salon for isolation tests."""
    suffix = str(uuid.uuid4())[:8]
    return accounts.create_account(
        name=f'Salon Two {suffix}',
        owner_name='Bea',
        phone='+237 600 000 002',
        email=f'owner2-{suffix}@test.com',
        password='password123',
    )


@pytest.fixture(scope='function')
def expired_tenant(accounts):
    """Salon whose 30-day period ended ten days ago."""
    return accounts.create_account(
        name='Salon Expired',
        owner_name='Carla',
        phone='+237 600 000 003',
        email='expired@test.com',
        password='password123',
        last_payment_date=date.today() - timedelta(days=40),
    )


@pytest.fixture(scope='function')
def legacy_account_data():
    """Account stored before salons had a users list."""
    from salon.utils.hashing import simple_hash
    return {
        'id': 'legacy-salon',
        'name': 'Salon Legacy',
        'owner_name': 'Dora',
        'phone': '+237 600 000 004',
        'login_email': 'legacy@test.com',
        'password_hash': simple_hash('oldpass99'),
        'created_at': '2024-01-15',
        'last_payment_date': date.today().isoformat(),
        'subscription_active': True,
        'subscription_amount': 25000,
        'subscription_days': 30,
    }
