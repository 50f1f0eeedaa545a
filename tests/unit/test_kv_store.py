"""
Unit tests for the key-value store.
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError

from salon import create_app
from salon.services.kv_store import KeyValueStore, MemoryBackend, RedisBackend, SqlBackend


class TestReadFallback:
    """get() never raises and falls back to the caller's default."""

    def test_missing_key_returns_default(self, memory_store):
        assert memory_store.get('nope', []) == []
        assert memory_store.get('nope', None) is None

    def test_corrupt_json_returns_default(self, memory_store):
        memory_store.backend.write('broken', '{not json')
        assert memory_store.get('broken', {'fallback': True}) == {'fallback': True}

    def test_backend_failure_returns_default(self):
        client = MagicMock()
        client.get.side_effect = RedisConnectionError('down')
        store = KeyValueStore(RedisBackend(client))

        assert store.get('beautyflow_session', 'default') == 'default'


class TestWrite:
    """set()/remove() behaviour."""

    def test_round_trip(self, memory_store):
        memory_store.set('k', {'a': [1, 2, 3], 'b': 'x'})
        assert memory_store.get('k', None) == {'a': [1, 2, 3], 'b': 'x'}

    def test_dates_and_decimals(self, memory_store):
        memory_store.set('k', {'day': date(2025, 2, 8), 'amount': Decimal('12.50')})
        value = memory_store.get('k', None)
        assert value['day'] == '2025-02-08'
        assert value['amount'] == Decimal('12.50')

    def test_overwrite(self, memory_store):
        memory_store.set('k', 1)
        memory_store.set('k', 2)
        assert memory_store.get('k', None) == 2

    def test_write_failure_is_swallowed(self):
        client = MagicMock()
        client.set.side_effect = RedisConnectionError('quota')
        store = KeyValueStore(RedisBackend(client))

        assert store.set('k', [1]) is False

    def test_unserializable_value_is_refused(self, memory_store):
        assert memory_store.set('k', {'obj': object()}) is False
        assert memory_store.get('k', 'untouched') == 'untouched'

    def test_remove(self, memory_store):
        memory_store.set('k', 'v')
        assert memory_store.remove('k') is True
        assert memory_store.get('k', None) is None
        # Missing keys are fine
        assert memory_store.remove('k') is True

    def test_redis_backend_stores_plain_json(self):
        client = MagicMock()
        store = KeyValueStore(RedisBackend(client))

        store.set('beautyflow_admin', {'email': 'a@x.com'})

        client.set.assert_called_once_with('beautyflow_admin', '{"email": "a@x.com"}')


class SqlTestConfig:
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    STORAGE_BACKEND = 'sql'
    STORAGE_KEY_PREFIX = 'beautyflow'
    TENANT_KEY_PREFIX = 'bf'


class TestSqlBackend:
    """The SQLAlchemy-backed store used by default outside tests."""

    @pytest.fixture
    def sql_store(self):
        app = create_app(SqlTestConfig)
        return app.extensions['kv_store']

    def test_round_trip_and_overwrite(self, sql_store):
        sql_store.set('bf_t1_clients', [{'id': '1'}])
        sql_store.set('bf_t1_clients', [{'id': '1'}, {'id': '2'}])

        assert sql_store.get('bf_t1_clients', []) == [{'id': '1'}, {'id': '2'}]

    def test_remove(self, sql_store):
        sql_store.set('beautyflow_session', {'kind': 'admin'})
        sql_store.remove('beautyflow_session')

        assert sql_store.get('beautyflow_session', None) is None

    def test_app_seeds_schema_version(self, sql_store):
        assert sql_store.get('beautyflow_schema_version', 0) == 1

    def test_read_failure_rolls_back_session(self):
        session = MagicMock()
        session.get.side_effect = OperationalError('SELECT', {}, Exception('connection lost'))
        store = KeyValueStore(SqlBackend(lambda: session))

        assert store.get('bf_t1_clients', []) == []
        session.rollback.assert_called_once()


class TestStoreRegistration:

    def test_store_registered_on_app(self, app):
        from salon.services.kv_store import get_store
        assert app.extensions['kv_store'] is get_store()
        assert isinstance(get_store().backend, MemoryBackend)
