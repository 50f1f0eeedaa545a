"""
Key-Value Storage Service.

Synchronous JSON document store used for every piece of persisted state
(admin credentials, salon accounts, session, tenant collections).

Failure policy:
- Reads never raise: missing key, corrupt JSON or backend failure -> default
- Writes never raise: backend failure is logged and swallowed
"""

import logging
import json
from typing import Any, Dict, Optional
from datetime import datetime, date
from decimal import Decimal

import redis
from redis.exceptions import RedisError
from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class MemoryBackend:
    """Process-local backend (tests, throwaway dev instances)."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqlBackend:
    """Backend storing one row per key in the kv_entry table."""

    errors = (SQLAlchemyError,)

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        from salon.models.kv_entry import KeyValueEntry
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, key)
        except SQLAlchemyError:
            session.rollback()
            raise
        return entry.value if entry else None

    def write(self, key: str, raw: str) -> None:
        from salon.models.kv_entry import KeyValueEntry
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry:
                entry.value = raw
            else:
                session.add(KeyValueEntry(key=key, value=raw))
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

    def delete(self, key: str) -> None:
        from salon.models.kv_entry import KeyValueEntry
        session = self._session_factory()
        try:
            session.query(KeyValueEntry).filter_by(key=key).delete()
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise


class RedisBackend:
    """Backend storing plain string values in Redis (no TTL)."""

    errors = (RedisError,)

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, redis_url: str) -> 'RedisBackend':
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=3,
            socket_timeout=3,
            retry_on_timeout=True,
            health_check_interval=30
        )
        return cls(client)

    def read(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def write(self, key: str, raw: str) -> None:
        self.client.set(key, raw)

    def delete(self, key: str) -> None:
        self.client.delete(key)


class KeyValueStore:
    """
    JSON key-value store with default-value fallback.

    Usage:
        store = KeyValueStore(MemoryBackend())
        store.set('beautyflow_session', {...})
        store.get('beautyflow_session', None)
    """

    def __init__(self, backend, global_prefix: str = 'beautyflow', tenant_prefix: str = 'bf'):
        self.backend = backend
        self.global_prefix = global_prefix
        self.tenant_prefix = tenant_prefix
        self._errors = getattr(backend, 'errors', ()) + (OSError,)

    def _serialize(self, value: Any) -> str:
        """Serialize Python object to JSON string with Decimal precision."""
        def default_handler(obj: Any) -> Any:
            if isinstance(obj, (datetime, date)):
                return obj.isoformat()
            elif isinstance(obj, Decimal):
                return {"__decimal__": str(obj)}
            raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
        return json.dumps(value, default=default_handler)

    def _deserialize(self, value: str) -> Any:
        """Deserialize JSON string to Python object, reconstructing Decimals."""
        def object_hook(dct: Dict[str, Any]) -> Any:
            if "__decimal__" in dct:
                return Decimal(dct["__decimal__"])
            return dct
        return json.loads(value, object_hook=object_hook)

    def get(self, key: str, default: Any = None) -> Any:
        """Get value for key, or default when missing/corrupt/unavailable."""
        try:
            raw = self.backend.read(key)
        except self._errors as e:
            logger.warning(f"[STORAGE] ✗ Read error for '{key}': {e}")
            return default
        if not raw:
            return default
        try:
            return self._deserialize(raw)
        except (ValueError, TypeError) as e:
            logger.warning(f"[STORAGE] ✗ Corrupt value for '{key}': {e}")
            return default

    def set(self, key: str, value: Any) -> bool:
        """Store value under key. Returns False if the write failed."""
        try:
            raw = self._serialize(value)
        except (TypeError, ValueError) as e:
            logger.error(f"[STORAGE] ✗ Cannot serialize value for '{key}': {e}")
            return False
        try:
            self.backend.write(key, raw)
            return True
        except self._errors as e:
            logger.error(f"[STORAGE] ✗ Write error for '{key}': {e}")
            return False

    def remove(self, key: str) -> bool:
        """Delete key. Missing keys are not an error."""
        try:
            self.backend.delete(key)
            return True
        except self._errors as e:
            logger.error(f"[STORAGE] ✗ Delete error for '{key}': {e}")
            return False


def build_backend(app: Flask):
    """Create the backend named by STORAGE_BACKEND."""
    kind = app.config.get('STORAGE_BACKEND', 'sql')

    if kind == 'memory':
        return MemoryBackend()

    if kind == 'redis':
        backend = RedisBackend.from_url(app.config['REDIS_URL'])
        try:
            backend.client.ping()
            logger.info(f"[STORAGE] ✓ Redis connected: {app.config['REDIS_URL']}")
        except RedisError as e:
            # Reads will fall back to defaults until Redis comes back
            logger.warning(f"[STORAGE] ⚠ Redis connection failed: {e}")
        return backend

    if kind == 'sql':
        from salon.database import get_session
        return SqlBackend(get_session)

    raise ValueError(f"Unknown STORAGE_BACKEND '{kind}'")


_store: Optional[KeyValueStore] = None


def init_storage(app: Flask) -> KeyValueStore:
    """Initialize key-value store singleton."""
    global _store
    _store = KeyValueStore(
        build_backend(app),
        global_prefix=app.config.get('STORAGE_KEY_PREFIX', 'beautyflow'),
        tenant_prefix=app.config.get('TENANT_KEY_PREFIX', 'bf'),
    )
    if not hasattr(app, 'extensions'):
        app.extensions = {}
    app.extensions['kv_store'] = _store
    logger.info(f"[STORAGE] Backend: {app.config.get('STORAGE_BACKEND', 'sql')}")
    return _store


def get_store() -> KeyValueStore:
    """Get key-value store instance."""
    if _store is None:
        raise RuntimeError("Storage not initialized.")
    return _store
