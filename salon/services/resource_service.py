"""
Tenant-scoped resource collections.

Each salon's clients, services, products, sales, expenses and appointments
are stored as one JSON list per (tenant, resource) key. There is no partial
update at the storage layer: every change loads the list, transforms it and
writes the whole list back (last write wins).
"""
import enum
import logging
import uuid
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from salon.exceptions import TenantRequiredError
from salon.models.resources import (
    Appointment, Client, Expense, Product, Record, Sale, SalonProfile, ServiceRecord,
    ServiceType,
)
from salon.services import tenant_keys
from salon.services.kv_store import KeyValueStore
from salon.services.salon_service import SalonProfileStore
from salon.services.tenant_keys import StorageKeys

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Record)

# What a stored entry that cannot be turned into a record raises
DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def new_record_id() -> str:
    """Fresh identifier for a new record; never reused."""
    return str(uuid.uuid4())


def carry_undecodable(encoded: List[Any], stored: Any, decode: Callable[[Any], Any]) -> List[Any]:
    """
    Put stored entries that decode() rejects back into a list about to be saved.

    Reads skip such entries, so a full overwrite built from the decoded items
    would erase them. They are re-inserted untouched at their old position.
    """
    if not isinstance(stored, list):
        return encoded
    merged = list(encoded)
    for position, raw in enumerate(stored):
        try:
            decode(raw)
        except DECODE_ERRORS:
            merged.insert(min(position, len(merged)), raw)
    return merged


class TenantRepository(Generic[T]):
    """
    load_all / save_all for one resource kind, keyed by tenant.

    Usage:
        clients = TenantRepository(store, StorageKeys.CLIENTS, Client)
        clients.save_all(tenant_id, [...])
        clients.load_all(tenant_id, [])
    """

    def __init__(self, store: KeyValueStore, resource: str, record_type: Type[T] = None):
        self.store = store
        self.resource = resource
        self.record_type = record_type

    def key_for(self, tenant_id: Optional[str]) -> str:
        return tenant_keys.resolve(tenant_id, self.resource, self.store.tenant_prefix)

    def _decode(self, raw: Any) -> Any:
        if self.record_type is None or isinstance(raw, Record):
            return raw
        return self.record_type.from_dict(raw)

    def _encode(self, item: Any) -> Any:
        return item.to_dict() if isinstance(item, Record) else item

    def load_all(self, tenant_id: Optional[str], fallback: List[T]) -> List[T]:
        """Stored items for the tenant, or fallback when nothing is stored yet."""
        stored = self.store.get(self.key_for(tenant_id), None)
        if not isinstance(stored, list):
            return list(fallback)
        items = []
        for raw in stored:
            try:
                items.append(self._decode(raw))
            except DECODE_ERRORS as e:
                logger.warning(f"[STORAGE] Skipping malformed {self.resource} record: {e}")
        return items

    def save_all(self, tenant_id: Optional[str], items: List[T]) -> bool:
        """
        Overwrite the tenant's whole collection.

        Stored entries that could not be decoded on read are kept as they are.
        """
        if not tenant_id:
            raise TenantRequiredError(self.resource)
        key = self.key_for(tenant_id)
        encoded = [self._encode(i) for i in items]
        if self.record_type is not None:
            encoded = carry_undecodable(encoded, self.store.get(key, None), self._decode)
        return self.store.set(key, encoded)


class CollectionState(enum.Enum):
    UNINITIALIZED = 'uninitialized'
    LOADED = 'loaded'
    MUTATED = 'mutated'


class ResourceCollection(Generic[T]):
    """
    In-memory view of one tenant's collection.

    Every mutation is persisted immediately. Binding to another tenant
    drops the cached items and reloads from the new key.
    """

    def __init__(self, repository: TenantRepository[T],
                 fallback: Optional[Callable[[], List[T]]] = None):
        self.repository = repository
        self.fallback = fallback or list
        self.tenant_id: Optional[str] = None
        self.state = CollectionState.UNINITIALIZED
        self._items: List[T] = []

    @property
    def resource(self) -> str:
        return self.repository.resource

    def bind(self, tenant_id: Optional[str]) -> 'ResourceCollection[T]':
        """Point the collection at tenant_id, reloading if it changed."""
        if self.state is CollectionState.UNINITIALIZED or tenant_id != self.tenant_id:
            self.tenant_id = tenant_id
            self.reload()
        return self

    def reload(self) -> None:
        self._items = self.repository.load_all(self.tenant_id, self.fallback())
        self.state = CollectionState.LOADED

    def _commit(self, items: List[T]) -> None:
        self.repository.save_all(self.tenant_id, items)
        self._items = items
        self.state = CollectionState.MUTATED

    def _require_tenant(self) -> None:
        if not self.tenant_id:
            raise TenantRequiredError(self.resource)

    def all(self) -> List[T]:
        return list(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self):
        return len(self._items)

    def get(self, record_id: str) -> Optional[T]:
        """Record with record_id, or None (references may dangle)."""
        return next((r for r in self._items if r.id == record_id), None)

    def add(self, record: T) -> T:
        """Append record with a freshly generated id."""
        self._require_tenant()
        record.id = new_record_id()
        self._commit(self._items + [record])
        return record

    def update(self, record_id: str, **changes: Any) -> Optional[T]:
        """
        Merge changes into a record. The id itself cannot change.

        Raises:
            TypeError: If changes name a field the record does not have
        """
        self._require_tenant()
        changes.pop('id', None)
        updated = None
        items = []
        for record in self._items:
            if record.id == record_id:
                record = type(record)(**{**record.to_dict(), **changes})
                updated = record
            items.append(record)
        if updated is None:
            return None
        self._commit(items)
        return updated

    def delete(self, record_id: str) -> bool:
        self._require_tenant()
        items = [r for r in self._items if r.id != record_id]
        if len(items) == len(self._items):
            return False
        self._commit(items)
        return True

    def replace_all(self, items: List[T]) -> None:
        """Persist items as the whole collection, keeping their ids."""
        self._require_tenant()
        self._commit(list(items))


# Resource kind -> record type
RESOURCE_TYPES: Dict[str, Type[Record]] = {
    StorageKeys.CLIENTS: Client,
    StorageKeys.TYPES_PRESTATIONS: ServiceType,
    StorageKeys.PRESTATIONS: ServiceRecord,
    StorageKeys.PRODUITS: Product,
    StorageKeys.VENTES: Sale,
    StorageKeys.DEPENSES: Expense,
    StorageKeys.RENDEZ_VOUS: Appointment,
}


class TenantDataset:
    """
    All collections of the salon currently logged in.

    Each attribute access checks the context's tenant, so logging into
    another salon reloads every collection before it is read.
    """

    def __init__(self, context, store: KeyValueStore,
                 fallbacks: Optional[Dict[str, Callable[[], List[Record]]]] = None):
        from salon.utils.seed_data import default_fallbacks
        self.context = context
        self.profiles = SalonProfileStore(store)
        fallbacks = fallbacks if fallbacks is not None else default_fallbacks()
        self._collections = {
            resource: ResourceCollection(
                TenantRepository(store, resource, record_type),
                fallbacks.get(resource),
            )
            for resource, record_type in RESOURCE_TYPES.items()
        }

    def collection(self, resource: str) -> ResourceCollection:
        return self._collections[resource].bind(self.context.tenant_id)

    @property
    def clients(self) -> ResourceCollection[Client]:
        return self.collection(StorageKeys.CLIENTS)

    @property
    def service_types(self) -> ResourceCollection[ServiceType]:
        return self.collection(StorageKeys.TYPES_PRESTATIONS)

    @property
    def services(self) -> ResourceCollection[ServiceRecord]:
        return self.collection(StorageKeys.PRESTATIONS)

    @property
    def products(self) -> ResourceCollection[Product]:
        return self.collection(StorageKeys.PRODUITS)

    @property
    def sales(self) -> ResourceCollection[Sale]:
        return self.collection(StorageKeys.VENTES)

    @property
    def expenses(self) -> ResourceCollection[Expense]:
        return self.collection(StorageKeys.DEPENSES)

    @property
    def appointments(self) -> ResourceCollection[Appointment]:
        return self.collection(StorageKeys.RENDEZ_VOUS)

    @property
    def profile(self) -> SalonProfile:
        """Settings of the current salon (defaults until first saved)."""
        return self.profiles.load(self.context.tenant_id)
