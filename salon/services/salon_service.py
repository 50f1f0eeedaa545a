"""
Salon profile service.

Each salon keeps one settings document (name, contact, loyalty rule,
reminder delays) under its own `salon` key. Until something is saved the
defaults are returned.
"""
import logging
from typing import Optional

from salon.exceptions import TenantRequiredError
from salon.models.resources import LoyaltyConfig, SalonProfile
from salon.services import tenant_keys
from salon.services.kv_store import KeyValueStore
from salon.services.tenant_keys import StorageKeys

logger = logging.getLogger(__name__)


class SalonProfileStore:
    """
    Read and update a salon's profile.

    Usage:
        profiles = SalonProfileStore(store)
        profiles.update(tenant_id, name='Salon Awa')
        profiles.update_loyalty(tenant_id, visits_required=8)
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def key_for(self, tenant_id: Optional[str]) -> str:
        return tenant_keys.resolve(tenant_id, StorageKeys.SALON, self.store.tenant_prefix)

    def load(self, tenant_id: Optional[str]) -> SalonProfile:
        data = self.store.get(self.key_for(tenant_id), None)
        if isinstance(data, dict):
            try:
                return SalonProfile.from_dict(data)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"[STORAGE] Unreadable salon profile for {tenant_id}: {e}")
        return SalonProfile(id=tenant_id)

    def save(self, tenant_id: Optional[str], profile: SalonProfile) -> bool:
        if not tenant_id:
            raise TenantRequiredError(StorageKeys.SALON)
        return self.store.set(self.key_for(tenant_id), profile.to_dict())

    def update(self, tenant_id: Optional[str], **changes) -> SalonProfile:
        """
        Merge changes into the profile and persist it.

        Raises:
            TypeError: If changes name an unknown profile field
        """
        current = self.load(tenant_id).to_dict()
        current.update(changes)
        current['id'] = tenant_id
        profile = SalonProfile(**current)
        self.save(tenant_id, profile)
        return profile

    def update_loyalty(self, tenant_id: Optional[str], **changes) -> SalonProfile:
        profile = self.load(tenant_id)
        loyalty = LoyaltyConfig(**{**profile.loyalty.to_dict(), **changes})
        return self.update(tenant_id, loyalty=loyalty)
