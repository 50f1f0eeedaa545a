"""Storage key naming: global admin keys and per-tenant namespaces."""
from typing import Optional


class StorageKeys:
    """Logical resource names, scoped per tenant through resolve()."""
    CLIENTS = 'clients'
    PRESTATIONS = 'prestations'
    TYPES_PRESTATIONS = 'types_prestations'
    SALON = 'salon'
    PRODUITS = 'produits'
    VENTES = 'ventes'
    DEPENSES = 'depenses'
    RENDEZ_VOUS = 'rendez_vous'


# Unscoped keys, combined with the global prefix
ADMIN = 'admin'
ACCOUNTS = 'salons_accounts'
SESSION = 'session'
SCHEMA_VERSION = 'schema_version'


def resolve(tenant_id: Optional[str], resource: str, prefix: str = 'bf') -> str:
    """
    Build the storage key for a tenant resource.

    Without a tenant (pre-login or admin session) the bare resource name is
    returned. That key is for reads only; tenant data must never be written
    through it.
    """
    if not tenant_id:
        return resource
    return f"{prefix}_{tenant_id}_{resource}"


def global_key(prefix: str, name: str) -> str:
    """Build an unscoped key such as beautyflow_session."""
    return f"{prefix}_{name}"
