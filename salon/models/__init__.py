"""Models package - exports the persisted record types."""
from salon.models.kv_entry import KeyValueEntry
from salon.models.account import AdminUser, TenantAccount, TenantUser, UserRole
from salon.models.session import AuthSession, SessionKind
from salon.models.resources import (
    Record, Client, ClientStatus, ServiceType, ServiceRecord, Product,
    Sale, SaleItem, PaymentMethod, Expense, Appointment, AppointmentStatus,
    LoyaltyConfig, SalonProfile,
)

__all__ = [
    # Storage
    'KeyValueEntry',
    # Accounts & sessions
    'AdminUser', 'TenantAccount', 'TenantUser', 'UserRole',
    'AuthSession', 'SessionKind',
    # Tenant records
    'Record', 'Client', 'ClientStatus', 'ServiceType', 'ServiceRecord', 'Product',
    'Sale', 'SaleItem', 'PaymentMethod', 'Expense', 'Appointment', 'AppointmentStatus',
    'LoyaltyConfig', 'SalonProfile',
]
