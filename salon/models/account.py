"""Salon accounts (tenants), their users and the backoffice admin."""
import enum
from datetime import date


class UserRole(enum.Enum):
    """User roles within a tenant."""
    OWNER = 'owner'
    STAFF = 'staff'


def parse_date(value):
    """Read an ISO date (or datetime) string as a date; dates pass through."""
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def format_date(value):
    return value.isoformat() if value else None


class TenantUser:
    """A login belonging to one salon: its owner or a staff member."""

    def __init__(self, id, tenant_id, name, login_email, password_hash,
                 role=UserRole.STAFF.value, phone=None, created_at=None):
        self.id = id
        self.tenant_id = tenant_id
        self.name = name
        self.login_email = login_email
        self.password_hash = password_hash
        self.role = role
        self.phone = phone
        self.created_at = parse_date(created_at)

    def is_owner(self):
        """Check if user is owner of tenant."""
        return self.role == UserRole.OWNER.value

    def to_dict(self):
        return {
            'id': self.id,
            'tenant_id': self.tenant_id,
            'name': self.name,
            'login_email': self.login_email,
            'password_hash': self.password_hash,
            'role': self.role,
            'phone': self.phone,
            'created_at': format_date(self.created_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            tenant_id=data.get('tenant_id'),
            name=data.get('name', ''),
            login_email=data.get('login_email', ''),
            password_hash=data.get('password_hash', ''),
            role=data.get('role', UserRole.STAFF.value),
            phone=data.get('phone'),
            created_at=data.get('created_at'),
        )

    def __repr__(self):
        return f"<TenantUser(id='{self.id}', tenant_id='{self.tenant_id}', role='{self.role}')>"


class TenantAccount:
    """
    One salon. Owns its users; the unit of data isolation.

    login_email/password_hash are the owner credentials from before the
    multi-user model. Accounts stored in that format have users=None until
    migrated.
    """

    def __init__(self, id, name, owner_name, phone, login_email, password_hash,
                 created_at, last_payment_date, subscription_active=True,
                 subscription_amount=25000, subscription_days=30,
                 address=None, users=None):
        self.id = id
        self.name = name
        self.owner_name = owner_name
        self.phone = phone
        self.address = address
        self.login_email = login_email
        self.password_hash = password_hash
        self.created_at = parse_date(created_at)
        self.last_payment_date = parse_date(last_payment_date)
        self.subscription_active = subscription_active
        self.subscription_amount = subscription_amount
        self.subscription_days = subscription_days
        self.users = users

    @property
    def owner(self):
        for user in self.users or []:
            if user.is_owner():
                return user
        return None

    def find_user(self, user_id):
        return next((u for u in self.users or [] if u.id == user_id), None)

    def to_dict(self):
        data = {
            'id': self.id,
            'name': self.name,
            'owner_name': self.owner_name,
            'phone': self.phone,
            'address': self.address,
            'login_email': self.login_email,
            'password_hash': self.password_hash,
            'created_at': format_date(self.created_at),
            'last_payment_date': format_date(self.last_payment_date),
            'subscription_active': self.subscription_active,
            'subscription_amount': self.subscription_amount,
            'subscription_days': self.subscription_days,
        }
        if self.users is not None:
            data['users'] = [u.to_dict() for u in self.users]
        return data

    @classmethod
    def from_dict(cls, data):
        users = data.get('users')
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            owner_name=data.get('owner_name', ''),
            phone=data.get('phone', ''),
            address=data.get('address'),
            login_email=data.get('login_email', ''),
            password_hash=data.get('password_hash', ''),
            created_at=data.get('created_at'),
            last_payment_date=data.get('last_payment_date') or data.get('created_at'),
            subscription_active=data.get('subscription_active', True),
            subscription_amount=data.get('subscription_amount', 25000),
            subscription_days=data.get('subscription_days', 30),
            users=[TenantUser.from_dict(u) for u in users] if users is not None else None,
        )

    def __repr__(self):
        return f"<TenantAccount(id='{self.id}', name='{self.name}', active={self.subscription_active})>"


class AdminUser:
    """Backoffice administrator credentials (single record)."""

    def __init__(self, email, password_hash):
        self.email = email
        self.password_hash = password_hash

    def to_dict(self):
        return {'email': self.email, 'password_hash': self.password_hash}

    @classmethod
    def from_dict(cls, data):
        return cls(email=data.get('email', ''), password_hash=data.get('password_hash', ''))

    def __repr__(self):
        return f"<AdminUser(email='{self.email}')>"
