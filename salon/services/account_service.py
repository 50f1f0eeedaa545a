"""
Account service for salon (tenant) management.

Handles salon creation, staff users, subscription renewal, credential
checks and the schema migration of stored accounts.

All accounts live in a single unscoped list (<prefix>_salons_accounts);
every mutation is a load / change / save round-trip on that list.
"""
import logging
import uuid
from datetime import date
from typing import Callable, List, NamedTuple, Optional

from salon.models.account import AdminUser, TenantAccount, TenantUser, UserRole
from salon.services import tenant_keys
from salon.services.kv_store import KeyValueStore
from salon.services.resource_service import DECODE_ERRORS, carry_undecodable
from salon.utils.hashing import check_password, hash_password, simple_hash

logger = logging.getLogger(__name__)

# Bump together with a new step in AccountService.migrate_accounts()
CURRENT_SCHEMA_VERSION = 1


class LoginResult(NamedTuple):
    tenant: TenantAccount
    user: TenantUser


class AccountService:
    """
    CRUD over salon accounts and their users.

    Usage:
        accounts = AccountService(store)
        salon = accounts.create_account('Salon A', 'Alice', '+000', 'a@x.com', 'pw1234')
        accounts.verify_login('a@x.com', 'pw1234')
    """

    def __init__(self, store: KeyValueStore, subscription_amount: int = 25000,
                 subscription_days: int = 30, hash_scheme: str = 'legacy',
                 admin_email: str = 'admin@leaderbright.com',
                 admin_password: str = 'admin2025',
                 clock: Callable[[], date] = date.today):
        self.store = store
        self.subscription_amount = subscription_amount
        self.subscription_days = subscription_days
        self.hash_scheme = hash_scheme
        self.admin_email = admin_email
        self.admin_password = admin_password
        self.clock = clock

        prefix = store.global_prefix
        self.admin_key = tenant_keys.global_key(prefix, tenant_keys.ADMIN)
        self.accounts_key = tenant_keys.global_key(prefix, tenant_keys.ACCOUNTS)
        self.schema_key = tenant_keys.global_key(prefix, tenant_keys.SCHEMA_VERSION)

    @classmethod
    def from_config(cls, store, config, clock=date.today):
        return cls(
            store,
            subscription_amount=config.get('SUBSCRIPTION_AMOUNT', 25000),
            subscription_days=config.get('SUBSCRIPTION_DAYS', 30),
            hash_scheme=config.get('PASSWORD_HASH_SCHEME', 'legacy'),
            admin_email=config.get('DEFAULT_ADMIN_EMAIL', 'admin@leaderbright.com'),
            admin_password=config.get('DEFAULT_ADMIN_PASSWORD', 'admin2025'),
            clock=clock,
        )

    # ===== Admin =====

    def get_admin(self) -> AdminUser:
        """Get the backoffice admin, seeding the default one on first use."""
        data = self.store.get(self.admin_key, None)
        if data:
            return AdminUser.from_dict(data)
        admin = AdminUser(self.admin_email, hash_password(self.admin_password, self.hash_scheme))
        self.store.set(self.admin_key, admin.to_dict())
        logger.info(f"[ACCOUNTS] Seeded default admin {admin.email}")
        return admin

    def verify_admin(self, email: str, password: str) -> bool:
        admin = self.get_admin()
        return admin.email == email and check_password(admin.password_hash, password)

    # ===== Salons =====

    def list_accounts(self) -> List[TenantAccount]:
        accounts = []
        for raw in self.store.get(self.accounts_key, []) or []:
            try:
                accounts.append(TenantAccount.from_dict(raw))
            except DECODE_ERRORS as e:
                logger.warning(f"[ACCOUNTS] Skipping malformed account record: {e}")
        return accounts

    def save_accounts(self, accounts: List[TenantAccount]) -> bool:
        """Overwrite the accounts list, keeping stored records that do not decode."""
        encoded = carry_undecodable(
            [a.to_dict() for a in accounts],
            self.store.get(self.accounts_key, None),
            TenantAccount.from_dict,
        )
        return self.store.set(self.accounts_key, encoded)

    def get_account(self, tenant_id: str) -> Optional[TenantAccount]:
        return next((a for a in self.list_accounts() if a.id == tenant_id), None)

    def create_account(self, name: str, owner_name: str, phone: str, email: str,
                       password: str, last_payment_date: Optional[date] = None,
                       address: Optional[str] = None) -> TenantAccount:
        """
        Create a salon with its owner user.

        The subscription starts active with the configured amount and period,
        anchored at last_payment_date (today when omitted).
        """
        accounts = self.list_accounts()
        today = self.clock()
        password_hash = hash_password(password, self.hash_scheme)
        tenant_id = str(uuid.uuid4())

        owner = TenantUser(
            id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            name=owner_name,
            login_email=email,
            password_hash=password_hash,
            role=UserRole.OWNER.value,
            phone=phone,
            created_at=today,
        )
        account = TenantAccount(
            id=tenant_id,
            name=name,
            owner_name=owner_name,
            phone=phone,
            address=address,
            login_email=email,
            password_hash=password_hash,
            created_at=today,
            last_payment_date=last_payment_date or today,
            subscription_active=True,
            subscription_amount=self.subscription_amount,
            subscription_days=self.subscription_days,
            users=[owner],
        )
        accounts.append(account)
        self.save_accounts(accounts)

        logger.info(f"[ACCOUNTS] Created salon {account.id} ({name}) owned by {email}")
        return account

    def _find(self, accounts, tenant_id):
        return next((a for a in accounts if a.id == tenant_id), None)

    def renew_subscription(self, tenant_id: str) -> None:
        """Record a payment today and reactivate the salon."""
        accounts = self.list_accounts()
        account = self._find(accounts, tenant_id)
        if not account:
            logger.warning(f"[ACCOUNTS] Renew ignored, unknown salon {tenant_id}")
            return
        account.last_payment_date = self.clock()
        account.subscription_active = True
        self.save_accounts(accounts)
        logger.info(f"[ACCOUNTS] Renewed subscription for salon {tenant_id}")

    def toggle_active(self, tenant_id: str, active: bool) -> None:
        accounts = self.list_accounts()
        account = self._find(accounts, tenant_id)
        if not account:
            logger.warning(f"[ACCOUNTS] Toggle ignored, unknown salon {tenant_id}")
            return
        account.subscription_active = active
        self.save_accounts(accounts)
        logger.info(f"[ACCOUNTS] Salon {tenant_id} active={active}")

    # ===== Staff =====

    def email_in_use(self, email: str, accounts: Optional[List[TenantAccount]] = None) -> bool:
        """Check an email against every user and legacy login of every salon."""
        for account in accounts if accounts is not None else self.list_accounts():
            if account.login_email == email:
                return True
            if any(u.login_email == email for u in account.users or []):
                return True
        return False

    def add_staff(self, tenant_id: str, name: str, email: str, password: str,
                  phone: Optional[str] = None) -> Optional[TenantUser]:
        """
        Add a staff user to a salon.

        Returns:
            TenantUser, or None if the salon is unknown or the email is taken
        """
        accounts = self.list_accounts()
        account = self._find(accounts, tenant_id)
        if not account:
            return None
        if self.email_in_use(email, accounts):
            logger.info(f"[ACCOUNTS] Staff email already in use: {email}")
            return None

        user = TenantUser(
            id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            name=name,
            login_email=email,
            password_hash=hash_password(password, self.hash_scheme),
            role=UserRole.STAFF.value,
            phone=phone,
            created_at=self.clock(),
        )
        self._ensure_owner(account)
        account.users = account.users + [user]
        self.save_accounts(accounts)

        logger.info(f"[ACCOUNTS] Added staff {email} to salon {tenant_id}")
        return user

    def remove_staff(self, tenant_id: str, user_id: str) -> bool:
        """
        Remove a staff user. Owners are always kept.

        Returns True whenever the salon exists, whether or not a user was
        removed.
        """
        accounts = self.list_accounts()
        account = self._find(accounts, tenant_id)
        if not account:
            return False
        self._ensure_owner(account)
        account.users = [
            u for u in account.users or []
            if u.id != user_id or u.is_owner()
        ]
        self.save_accounts(accounts)
        return True

    # ===== Login =====

    def legacy_owner(self, account: TenantAccount) -> TenantUser:
        """Transient owner view of an account stored without users."""
        return TenantUser(
            id=account.id,
            tenant_id=account.id,
            name=account.owner_name,
            login_email=account.login_email,
            password_hash=account.password_hash,
            role=UserRole.OWNER.value,
            phone=account.phone,
            created_at=account.created_at,
        )

    def _ensure_owner(self, account: TenantAccount) -> bool:
        """
        Give an account without an owner user one built from its legacy fields.

        This is the v1 migration step for a single account. Returns True if
        the account changed.
        """
        if account.owner is not None:
            return False
        owner = self.legacy_owner(account)
        owner.id = str(uuid.uuid4())
        account.users = [owner] + list(account.users or [])
        return True

    def verify_login(self, email: str, password: str) -> Optional[LoginResult]:
        """
        Find the salon user matching the credentials.

        Each salon's users are checked first, then its legacy owner fields.
        Salons are scanned in storage order and the first match wins.
        """
        digest = simple_hash(password)
        for account in self.list_accounts():
            for user in account.users or []:
                if user.login_email == email and check_password(user.password_hash, password, digest):
                    return LoginResult(account, user)
            if account.login_email == email and check_password(account.password_hash, password, digest):
                return LoginResult(account, self.legacy_owner(account))
        return None

    # ===== Migrations =====

    def schema_version(self) -> int:
        return self.store.get(self.schema_key, 0) or 0

    def migrate_accounts(self) -> int:
        """
        Bring stored accounts to CURRENT_SCHEMA_VERSION.

        v1: every account gets a users list containing its owner, built from
        the legacy login fields.

        Returns:
            int: Number of accounts changed
        """
        version = self.schema_version()
        if version >= CURRENT_SCHEMA_VERSION:
            return 0

        accounts = self.list_accounts()
        changed = 0
        for account in accounts:
            if self._ensure_owner(account):
                changed += 1

        if changed:
            self.save_accounts(accounts)
        self.store.set(self.schema_key, CURRENT_SCHEMA_VERSION)

        logger.info(
            f"[ACCOUNTS] Migrated schema v{version} -> v{CURRENT_SCHEMA_VERSION}, "
            f"{changed} account(s) updated"
        )
        return changed
