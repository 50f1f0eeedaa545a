"""
Session management.

SessionManager persists the single current login. AuthContext is the
object handed to callers that need to know who is logged in: create it at
application start, it replaces the session on login and clears it on logout.
"""
import logging
from datetime import date
from typing import Callable, NamedTuple, Optional

from salon.models.account import TenantAccount, TenantUser
from salon.models.session import AuthSession
from salon.services import subscription_service, tenant_keys
from salon.services.account_service import AccountService
from salon.services.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

BAD_CREDENTIALS = 'Identifiants incorrects'
SUBSCRIPTION_EXPIRED = (
    'Votre abonnement a expiré. Contactez LeaderBright pour le renouvellement.'
)


class SessionManager:
    """Read/write the persisted session (one at a time)."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.key = tenant_keys.global_key(store.global_prefix, tenant_keys.SESSION)

    def login(self, session: AuthSession) -> None:
        """Persist session, replacing any previous one."""
        self.store.set(self.key, session.to_dict())

    def current(self) -> Optional[AuthSession]:
        data = self.store.get(self.key, None)
        if not data:
            return None
        try:
            return AuthSession.from_dict(data)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"[AUTH] Ignoring corrupt session: {e}")
            return None

    def logout(self) -> None:
        self.store.remove(self.key)


class LoginOutcome(NamedTuple):
    success: bool
    reason: Optional[str] = None


class AuthContext:
    """
    Identity of the current user, derived from the persisted session.

    Usage:
        auth = AuthContext(accounts, SessionManager(store))
        outcome = auth.login_tenant('a@x.com', 'pw1234')
        if outcome.success:
            auth.current_tenant, auth.current_user
    """

    def __init__(self, accounts: AccountService, sessions: SessionManager,
                 clock: Callable[[], date] = date.today):
        self.accounts = accounts
        self.sessions = sessions
        self.clock = clock
        self._session = sessions.current()

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def tenant_id(self) -> Optional[str]:
        if self._session and self._session.is_tenant:
            return self._session.tenant_id
        return None

    @property
    def is_admin(self) -> bool:
        return bool(self._session and self._session.is_admin)

    @property
    def current_tenant(self) -> Optional[TenantAccount]:
        tenant_id = self.tenant_id
        if not tenant_id:
            return None
        return self.accounts.get_account(tenant_id)

    @property
    def current_user(self) -> Optional[TenantUser]:
        tenant = self.current_tenant
        if not tenant or not self._session.user_id:
            return None
        user = tenant.find_user(self._session.user_id)
        if user is None and self._session.user_id == tenant.id:
            # Logged in through the legacy owner fields
            user = tenant.owner or self.accounts.legacy_owner(tenant)
        return user

    @property
    def is_subscription_valid(self) -> bool:
        tenant = self.current_tenant
        if not tenant:
            return False
        return subscription_service.is_active(tenant, self.clock())

    def refresh(self) -> Optional[AuthSession]:
        """Re-read the session from storage."""
        self._session = self.sessions.current()
        return self._session

    def login_admin(self, email: str, password: str) -> bool:
        if not self.accounts.verify_admin(email, password):
            logger.info(f"[AUTH] Admin login failed for {email}")
            return False
        session = AuthSession.for_admin(email)
        self.sessions.login(session)
        self._session = session
        logger.info(f"[AUTH] Admin login: {email}")
        return True

    def login_tenant(self, email: str, password: str) -> LoginOutcome:
        """
        Log a salon user in.

        Refused when the credentials do not match or the salon's
        subscription is not active.
        """
        result = self.accounts.verify_login(email, password)
        if not result:
            logger.info(f"[AUTH] Salon login failed for {email}")
            return LoginOutcome(False, BAD_CREDENTIALS)
        if not subscription_service.is_active(result.tenant, self.clock()):
            logger.info(f"[AUTH] Salon login refused, subscription expired: {result.tenant.id}")
            return LoginOutcome(False, SUBSCRIPTION_EXPIRED)

        session = AuthSession.for_tenant(result.tenant, result.user, email)
        self.sessions.login(session)
        self._session = session
        logger.info(f"[AUTH] Salon login: {email} -> {result.tenant.id} ({result.user.role})")
        return LoginOutcome(True)

    def logout(self) -> None:
        self.sessions.logout()
        self._session = None
