"""AuthSession - the single persisted login."""
import enum
import time


class SessionKind(enum.Enum):
    ADMIN = 'admin'
    TENANT = 'tenant'


class AuthSession:
    """Current login: either the backoffice admin or one salon user."""

    def __init__(self, kind, login_email, timestamp=None, tenant_id=None,
                 user_id=None, user_role=None, user_name=None):
        self.kind = kind
        self.login_email = login_email
        self.timestamp = timestamp if timestamp is not None else int(time.time() * 1000)
        self.tenant_id = tenant_id
        self.user_id = user_id
        self.user_role = user_role
        self.user_name = user_name

    @classmethod
    def for_admin(cls, email):
        return cls(kind=SessionKind.ADMIN.value, login_email=email)

    @classmethod
    def for_tenant(cls, tenant, user, email):
        return cls(
            kind=SessionKind.TENANT.value,
            login_email=email,
            tenant_id=tenant.id,
            user_id=user.id,
            user_role=user.role,
            user_name=user.name,
        )

    @property
    def is_admin(self):
        return self.kind == SessionKind.ADMIN.value

    @property
    def is_tenant(self):
        return self.kind == SessionKind.TENANT.value

    def to_dict(self):
        data = {
            'kind': self.kind,
            'login_email': self.login_email,
            'timestamp': self.timestamp,
        }
        if self.is_tenant:
            data.update(
                tenant_id=self.tenant_id,
                user_id=self.user_id,
                user_role=self.user_role,
                user_name=self.user_name,
            )
        return data

    @classmethod
    def from_dict(cls, data):
        """Build a session from stored data; raises ValueError if malformed."""
        kind = data.get('kind')
        if kind not in (SessionKind.ADMIN.value, SessionKind.TENANT.value):
            raise ValueError(f"Unknown session kind {kind!r}")
        if kind == SessionKind.TENANT.value and not data.get('tenant_id'):
            raise ValueError("Tenant session without tenant_id")
        return cls(
            kind=kind,
            login_email=data.get('login_email', ''),
            timestamp=data.get('timestamp'),
            tenant_id=data.get('tenant_id'),
            user_id=data.get('user_id'),
            user_role=data.get('user_role'),
            user_name=data.get('user_name'),
        )

    def __repr__(self):
        return f"<AuthSession(kind='{self.kind}', email='{self.login_email}', tenant_id={self.tenant_id!r})>"
