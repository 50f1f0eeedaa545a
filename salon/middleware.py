"""Access checks for the admin and salon areas."""
import enum
from functools import wraps

from salon.exceptions import UnauthorizedError
from salon.services.session_service import AuthContext


class AccessDecision(enum.Enum):
    ALLOWED = 'allowed'
    LOGIN_REQUIRED = 'login_required'
    SUBSCRIPTION_EXPIRED = 'subscription_expired'
    FORBIDDEN = 'forbidden'


ADMIN_AREA = 'admin'
SALON_AREA = 'salon'


def resolve_access(context: AuthContext, area: str = SALON_AREA) -> AccessDecision:
    """
    Decide where a caller entering `area` should go.

    - admin area: admin session only
    - salon area: salon session whose salon still exists; an inactive
      subscription routes to the expired view instead of a hard block
    """
    session = context.session
    if session is None:
        return AccessDecision.LOGIN_REQUIRED

    if area == ADMIN_AREA:
        return AccessDecision.ALLOWED if session.is_admin else AccessDecision.FORBIDDEN

    if not session.is_tenant:
        return AccessDecision.FORBIDDEN

    if context.current_tenant is None:
        # Salon deleted or storage reset under an old session
        return AccessDecision.LOGIN_REQUIRED

    if not context.is_subscription_valid:
        return AccessDecision.SUBSCRIPTION_EXPIRED

    return AccessDecision.ALLOWED


def require_tenant_session(f):
    """
    Decorator: first argument is an AuthContext with an active salon session.
    """
    @wraps(f)
    def decorated_function(context, *args, **kwargs):
        decision = resolve_access(context, SALON_AREA)
        if decision is not AccessDecision.ALLOWED:
            raise UnauthorizedError(f"Salon access denied: {decision.value}")
        return f(context, *args, **kwargs)
    return decorated_function


def require_role(*allowed_roles):
    """
    Decorator to restrict a salon operation to specific roles.

    Usage:
        @require_role('owner')
        def add_member(context, ...): ...
    """
    def decorator(f):
        @wraps(f)
        @require_tenant_session
        def decorated_function(context, *args, **kwargs):
            if context.session.user_role not in allowed_roles:
                raise UnauthorizedError(
                    f"Role '{context.session.user_role}' cannot perform {f.__name__}"
                )
            return f(context, *args, **kwargs)
        return decorated_function
    return decorator
