"""Staff management as performed by a logged-in salon owner."""
import logging

from salon.middleware import require_role
from salon.models.account import UserRole

logger = logging.getLogger(__name__)


@require_role(UserRole.OWNER.value)
def invite_staff(context, name, email, password, phone=None):
    """Add a staff member to the owner's own salon. None if the email is taken."""
    user = context.accounts.add_staff(context.tenant_id, name, email, password, phone)
    if user is None:
        logger.info(f"[ACCOUNTS] Owner {context.session.login_email} could not add {email}")
    return user


@require_role(UserRole.OWNER.value)
def dismiss_staff(context, user_id):
    if user_id == context.session.user_id:
        return False
    return context.accounts.remove_staff(context.tenant_id, user_id)


@require_role(UserRole.OWNER.value, UserRole.STAFF.value)
def list_team(context):
    tenant = context.current_tenant
    return list(tenant.users or []) if tenant else []
