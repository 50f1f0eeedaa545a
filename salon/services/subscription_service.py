"""
Subscription gate for salon accounts.

A salon has access while its administrative flag is on and today falls
inside [last_payment_date, last_payment_date + subscription_days]. The
computation works on calendar dates, so the time of day never matters and
the expiry day itself still counts as active.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Union

from salon.models.account import TenantAccount

Clock = Union[date, datetime, None]


def _today(now: Clock) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def expiry_date(tenant: TenantAccount) -> Optional[date]:
    """Last day of the paid period, or None if the salon never paid."""
    if not tenant.last_payment_date:
        return None
    return tenant.last_payment_date + timedelta(days=tenant.subscription_days)


def is_active(tenant: TenantAccount, now: Clock = None) -> bool:
    """
    Check whether the salon may use the application.

    Args:
        tenant: Salon account
        now: Reference date/datetime (defaults to today)

    Returns:
        bool: False when disabled by the admin or past the expiry day
    """
    if not tenant.subscription_active:
        return False
    expiry = expiry_date(tenant)
    if expiry is None:
        return False
    return _today(now) <= expiry


def days_remaining(tenant: TenantAccount, now: Clock = None) -> int:
    """Whole days left in the paid period, never negative."""
    expiry = expiry_date(tenant)
    if expiry is None:
        return 0
    return max(0, (expiry - _today(now)).days)


def subscription_status(tenant: TenantAccount, now: Clock = None) -> Dict[str, Any]:
    """
    Get subscription status details for display.

    Returns:
        dict: Status information
    """
    return {
        'tenant_id': tenant.id,
        'is_active': is_active(tenant, now),
        'administratively_disabled': not tenant.subscription_active,
        'last_payment_date': tenant.last_payment_date,
        'expires_on': expiry_date(tenant),
        'days_remaining': days_remaining(tenant, now),
        'amount': tenant.subscription_amount,
    }
