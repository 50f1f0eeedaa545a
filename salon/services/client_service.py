"""Client lookups and visit bookkeeping (loyalty points, status)."""
from datetime import date, timedelta
from typing import List, Optional

from salon.models.account import parse_date
from salon.models.resources import Client, ClientStatus, LoyaltyConfig
from salon.services.resource_service import ResourceCollection

# Visit counts that promote a client
REGULAR_VISITS = 3
VIP_VISITS = 10


def search_clients(clients: List[Client], query: str) -> List[Client]:
    """Match on name (case-insensitive) or phone substring."""
    q = query.lower()
    return [c for c in clients if q in c.name.lower() or query in c.phone]


def clients_by_status(clients: List[Client], status: str) -> List[Client]:
    return [c for c in clients if c.status == status]


def inactive_clients(clients: List[Client], days: int = 30,
                     today: Optional[date] = None) -> List[Client]:
    """Clients never seen, or not seen for more than `days` days."""
    cutoff = (today or date.today()) - timedelta(days=days)
    return [
        c for c in clients
        if not c.last_visit or parse_date(c.last_visit) < cutoff
    ]


def status_for_visits(visit_count: int, current: str) -> str:
    if visit_count >= VIP_VISITS:
        return ClientStatus.VIP.value
    if visit_count >= REGULAR_VISITS:
        return ClientStatus.REGULAR.value
    return current


def record_visit(clients: ResourceCollection, client_id: str, amount,
                 today: Optional[date] = None) -> Optional[Client]:
    """
    Count a paid visit: +1 visit, +1 loyalty point, spend added, status
    promoted by visit count. Returns None if the client no longer exists.
    """
    client = clients.get(client_id)
    if client is None:
        return None
    visit_count = client.visit_count + 1
    return clients.update(
        client_id,
        visit_count=visit_count,
        total_spent=client.total_spent + amount,
        loyalty_points=client.loyalty_points + 1,
        status=status_for_visits(visit_count, client.status),
        last_visit=(today or date.today()).isoformat(),
    )


def birthday_clients(clients: List[Client], today: Optional[date] = None) -> List[Client]:
    """Clients whose birthday falls in the current month."""
    month = (today or date.today()).month
    return [c for c in clients if c.birthday and parse_date(c.birthday).month == month]


def follow_up_clients(clients: List[Client], max_days: int = 21, min_days: int = 7,
                      today: Optional[date] = None) -> List[Client]:
    """Clients last seen between min_days and max_days ago, to ask for feedback."""
    today = today or date.today()
    return [
        c for c in clients
        if c.last_visit and min_days <= (today - parse_date(c.last_visit)).days <= max_days
    ]


def loyalty_progress(client: Client, loyalty: LoyaltyConfig) -> dict:
    """Where a client stands on the salon's punch card."""
    required = max(1, loyalty.visits_required)
    toward_reward = client.loyalty_points % required
    return {
        'visits_toward_reward': toward_reward,
        'visits_to_next_reward': required - toward_reward,
        'rewards_earned': client.loyalty_points // required,
        'discount_percent': loyalty.discount_percent,
    }
