"""Services performed for clients (prestations) and the service catalog."""
from datetime import date
from typing import Dict, List, Optional

from salon.models.account import parse_date
from salon.models.resources import ServiceRecord, ServiceType
from salon.services import client_service
from salon.services.resource_service import ResourceCollection


def add_service(services: ResourceCollection, clients: ResourceCollection, client_id: str,
                service_type_id: str, amount, employee: Optional[str] = None,
                notes: Optional[str] = None, today: Optional[date] = None) -> ServiceRecord:
    """
    Record a service dated today and count it as a visit of the client.

    The service is kept even if the client no longer exists; only the
    visit bookkeeping is skipped then.
    """
    today = today or date.today()
    record = services.add(ServiceRecord(
        client_id=client_id,
        service_type_id=service_type_id,
        date=today.isoformat(),
        employee=employee,
        notes=notes,
        amount=amount,
    ))
    client_service.record_visit(clients, client_id, amount, today)
    return record


def services_for_client(services: List[ServiceRecord], client_id: str) -> List[ServiceRecord]:
    """A client's services, newest first."""
    return sorted(
        (s for s in services if s.client_id == client_id),
        key=lambda s: parse_date(s.date),
        reverse=True,
    )


def services_this_month(services: List[ServiceRecord],
                        today: Optional[date] = None) -> List[ServiceRecord]:
    """Services dated on or after the first day of the current month."""
    start = (today or date.today()).replace(day=1)
    return [s for s in services if s.date and parse_date(s.date) >= start]


def revenue_this_month(services: List[ServiceRecord], today: Optional[date] = None):
    return sum(s.amount for s in services_this_month(services, today))


def popular_services(services: List[ServiceRecord], service_types: List[ServiceType],
                     limit: int = 5) -> List[Dict]:
    """
    Most performed service types as [{'name', 'count'}], most frequent first.

    Services whose type was deleted are not counted.
    """
    names = {t.id: t.name for t in service_types}
    counts: Dict[str, int] = {}
    for service in services:
        name = names.get(service.service_type_id)
        if name is not None:
            counts[name] = counts.get(name, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{'name': name, 'count': count} for name, count in ranked[:limit]]


def sync_default_catalog(service_types: ResourceCollection,
                         defaults: Optional[List[ServiceType]] = None) -> int:
    """
    Append default service types missing from the salon's catalog.

    Defaults keep their own ids so sales and services that reference them
    stay resolvable. Returns the number of types added.
    """
    if defaults is None:
        from salon.utils.seed_data import default_service_types
        defaults = default_service_types()
    known = {t.id for t in service_types}
    missing = [d for d in defaults if d.id not in known]
    if missing:
        service_types.replace_all(service_types.all() + missing)
    return len(missing)
