"""Appointment (rendez-vous) agenda lookups."""
from datetime import date
from typing import List, Optional, Union

from salon.models.resources import Appointment


def appointments_on(appointments: List[Appointment], day: Union[date, str]) -> List[Appointment]:
    """Appointments of one day, earliest time first."""
    day = day.isoformat() if isinstance(day, date) else day
    return sorted(
        (a for a in appointments if a.date == day),
        key=lambda a: a.time or '',
    )


def todays_appointments(appointments: List[Appointment],
                        today: Optional[date] = None) -> List[Appointment]:
    return appointments_on(appointments, today or date.today())


def dates_with_appointments(appointments: List[Appointment]) -> List[str]:
    """Distinct appointment dates in first-seen order."""
    return list(dict.fromkeys(a.date for a in appointments))
