from __future__ import annotations
from datetime import date, timedelta
from typing import Iterable, TypeVar

from .models import PublicationStatus
from .rules import as_date

P = TypeVar("P")

# The stored status is written once at creation. Whether a publication is
# still upcoming is always worked out from its date against an explicit today.

def derived_status(publication, today: date) -> PublicationStatus:
    if as_date(publication.date) > as_date(today):
        return PublicationStatus.scheduled
    return PublicationStatus.published

def is_editable(publication, today: date) -> bool:
    return as_date(publication.date) >= as_date(today)

def future_publications(publications: Iterable[P], today: date) -> list[P]:
    """Publications dated today or later, soonest first."""
    upcoming = [p for p in publications if is_editable(p, today)]
    return sorted(upcoming, key=lambda p: as_date(p.date))

def publication_history(publications: Iterable[P], today: date) -> list[P]:
    """Publications dated before today, most recent first."""
    past = [p for p in publications if not is_editable(p, today)]
    return sorted(past, key=lambda p: as_date(p.date), reverse=True)

def booking_window(today: date, horizon_days: int, *, include_today: bool = False) -> tuple[date, date]:
    # new bookings start tomorrow, edits may move a publication to today
    start = today if include_today else today + timedelta(days=1)
    return start, today + timedelta(days=horizon_days)

def in_booking_window(target: date, today: date, horizon_days: int, *, include_today: bool = False) -> bool:
    start, end = booking_window(as_date(today), horizon_days, include_today=include_today)
    return start <= as_date(target) <= end
