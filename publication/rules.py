"""
Publication rules.

Pure functions over in-memory collections. Nothing here touches the database
or reads the clock except where "today" is left unset, in which case
``date.today()`` is used.

Two rules are enforced:
- a client publishes at most once per calendar day
- a property is not republished within 3 days of its last publication,
  unless the property itself is new (created less than 3 days ago)

Properties and publications are read by attribute, so ORM rows, pydantic
models or plain namespaces all work.
"""
from __future__ import annotations
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, TypeVar, Union

from property.schema import PropertyStatus, PropertyStatusInfo
from .schema import PublicationErrorKind, ValidationResult

NEW_PROPERTY_DAYS = 3
COOLDOWN_DAYS = 3

DateLike = Union[date, datetime, str]
P = TypeVar("P")


# ---------- helpers ----------

def as_date(value: DateLike) -> date:
    """Truncate to a calendar date; ISO strings (YYYY-MM-DD) are accepted."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])

def days_between(later: DateLike, earlier: DateLike) -> int:
    # whole days, negative when `later` is actually earlier
    return (as_date(later) - as_date(earlier)).days

def _today(today: Optional[DateLike]) -> date:
    return as_date(today) if today is not None else date.today()


# ---------- rules ----------

def is_new_property(created_date: DateLike, as_of: Optional[DateLike] = None) -> bool:
    # a created_date in the future gives a negative difference, which still counts as new
    return days_between(_today(as_of), created_date) < NEW_PROPERTY_DAYS

def last_publication_date(property_id: str, publications: Iterable) -> Optional[date]:
    dates = [as_date(p.date) for p in publications if p.property_id == property_id]
    return max(dates) if dates else None

def can_property_publish(
    property_id: str,
    publications: Iterable,
    target_date: DateLike,
    created_date: DateLike,
    *,
    today: Optional[DateLike] = None,
) -> bool:
    """
    - new properties skip the cooldown, whatever the target date
    - never published -> allowed
    - else the target must be at least COOLDOWN_DAYS after the last publication;
      a target before the last publication gives a negative gap and is refused
    """
    if is_new_property(created_date, as_of=today):
        return True

    last = last_publication_date(property_id, publications)
    if last is None:
        return True

    return days_between(target_date, last) >= COOLDOWN_DAYS

def can_client_publish_on_date(client_id: str, publications: Iterable, target_date: DateLike) -> bool:
    target = as_date(target_date)
    return not any(
        p.client_id == client_id and as_date(p.date) == target for p in publications
    )

def available_properties(
    properties: Sequence[P],
    publications: Sequence,
    client_id: str,
    target_date: DateLike,
    *,
    today: Optional[DateLike] = None,
) -> list[P]:
    if not can_client_publish_on_date(client_id, publications, target_date):
        return []
    return [
        prop for prop in properties
        if can_property_publish(prop.id, publications, target_date, prop.created_date, today=today)
    ]

def validate_publication(
    property_id: str,
    client_id: str,
    target_date: DateLike,
    properties: Sequence,
    publications: Sequence,
    *,
    today: Optional[DateLike] = None,
) -> ValidationResult:
    """
    Ordered checks, the first failure wins:
    1) the property exists
    2) the client has no publication on that date
    3) the property is out of its cooldown (or new)
    """
    prop = next((p for p in properties if p.id == property_id), None)
    if prop is None:
        return ValidationResult.fail(PublicationErrorKind.PROPERTY_NOT_FOUND)

    if not can_client_publish_on_date(client_id, publications, target_date):
        return ValidationResult.fail(PublicationErrorKind.CLIENT_DAILY_LIMIT_EXCEEDED)

    if not can_property_publish(property_id, publications, target_date, prop.created_date, today=today):
        return ValidationResult.fail(PublicationErrorKind.PROPERTY_COOLDOWN_ACTIVE)

    return ValidationResult.ok()


# ---------- property overview ----------

def property_status(prop, publications: Iterable, *, today: Optional[DateLike] = None) -> PropertyStatusInfo:
    now = _today(today)
    is_new = is_new_property(prop.created_date, as_of=now)
    last = last_publication_date(prop.id, publications)
    since = days_between(now, last) if last is not None else None

    if is_new:
        status = PropertyStatus.new
    elif last is None:
        status = PropertyStatus.never_published
    elif since < COOLDOWN_DAYS:
        status = PropertyStatus.recently_published
    else:
        status = PropertyStatus.available

    return PropertyStatusInfo(
        status=status,
        is_new=is_new,
        last_publication_date=last,
        days_since_last_publication=since,
    )
