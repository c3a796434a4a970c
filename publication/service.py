from __future__ import annotations
import logging
import uuid
from datetime import date
from typing import Optional, List, Literal

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.config_loader import settings
from property.models import Property
from .models import Publication, PublicationStatus
from .schema import (
    ERROR_MESSAGES,
    PublicationCreate,
    PublicationErrorKind,
    PublicationUpdate,
    ValidationResult,
)
from . import lifecycle, rules

logger = logging.getLogger(__name__)

STATUS_FOR_KIND: dict[PublicationErrorKind, int] = {
    PublicationErrorKind.PROPERTY_NOT_FOUND: 404,
    PublicationErrorKind.PUBLICATION_NOT_FOUND: 404,
    PublicationErrorKind.CLIENT_NOT_FOUND: 404,
    PublicationErrorKind.CLIENT_DAILY_LIMIT_EXCEEDED: 409,
    PublicationErrorKind.PROPERTY_COOLDOWN_ACTIVE: 409,
    PublicationErrorKind.PUBLICATION_NOT_EDITABLE: 409,
    PublicationErrorKind.DATE_OUT_OF_RANGE: 422,
    PublicationErrorKind.STORE_UNAVAILABLE: 503,
}

View = Literal["all", "future", "history"]


# -------- helpers --------

def publication_error(kind: PublicationErrorKind, message: Optional[str] = None) -> HTTPException:
    return HTTPException(
        status_code=STATUS_FOR_KIND[kind],
        detail={"error": kind.value, "message": message or ERROR_MESSAGES[kind]},
    )


def _locked_property(db: Session, property_id: str, client_id: str) -> Property | None:
    # FOR UPDATE serialises concurrent bookings of one property on backends that support it
    stmt = (
        select(Property)
        .where(Property.id == property_id, Property.client_id == client_id)
        .with_for_update()
    )
    return db.scalars(stmt).first()


def _ensure_in_window(target: date, today: date, *, include_today: bool) -> None:
    horizon = settings.PUBLICATION_HORIZON_DAYS
    if not lifecycle.in_booking_window(target, today, horizon, include_today=include_today):
        start, end = lifecycle.booking_window(today, horizon, include_today=include_today)
        raise publication_error(
            PublicationErrorKind.DATE_OUT_OF_RANGE,
            f"date must be between {start.isoformat()} and {end.isoformat()}",
        )


def _raise_if_invalid(result: ValidationResult, *, client_id: str, property_id: str, target: date) -> None:
    if result.valid:
        return
    logger.info(
        "publication rejected: %s (client=%s property=%s date=%s)",
        result.error_kind.value, client_id, property_id, target.isoformat(),
    )
    raise publication_error(result.error_kind)


# -------- queries --------

def fetch_publications(db: Session, client_id: str) -> List[Publication]:
    stmt = (
        select(Publication)
        .where(Publication.client_id == client_id)
        .order_by(Publication.date.asc(), Publication.id.asc())
    )
    return list(db.scalars(stmt))


def get_publications(
    db: Session,
    *,
    client_id: str,
    view: View = "all",
    today: Optional[date] = None,
) -> List[Publication]:
    rows = fetch_publications(db, client_id)
    today = today or date.today()
    if view == "future":
        return lifecycle.future_publications(rows, today)
    if view == "history":
        return lifecycle.publication_history(rows, today)
    return rows


def get_publication_for_client(db: Session, publication_id: str, client_id: str) -> Publication | None:
    stmt = select(Publication).where(
        Publication.id == publication_id,
        Publication.client_id == client_id,
    )
    return db.scalars(stmt).first()


def validate_request(
    db: Session,
    *,
    client_id: str,
    property_id: str,
    target_date: date,
    today: Optional[date] = None,
) -> ValidationResult:
    """Run the publication rules without writing anything."""
    prop = db.scalars(
        select(Property).where(Property.id == property_id, Property.client_id == client_id)
    ).first()
    return rules.validate_publication(
        property_id,
        client_id,
        target_date,
        [prop] if prop else [],
        fetch_publications(db, client_id),
        today=today,
    )


# -------- mutations --------

def create_publication(db: Session, dto: PublicationCreate, *, today: Optional[date] = None) -> Publication:
    """
    Validate and insert in one transaction.
    - date must be within the booking window (tomorrow .. today + horizon)
    - the property row is locked while the rules are checked
    - the (client_id, date) unique constraint backs the daily limit; an
      IntegrityError on commit means a concurrent booking won
    """
    today = today or date.today()
    _ensure_in_window(dto.date, today, include_today=False)

    prop = _locked_property(db, dto.property_id, dto.client_id)
    result = rules.validate_publication(
        dto.property_id,
        dto.client_id,
        dto.date,
        [prop] if prop else [],
        fetch_publications(db, dto.client_id),
        today=today,
    )
    _raise_if_invalid(result, client_id=dto.client_id, property_id=dto.property_id, target=dto.date)

    row = Publication(
        id=uuid.uuid4().hex,
        property_id=dto.property_id,
        client_id=dto.client_id,
        date=dto.date,
        time_slot=dto.time_slot,
        status=PublicationStatus.published,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(
        "publication %s created (client=%s property=%s date=%s slot=%s)",
        row.id, row.client_id, row.property_id, row.date.isoformat(), row.time_slot.value,
    )
    return row


def update_publication(
    db: Session,
    publication_id: str,
    client_id: str,
    patch: PublicationUpdate,
    *,
    today: Optional[date] = None,
) -> Publication:
    """
    Full replace of property_id, date and time_slot.
    Only publications dated today or later can be edited, and the result
    must satisfy the same rules as a new booking (ignoring the row itself).
    """
    today = today or date.today()
    row = get_publication_for_client(db, publication_id, client_id)
    if not row:
        raise publication_error(PublicationErrorKind.PUBLICATION_NOT_FOUND)
    if not lifecycle.is_editable(row, today):
        raise publication_error(PublicationErrorKind.PUBLICATION_NOT_EDITABLE)

    _ensure_in_window(patch.date, today, include_today=True)

    prop = _locked_property(db, patch.property_id, client_id)
    others = [p for p in fetch_publications(db, client_id) if p.id != row.id]
    result = rules.validate_publication(
        patch.property_id,
        client_id,
        patch.date,
        [prop] if prop else [],
        others,
        today=today,
    )
    _raise_if_invalid(result, client_id=client_id, property_id=patch.property_id, target=patch.date)

    data = patch.model_dump()
    for k, v in data.items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    logger.info("publication %s updated (date=%s slot=%s)", row.id, row.date.isoformat(), row.time_slot.value)
    return row


def delete_publication(db: Session, publication_id: str) -> None:
    row = db.get(Publication, publication_id)
    if row:
        db.delete(row)
        db.commit()
        logger.info("publication %s deleted", publication_id)
    return
