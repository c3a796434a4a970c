from __future__ import annotations
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from publication.models import Publication
from publication import rules
from .models import Property
from .schema import PropertyOverviewSchema, PropertySchema


def fetch_properties(db: Session, client_id: str) -> List[Property]:
    stmt = (
        select(Property)
        .where(Property.client_id == client_id)
        .order_by(Property.created_date.desc(), Property.id.asc())
    )
    return list(db.scalars(stmt))


def get_property_for_client(db: Session, property_id: str, client_id: str) -> Property | None:
    stmt = select(Property).where(Property.id == property_id, Property.client_id == client_id)
    return db.scalars(stmt).first()


def _client_publications(db: Session, client_id: str) -> List[Publication]:
    return list(db.scalars(select(Publication).where(Publication.client_id == client_id)))


def get_property_overview(
    db: Session,
    client_id: str,
    *,
    today: Optional[date] = None,
) -> List[PropertyOverviewSchema]:
    """Client's properties, each with its new / cooldown status as of today."""
    properties = fetch_properties(db, client_id)
    publications = _client_publications(db, client_id)

    rows = []
    for prop in properties:
        info = rules.property_status(prop, publications, today=today)
        rows.append(
            PropertyOverviewSchema(
                **PropertySchema.model_validate(prop).model_dump(),
                **info.model_dump(),
            )
        )
    return rows


def get_available_properties(
    db: Session,
    client_id: str,
    target_date: date,
    *,
    today: Optional[date] = None,
) -> List[Property]:
    return rules.available_properties(
        fetch_properties(db, client_id),
        _client_publications(db, client_id),
        client_id,
        target_date,
        today=today,
    )
