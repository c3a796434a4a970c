from __future__ import annotations
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_client

from .schema import (
    PublicationSchema,
    PublicationDetailSchema,
    PublicationCreatePayload,
    PublicationCreate,
    PublicationUpdatePayload,
    PublicationUpdate,
    PublicationValidatePayload,
    PublicationErrorKind,
    ValidationResult,
)
from . import lifecycle, service

publication_router = APIRouter(prefix="/publications", tags=["Publications"])

# List (scoped to the caller). future: today onwards, history: before today
@publication_router.get("", response_model=list[PublicationSchema])
def list_publications(
    view: service.View = Query("all", description="all | future | history"),
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    return service.get_publications(db, client_id=client.id, view=view)

# Dry run of the publication rules, nothing is written
@publication_router.post("/validate", response_model=ValidationResult)
def validate_publication(
    payload: PublicationValidatePayload,
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    return service.validate_request(
        db,
        client_id=client.id,
        property_id=payload.property_id,
        target_date=payload.date,
    )

# Get by id (scoped)
@publication_router.get("/{publication_id}", response_model=PublicationDetailSchema)
def get_publication(
    publication_id: str,
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    obj = service.get_publication_for_client(db, publication_id, client.id)
    if not obj:
        raise service.publication_error(PublicationErrorKind.PUBLICATION_NOT_FOUND)
    today = date.today()
    return PublicationDetailSchema(
        **PublicationSchema.model_validate(obj).model_dump(),
        derived_status=lifecycle.derived_status(obj, today),
        editable=lifecycle.is_editable(obj, today),
    )

# Create
@publication_router.post("", response_model=PublicationSchema, status_code=status.HTTP_201_CREATED)
def create_publication(
    payload: PublicationCreatePayload,
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    dto = PublicationCreate(client_id=client.id, **payload.model_dump())
    try:
        return service.create_publication(db, dto)
    except IntegrityError:
        db.rollback()
        # lost the race on uq_publication_client_date
        raise service.publication_error(PublicationErrorKind.CLIENT_DAILY_LIMIT_EXCEEDED)

# Full replace of date, time slot and property
@publication_router.put("/{publication_id}", response_model=PublicationSchema)
def update_publication(
    publication_id: str,
    payload: PublicationUpdatePayload,
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    try:
        return service.update_publication(
            db, publication_id, client.id, PublicationUpdate(**payload.model_dump())
        )
    except IntegrityError:
        db.rollback()
        raise service.publication_error(PublicationErrorKind.CLIENT_DAILY_LIMIT_EXCEEDED)

# Delete
@publication_router.delete("/{publication_id}")
def delete_publication(
    publication_id: str,
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    obj = service.get_publication_for_client(db, publication_id, client.id)
    if not obj:
        raise service.publication_error(PublicationErrorKind.PUBLICATION_NOT_FOUND)
    service.delete_publication(db, publication_id)
    return {"message": "publication deleted"}
