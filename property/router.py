from __future__ import annotations
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import get_current_client

from .schema import PropertySchema, PropertyOverviewSchema
from . import service

property_router = APIRouter(prefix="/properties", tags=["Properties"])

# List the caller's properties with their publish status
@property_router.get("", response_model=list[PropertyOverviewSchema])
def list_properties(
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    return service.get_property_overview(db, client.id)

# Properties the caller may publish on a given date
@property_router.get("/available", response_model=list[PropertySchema])
def list_available_properties(
    on: date = Query(..., alias="date", description="Target publication date, YYYY-MM-DD"),
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    return service.get_available_properties(db, client.id, on)

# Get by id (scoped)
@property_router.get("/{property_id}", response_model=PropertySchema)
def get_property(
    property_id: str,
    db: Session = Depends(get_db),
    client = Depends(get_current_client),
):
    obj = service.get_property_for_client(db, property_id, client.id)
    if not obj:
        raise HTTPException(
            status_code=404,
            detail={"error": "PROPERTY_NOT_FOUND", "message": "property not found"},
        )
    return obj
