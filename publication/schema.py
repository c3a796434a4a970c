from __future__ import annotations
import datetime as dt
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .models import TimeSlot, PublicationStatus


class PublicationErrorKind(str, Enum):
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"
    CLIENT_DAILY_LIMIT_EXCEEDED = "CLIENT_DAILY_LIMIT_EXCEEDED"
    PROPERTY_COOLDOWN_ACTIVE = "PROPERTY_COOLDOWN_ACTIVE"
    DATE_OUT_OF_RANGE = "DATE_OUT_OF_RANGE"
    PUBLICATION_NOT_EDITABLE = "PUBLICATION_NOT_EDITABLE"
    PUBLICATION_NOT_FOUND = "PUBLICATION_NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"


ERROR_MESSAGES: dict[PublicationErrorKind, str] = {
    PublicationErrorKind.PROPERTY_NOT_FOUND: "property not found",
    PublicationErrorKind.CLIENT_DAILY_LIMIT_EXCEEDED: (
        "you already have a publication on this date. only one publication per day is allowed."
    ),
    PublicationErrorKind.PROPERTY_COOLDOWN_ACTIVE: "the property was published within the last 3 days.",
    PublicationErrorKind.DATE_OUT_OF_RANGE: "date is outside the booking window",
    PublicationErrorKind.PUBLICATION_NOT_EDITABLE: "past publications cannot be edited",
    PublicationErrorKind.PUBLICATION_NOT_FOUND: "publication not found",
    PublicationErrorKind.STORE_UNAVAILABLE: "could not reach the publication store, please try again",
    PublicationErrorKind.CLIENT_NOT_FOUND: "client not found",
}


class ValidationResult(BaseModel):
    valid: bool
    error_kind: Optional[PublicationErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, kind: PublicationErrorKind) -> "ValidationResult":
        return cls(valid=False, error_kind=kind, message=ERROR_MESSAGES[kind])


class PublicationSchema(BaseModel):
    id: str
    property_id: str
    client_id: str
    date: dt.date
    time_slot: TimeSlot
    status: PublicationStatus
    model_config = ConfigDict(from_attributes=True)


# single publication with its state as of today
class PublicationDetailSchema(PublicationSchema):
    derived_status: PublicationStatus
    editable: bool


# PUBLIC payload from clients; client_id comes from the X-Client-Id header
class PublicationCreatePayload(BaseModel):
    property_id: str = Field(..., min_length=1)
    date: dt.date = Field(..., description="ISO calendar date, YYYY-MM-DD")
    time_slot: TimeSlot
    model_config = ConfigDict(extra="forbid")


# PUT is a full replace of the editable fields
class PublicationUpdatePayload(BaseModel):
    property_id: str = Field(..., min_length=1)
    date: dt.date
    time_slot: TimeSlot
    model_config = ConfigDict(extra="forbid")


class PublicationValidatePayload(BaseModel):
    property_id: str = Field(..., min_length=1)
    date: dt.date
    model_config = ConfigDict(extra="forbid")


# INTERNAL DTO for the service
class PublicationCreate(BaseModel):
    client_id: str
    property_id: str
    date: dt.date
    time_slot: TimeSlot


class PublicationUpdate(BaseModel):
    property_id: str
    date: dt.date
    time_slot: TimeSlot
