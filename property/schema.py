from __future__ import annotations
from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PropertyStatus(str, Enum):
    new = "new"
    recently_published = "recently_published"
    available = "available"
    never_published = "never_published"


class PropertySchema(BaseModel):
    id: str
    client_id: str
    address: str
    type: str
    rooms: int = Field(..., gt=0)
    size: float = Field(..., gt=0)
    created_date: date
    model_config = ConfigDict(from_attributes=True)


class PropertyStatusInfo(BaseModel):
    status: PropertyStatus
    is_new: bool
    last_publication_date: Optional[date] = None
    days_since_last_publication: Optional[int] = None


# row of the client's property list: the property plus its derived status
class PropertyOverviewSchema(PropertySchema):
    status: PropertyStatus
    is_new: bool
    last_publication_date: Optional[date] = None
    days_since_last_publication: Optional[int] = None
