from __future__ import annotations
import datetime as dt
from enum import Enum
from sqlalchemy import Date, String, Enum as SAEnum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

class TimeSlot(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"

class PublicationStatus(str, Enum):
    published = "published"
    scheduled = "scheduled"

class Publication(Base):
    __tablename__ = "publications"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    property_id: Mapped[str] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"), index=True, nullable=False
    )
    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), index=True, nullable=False
    )

    date: Mapped[dt.date] = mapped_column(Date(), nullable=False)
    time_slot: Mapped[TimeSlot] = mapped_column(
        SAEnum(TimeSlot, name="time_slot"), nullable=False
    )

    # set once on creation, the live state is derived from the date
    status: Mapped[PublicationStatus] = mapped_column(
        SAEnum(PublicationStatus, name="publication_status"),
        default=PublicationStatus.published,
        nullable=False,
    )

    # relationships
    property = relationship("Property", back_populates="publications")
    client = relationship("Client", back_populates="publications")

    __table_args__ = (
        # one publication per client per day
        UniqueConstraint("client_id", "date", name="uq_publication_client_date"),
    )
