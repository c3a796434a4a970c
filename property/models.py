from __future__ import annotations
from datetime import date
from sqlalchemy import Date, Float, ForeignKey, Integer, String, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

class Property(Base):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), index=True, nullable=False
    )

    address: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    size: Mapped[float] = mapped_column(Float, nullable=False)
    created_date: Mapped[date] = mapped_column(Date(), nullable=False)

    # relationships
    client = relationship("Client", back_populates="properties")
    publications = relationship("Publication", back_populates="property", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("rooms > 0", name="ck_property_rooms_positive"),
        CheckConstraint("size > 0", name="ck_property_size_positive"),
    )
