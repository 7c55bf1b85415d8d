from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from auth.schemas import new_id, utcnow
from common.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=new_id)
    organizer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    venue = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    banner_image = Column(String(1024), nullable=True)
    category = Column(String(100), nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
    contract_address = Column(String(42), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    organizer = relationship("User", back_populates="events")
    tiers = relationship(
        "TicketTier",
        back_populates="event",
        order_by="TicketTier.created_at",
        cascade="all, delete-orphan",
    )
    tickets = relationship("Ticket", back_populates="event")
