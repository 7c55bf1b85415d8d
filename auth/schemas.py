import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from auth.constants import UserRole
from common.database import Base


def utcnow():
    return datetime.now(timezone.utc)


def new_id():
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    wallet_address = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.USER)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    events = relationship("Event", back_populates="organizer")
    tickets = relationship("Ticket", back_populates="owner")
