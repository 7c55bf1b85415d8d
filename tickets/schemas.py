import secrets

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from auth.schemas import new_id, utcnow
from common.database import Base
from tickets.constants import TicketStatus


def new_qr_secret():
    return secrets.token_hex(32)


class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        UniqueConstraint("event_id", "token_id", name="uq_ticket_event_token"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    tier_id = Column(String(36), ForeignKey("ticket_tiers.id"), nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    token_id = Column(BigInteger, nullable=False)
    status = Column(String(10), nullable=False, default=TicketStatus.VALID)
    qr_code_secret = Column(String(64), nullable=False, default=new_qr_secret)
    mint_tx_hash = Column(String(100), nullable=False)
    purchased_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    used_at = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", back_populates="tickets")
    tier = relationship("TicketTier", back_populates="tickets")
    owner = relationship("User", back_populates="tickets")
