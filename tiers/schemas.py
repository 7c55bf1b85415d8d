from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from auth.schemas import new_id, utcnow
from common.database import Base
from common.types import ExactDecimal


class TicketTier(Base):
    __tablename__ = "ticket_tiers"
    __table_args__ = (
        CheckConstraint("total_supply > 0", name="ck_tier_total_supply_positive"),
        CheckConstraint(
            "sold_count >= 0 AND sold_count <= total_supply",
            name="ck_tier_sold_count_bounds",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    # Denominated in the chain's native currency (MATIC / ETH), not wei.
    price = Column(ExactDecimal(36, 18), nullable=False)
    total_supply = Column(Integer, nullable=False)
    sold_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    event = relationship("Event", back_populates="tiers")
    tickets = relationship("Ticket", back_populates="tier")

    @property
    def remaining(self) -> int:
        return self.total_supply - (self.sold_count or 0)
