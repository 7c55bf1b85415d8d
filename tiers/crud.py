from typing import Iterable

from sqlalchemy import update
from sqlalchemy.orm import Session

from .models import TierCreate
from .schemas import TicketTier


def by_price(tiers):
    """Cheapest first; tiers of equal price keep their creation order."""
    return sorted(tiers, key=lambda t: t.price)


def get_tiers_for_event(db: Session, event_id: str):
    # Prices may be stored as text, so they are ordered here, not in SQL.
    return by_price(
        db.query(TicketTier)
        .filter(TicketTier.event_id == event_id)
        .order_by(TicketTier.created_at)
        .all()
    )


def get_tier_by_id(db: Session, tier_id: str):
    return db.get(TicketTier, tier_id)


def create_tiers(db: Session, event_id: str, tiers: Iterable[TierCreate]):
    db_tiers = [
        TicketTier(event_id=event_id, sold_count=0, **tier.model_dump())
        for tier in tiers
    ]
    try:
        db.add_all(db_tiers)
        db.commit()
    except Exception:
        db.rollback()
        raise
    for db_tier in db_tiers:
        db.refresh(db_tier)
    return db_tiers


def delete_tier(db: Session, db_tier: TicketTier):
    db.delete(db_tier)
    db.commit()


def reserve_tier_slot(db: Session, tier_id: str) -> bool:
    """
    Atomically bump ``sold_count`` unless the tier is sold out.

    Runs inside the caller's transaction; returns False when no row was
    updated, i.e. the tier has no remaining supply.
    """
    result = db.execute(
        update(TicketTier)
        .where(TicketTier.id == tier_id)
        .where(TicketTier.sold_count < TicketTier.total_supply)
        .values(sold_count=TicketTier.sold_count + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1
