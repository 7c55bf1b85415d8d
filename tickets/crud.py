from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.orm import Session

from tiers.crud import reserve_tier_slot

from .constants import TicketStatus
from .schemas import Ticket


class SoldOutError(Exception):
    pass


def get_ticket_by_id(db: Session, ticket_id: str):
    return db.get(Ticket, ticket_id)


def get_tickets_by_owner(db: Session, owner_id: str):
    return (
        db.query(Ticket)
        .filter(Ticket.owner_id == owner_id)
        .order_by(Ticket.purchased_at.desc())
        .all()
    )


def get_ticket_by_token(db: Session, event_id: str, token_id: int):
    return (
        db.query(Ticket)
        .filter(Ticket.event_id == event_id, Ticket.token_id == token_id)
        .first()
    )


def create_ticket(
    db: Session, event_id: str, tier_id: str, owner_id: str, token_id: int, tx_hash: str
):
    """
    Record a minted ticket and consume one unit of tier supply.

    Both writes share one transaction. Raises ``SoldOutError`` when the tier
    has no supply left; ``IntegrityError`` surfaces a duplicate token id.
    """
    try:
        if not reserve_tier_slot(db, tier_id):
            raise SoldOutError(tier_id)
        ticket = Ticket(
            event_id=event_id,
            tier_id=tier_id,
            owner_id=owner_id,
            token_id=token_id,
            status=TicketStatus.VALID,
            mint_tx_hash=tx_hash,
        )
        db.add(ticket)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(ticket)
    db.refresh(ticket.tier)
    return ticket


def mark_ticket_used(db: Session, ticket: Ticket) -> bool:
    """Flip VALID to USED; False if the ticket was not VALID anymore."""
    result = db.execute(
        update(Ticket)
        .where(Ticket.id == ticket.id, Ticket.status == TicketStatus.VALID)
        .values(status=TicketStatus.USED, used_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        db.refresh(ticket)
        return False
    db.commit()
    db.refresh(ticket)
    return True
