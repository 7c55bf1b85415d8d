from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from auth.schemas import User
from common.auth_utils import require_organizer
from common.database import get_db
from common.helpers import db_connection_handler, ensure_owner
from event.crud import get_event_by_id, get_events
from event.models import EventDetailResponse
from tickets.constants import TicketStatus
from tiers.crud import by_price
from tickets.schemas import Ticket

from .models import EventSalesResponse

organizer = APIRouter()


@organizer.get("/events", response_model=List[EventDetailResponse])
@db_connection_handler
async def list_my_events(
    user: User = Depends(require_organizer), db: Session = Depends(get_db)
):
    """Events created by the calling organizer, with their tiers."""
    return get_events(db, skip=0, limit=None, organizer_id=user.id)


@organizer.get("/events/{event_id}/sales", response_model=EventSalesResponse)
@db_connection_handler
async def get_event_sales(
    event_id: str,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    """Per-tier sales and revenue for one of the caller's events."""
    db_event = get_event_by_id(db, event_id)
    if not db_event:
        raise HTTPException(status_code=404, detail="Event not found")
    ensure_owner(db_event.organizer_id, user, "You can only view sales of your own events")

    tiers = []
    for tier in by_price(db_event.tiers):
        tiers.append(
            {
                "tier_id": tier.id,
                "name": tier.name,
                "price": tier.price,
                "total_supply": tier.total_supply,
                "sold_count": tier.sold_count,
                "remaining": tier.remaining,
                "revenue": tier.price * tier.sold_count,
            }
        )

    tickets_used = (
        db.query(func.count(Ticket.id))
        .filter(Ticket.event_id == event_id, Ticket.status == TicketStatus.USED)
        .scalar()
    )
    return {
        "event_id": db_event.id,
        "title": db_event.title,
        "is_active": db_event.is_active,
        "contract_address": db_event.contract_address,
        "tiers": tiers,
        "tickets_sold": sum(t["sold_count"] for t in tiers),
        "tickets_used": tickets_used or 0,
        "revenue": sum((t["revenue"] for t in tiers), Decimal(0)),
    }
