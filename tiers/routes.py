import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth.schemas import User
from common.auth_utils import require_organizer
from common.database import get_db
from common.helpers import db_connection_handler, ensure_owner
from event.crud import get_event_by_id

from . import crud, models

logger = logging.getLogger(__name__)

# Mounted under /events: tiers are addressed through their event.
event_tiers = APIRouter()
# Mounted under /tiers.
tier = APIRouter()


def get_editable_event(db: Session, event_id: str, user: User):
    db_event = get_event_by_id(db, event_id)
    if not db_event:
        raise HTTPException(status_code=404, detail="Event not found")
    ensure_owner(
        db_event.organizer_id, user, "You can only add tiers to your own events"
    )
    if db_event.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot add tiers to an active event",
        )
    return db_event


@event_tiers.get("/{event_id}/tiers", response_model=models.TierListResponse)
@db_connection_handler
async def list_tiers(event_id: str, db: Session = Depends(get_db)):
    """Get all tiers for an event, cheapest first."""
    if not get_event_by_id(db, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return {"tiers": crud.get_tiers_for_event(db, event_id)}


@event_tiers.post(
    "/{event_id}/tiers",
    response_model=models.TierCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
@db_connection_handler
async def create_tier(
    event_id: str,
    tier: models.TierCreate,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    get_editable_event(db, event_id, user)
    (db_tier,) = crud.create_tiers(db, event_id, [tier])
    logger.info("Added tier %s to event %s", db_tier.id, event_id)
    return {"tier": db_tier}


@event_tiers.post(
    "/{event_id}/tiers/bulk",
    response_model=models.TierBulkCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
@db_connection_handler
async def create_tiers_bulk(
    event_id: str,
    body: models.TierBulkCreate,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    get_editable_event(db, event_id, user)
    created = crud.create_tiers(db, event_id, body.tiers)
    logger.info("Added %d tiers to event %s", len(created), event_id)
    return {
        "message": f"Created {len(created)} tiers",
        "tiers": crud.get_tiers_for_event(db, event_id),
    }


@tier.delete("/{tier_id}")
@db_connection_handler
async def delete_tier(
    tier_id: str,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    db_tier = crud.get_tier_by_id(db, tier_id)
    if not db_tier:
        raise HTTPException(status_code=404, detail="Tier not found")

    ensure_owner(
        db_tier.event.organizer_id,
        user,
        "You can only delete tiers from your own events",
    )
    if db_tier.event.is_active:
        raise HTTPException(
            status_code=400, detail="Cannot delete tiers from an active event"
        )
    if db_tier.sold_count > 0:
        raise HTTPException(
            status_code=400, detail="Cannot delete tier with sold tickets"
        )

    crud.delete_tier(db, db_tier)
    return {"message": "Tier deleted successfully"}
