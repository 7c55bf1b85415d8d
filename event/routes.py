import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from auth.schemas import User
from common.auth_utils import get_current_user, require_organizer
from common.database import get_db
from common.helpers import db_connection_handler, ensure_owner

from . import crud, models
from .constants import CONTRACT_ADDRESS_PATTERN, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

event = APIRouter(dependencies=[Depends(get_current_user)])


def get_event_or_404(db: Session, event_id: str):
    db_event = crud.get_event_by_id(db, event_id)
    if not db_event:
        raise HTTPException(status_code=404, detail="Event not found")
    return db_event


@event.get("", response_model=List[models.EventResponse])
@db_connection_handler
async def read_events(
    skip: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    """Get all events with pagination."""
    return crud.get_events(db, skip=skip, limit=limit, active_only=active_only)


@event.get("/{event_id}", response_model=models.EventDetailResponse)
@db_connection_handler
async def read_event(event_id: str, db: Session = Depends(get_db)):
    """Get details of a specific event, including its tiers."""
    return get_event_or_404(db, event_id)


@event.post(
    "", response_model=models.EventResponse, status_code=status.HTTP_201_CREATED
)
@db_connection_handler
async def create_event(
    event: models.EventCreate,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    """Create a new, inactive event owned by the calling organizer."""
    try:
        event.validate_times()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    db_event = crud.create_event(db, event, organizer_id=user.id)
    logger.info("Organizer %s created event %s", user.id, db_event.id)
    return db_event


@event.put("/{event_id}", response_model=models.EventResponse)
@db_connection_handler
async def update_event(
    event_id: str,
    event: models.EventUpdate,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    """Update the descriptive fields of an event."""
    db_event = get_event_or_404(db, event_id)
    ensure_owner(db_event.organizer_id, user, "You can only edit your own events")
    try:
        return crud.update_event(db, db_event, event)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@event.put("/{event_id}/activate", response_model=models.EventActivateResponse)
@db_connection_handler
async def activate_event(
    event_id: str,
    body: models.EventActivate,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    """Record the deployed contract address and open the event for sales."""
    contract_address = body.contract_address
    if not contract_address:
        raise HTTPException(status_code=400, detail="contract_address is required")
    if not CONTRACT_ADDRESS_PATTERN.match(contract_address):
        raise HTTPException(status_code=400, detail="Invalid contract address format")

    db_event = get_event_or_404(db, event_id)
    ensure_owner(db_event.organizer_id, user, "You can only activate your own events")
    if db_event.is_active:
        raise HTTPException(status_code=400, detail="Event is already active")

    db_event = crud.activate_event(db, db_event, contract_address)
    logger.info("Event %s activated with contract %s", event_id, contract_address)
    return {"message": "Event activated successfully", "event": db_event}
