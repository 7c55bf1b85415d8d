from typing import Optional

from sqlalchemy.orm import Session

from .models import EventCreate, EventUpdate, as_naive
from .schemas import Event


def create_event(db: Session, event: EventCreate, organizer_id: str):
    db_event = Event(**event.model_dump(), organizer_id=organizer_id, is_active=False)
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    return db_event


def get_events(
    db: Session,
    skip: int = 0,
    limit: int = 50,
    active_only: bool = False,
    organizer_id: Optional[str] = None,
):
    query = db.query(Event)
    if active_only:
        query = query.filter(Event.is_active.is_(True))
    if organizer_id:
        query = query.filter(Event.organizer_id == organizer_id)
    return query.order_by(Event.start_time).offset(skip).limit(limit).all()


def get_event_by_id(db: Session, event_id: str):
    return db.get(Event, event_id)


def update_event(db: Session, db_event: Event, event: EventUpdate):
    changes = event.model_dump(exclude_unset=True, exclude_none=True)
    start = changes.get("start_time", db_event.start_time)
    end = changes.get("end_time", db_event.end_time)
    if as_naive(end) < as_naive(start):
        raise ValueError("end_time must not be before start_time")

    for key, value in changes.items():
        setattr(db_event, key, value)
    db.commit()
    db.refresh(db_event)
    return db_event


def activate_event(db: Session, db_event: Event, contract_address: str):
    db_event.contract_address = contract_address
    db_event.is_active = True
    db.commit()
    db.refresh(db_event)
    return db_event
