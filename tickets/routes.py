import json
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.schemas import User
from common.auth_utils import get_current_user, require_organizer
from common.config import QR_DISPLAY_TTL_SECONDS, QR_MAX_AGE_SECONDS
from common.database import get_db
from common.helpers import db_connection_handler, ensure_owner
from event.crud import get_event_by_id

from . import crud, models, qr
from .constants import TicketStatus

logger = logging.getLogger(__name__)

ticket = APIRouter(dependencies=[Depends(get_current_user)])


def get_ticket_or_404(db: Session, ticket_id: str):
    db_ticket = crud.get_ticket_by_id(db, ticket_id)
    if not db_ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return db_ticket


@ticket.get("", response_model=models.TicketListResponse)
@db_connection_handler
async def list_my_tickets(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """List the caller's tickets, newest first."""
    return {"tickets": crud.get_tickets_by_owner(db, user.id)}


@ticket.post(
    "/confirm",
    response_model=models.TicketEnvelope,
    status_code=status.HTTP_201_CREATED,
)
@db_connection_handler
async def confirm_ticket(
    body: models.TicketConfirm,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record a ticket the caller minted on chain."""
    db_event = get_event_by_id(db, body.event_id)
    if not db_event:
        raise HTTPException(status_code=404, detail="Event not found")
    if not db_event.is_active:
        raise HTTPException(status_code=400, detail="Event is not active")

    tier = next((t for t in db_event.tiers if t.id == body.tier_id), None)
    if not tier:
        raise HTTPException(status_code=404, detail="Ticket tier not found")

    if crud.get_ticket_by_token(db, db_event.id, body.token_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ticket with this tokenId already exists",
        )

    try:
        db_ticket = crud.create_ticket(
            db,
            event_id=db_event.id,
            tier_id=tier.id,
            owner_id=user.id,
            token_id=body.token_id,
            tx_hash=body.tx_hash,
        )
    except crud.SoldOutError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Tier sold out")
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ticket with this tokenId already exists",
        )

    logger.info(
        "Confirmed token %d of event %s for user %s", body.token_id, db_event.id, user.id
    )
    return {"ticket": db_ticket}


@ticket.get("/{ticket_id}/qr", response_model=models.QRCodeResponse)
@db_connection_handler
async def get_ticket_qr(
    ticket_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Issue a freshly signed QR payload for one of the caller's tickets."""
    db_ticket = get_ticket_or_404(db, ticket_id)
    ensure_owner(db_ticket.owner_id, user, "You can only view QR for your own tickets")
    if db_ticket.status != TicketStatus.VALID:
        raise HTTPException(
            status_code=400, detail="Ticket is not valid - already used or expired"
        )

    qr_data = qr.build_qr_data(db_ticket.qr_code_secret, db_ticket.id, db_ticket.token_id)
    return {
        "qr_data": json.dumps(qr_data),
        "expires_at": qr_data["timestamp"] + QR_DISPLAY_TTL_SECONDS * 1000,
        "ticket": {
            "id": db_ticket.id,
            "event_title": db_ticket.event.title,
            "venue": db_ticket.event.venue,
            "start_time": db_ticket.event.start_time,
        },
    }


@ticket.post("/{ticket_id}/verify", response_model=models.VerifyResponse)
@db_connection_handler
async def verify_ticket(
    ticket_id: str,
    body: models.VerifyRequest,
    user: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    """Check a scanned QR payload at the door and mark the ticket used."""
    if not body.qr_data:
        raise HTTPException(status_code=400, detail="qr_data is required")
    try:
        payload = qr.parse_qr_data(body.qr_data)
    except qr.QRCodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if str(payload["ticketId"]) != ticket_id:
        raise HTTPException(status_code=400, detail="QR code does not match ticket")

    db_ticket = get_ticket_or_404(db, ticket_id)
    ensure_owner(
        db_ticket.event.organizer_id,
        user,
        "You can only verify tickets for your own events",
    )

    if not qr.signature_matches(db_ticket.qr_code_secret, payload):
        logger.warning("Rejected QR with bad signature for ticket %s", ticket_id)
        raise HTTPException(status_code=400, detail="Invalid QR signature")
    if qr.is_stale(payload["timestamp"], QR_MAX_AGE_SECONDS):
        raise HTTPException(status_code=400, detail="QR code has expired")

    if db_ticket.status == TicketStatus.USED or not crud.mark_ticket_used(db, db_ticket):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Ticket already used",
                "used_at": db_ticket.used_at.isoformat() if db_ticket.used_at else None,
            },
        )

    logger.info("Ticket %s verified by organizer %s", ticket_id, user.id)
    return {
        "valid": True,
        "ticket": {
            "id": db_ticket.id,
            "token_id": db_ticket.token_id,
            "tier_name": db_ticket.tier.name,
            "owner_wallet": db_ticket.owner.wallet_address,
            "event_title": db_ticket.event.title,
            "used_at": db_ticket.used_at,
        },
        "message": "Ticket verified and marked as used",
    }
