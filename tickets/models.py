from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, conint, constr

from event.models import EventResponse
from tickets.constants import MAX_TOKEN_ID
from tiers.models import TierResponse


class TicketConfirm(BaseModel):
    event_id: constr(min_length=1)
    tier_id: constr(min_length=1)
    tx_hash: constr(strip_whitespace=True, min_length=1, max_length=100)
    token_id: conint(ge=0, le=MAX_TOKEN_ID)


class TicketResponse(BaseModel):

    class Config:
        from_attributes = True

    id: str
    event_id: str
    tier_id: str
    owner_id: str
    token_id: int
    status: str
    mint_tx_hash: str
    purchased_at: datetime
    used_at: Optional[datetime] = None
    event: EventResponse
    tier: TierResponse


class TicketEnvelope(BaseModel):
    ticket: TicketResponse


class TicketListResponse(BaseModel):
    tickets: List[TicketResponse]


class QRTicketSummary(BaseModel):
    id: str
    event_title: str
    venue: Optional[str] = None
    start_time: datetime


class QRCodeResponse(BaseModel):
    qr_data: str
    expires_at: int
    ticket: QRTicketSummary


class VerifyRequest(BaseModel):
    qr_data: Optional[str] = None


class VerifiedTicket(BaseModel):
    id: str
    token_id: int
    tier_name: str
    owner_wallet: str
    event_title: str
    used_at: datetime


class VerifyResponse(BaseModel):
    valid: bool
    ticket: VerifiedTicket
    message: str
