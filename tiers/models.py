from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, condecimal, conint, conlist, constr


class TierCreate(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    price: condecimal(ge=0, max_digits=36, decimal_places=18)
    total_supply: conint(gt=0)


class TierBulkCreate(BaseModel):
    tiers: conlist(TierCreate, min_length=1)


class TierResponse(BaseModel):

    class Config:
        from_attributes = True

    id: str
    event_id: str
    name: str
    price: Decimal
    total_supply: int
    sold_count: int
    created_at: datetime


class TierCreateResponse(BaseModel):
    tier: TierResponse


class TierListResponse(BaseModel):
    tiers: List[TierResponse]


class TierBulkCreateResponse(TierListResponse):
    message: str
