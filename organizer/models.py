from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class TierSales(BaseModel):
    tier_id: str
    name: str
    price: Decimal
    total_supply: int
    sold_count: int
    remaining: int
    revenue: Decimal


class EventSalesResponse(BaseModel):
    event_id: str
    title: str
    is_active: bool
    contract_address: Optional[str] = None
    tiers: List[TierSales]
    tickets_sold: int
    tickets_used: int
    revenue: Decimal
