"""
In-process model of the ``EventTicket`` ticket contract.

Each deployed contract belongs to one event. It sells a fixed supply per
tier at a fixed price (integer wei), mints sequential token ids starting
at 1, refunds overpayment and lets only the organizer withdraw the
accumulated balance. Failed calls raise ``ContractError`` with the revert
reason and leave the state untouched.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

logger = logging.getLogger(__name__)


class ContractError(Exception):
    """A reverted contract call."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class TicketMinted:
    buyer: str
    token_id: int
    tier_id: int


@dataclass(frozen=True)
class FundsWithdrawn:
    organizer: str
    amount: int


@dataclass
class Tier:
    price: int
    supply: int
    minted: int = 0


def _same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()


@dataclass
class EventTicket:
    organizer: str
    event_id: str
    name: str
    symbol: str
    tier_prices: List[int]
    tier_supply: List[int]
    base_uri: str = ""

    tiers: List[Tier] = field(init=False, default_factory=list)
    balance: int = field(init=False, default=0)
    refunds: Dict[str, int] = field(init=False, default_factory=dict)
    events: List[Union[TicketMinted, FundsWithdrawn]] = field(
        init=False, default_factory=list
    )
    _owners: Dict[int, str] = field(init=False, default_factory=dict)
    _token_tiers: Dict[int, int] = field(init=False, default_factory=dict)
    _next_token_id: int = field(init=False, default=1)

    def __post_init__(self):
        if len(self.tier_prices) != len(self.tier_supply):
            raise ContractError("Tier arrays length mismatch")
        if not self.tier_prices:
            raise ContractError("No tiers")
        self.tiers = [
            Tier(price=int(price), supply=int(supply))
            for price, supply in zip(self.tier_prices, self.tier_supply)
        ]

    # Mutating calls

    def mint_ticket(self, sender: str, tier_id: int, value: int) -> int:
        if tier_id < 0 or tier_id >= len(self.tiers):
            raise ContractError("Invalid tier")
        tier = self.tiers[tier_id]
        if tier.minted >= tier.supply:
            raise ContractError("Tier sold out")
        if value < tier.price:
            raise ContractError("Insufficient payment")

        token_id = self._next_token_id
        self._next_token_id += 1
        tier.minted += 1
        self._owners[token_id] = sender
        self._token_tiers[token_id] = tier_id
        self.balance += tier.price

        excess = value - tier.price
        if excess > 0:
            self.refunds[sender] = self.refunds.get(sender, 0) + excess

        self.events.append(TicketMinted(buyer=sender, token_id=token_id, tier_id=tier_id))
        logger.debug("Minted token %d (tier %d) to %s", token_id, tier_id, sender)
        return token_id

    def withdraw(self, sender: str) -> int:
        if not _same_address(sender, self.organizer):
            raise ContractError("Only organizer can call this")
        if self.balance == 0:
            raise ContractError("No funds to withdraw")

        amount = self.balance
        self.balance = 0
        self.events.append(FundsWithdrawn(organizer=self.organizer, amount=amount))
        return amount

    # Views

    def get_tier_info(self, tier_id: int) -> Tuple[int, int, int]:
        if tier_id < 0 or tier_id >= len(self.tiers):
            raise ContractError("Invalid tier")
        tier = self.tiers[tier_id]
        return tier.price, tier.supply, tier.minted

    def get_tier_count(self) -> int:
        return len(self.tiers)

    def get_ticket_tier(self, token_id: int) -> int:
        self._require_minted(token_id)
        return self._token_tiers[token_id]

    def owner_of(self, token_id: int) -> str:
        self._require_minted(token_id)
        return self._owners[token_id]

    def total_minted(self) -> int:
        return self._next_token_id - 1

    def get_balance(self) -> int:
        return self.balance

    def token_uri(self, token_id: int) -> str:
        self._require_minted(token_id)
        return f"{self.base_uri}{token_id}"

    def _require_minted(self, token_id: int):
        if token_id not in self._owners:
            raise ContractError("Token does not exist")
