from contract.event_ticket import (
    ContractError,
    EventTicket,
    FundsWithdrawn,
    TicketMinted,
)

__all__ = [
    "ContractError",
    "EventTicket",
    "FundsWithdrawn",
    "TicketMinted",
]
