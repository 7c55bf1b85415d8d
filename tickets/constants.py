class TicketStatus:
    VALID = "VALID"
    USED = "USED"


QR_FIELDS = ("ticketId", "tokenId", "timestamp", "signature")

# Largest token id a BIGINT column holds.
MAX_TOKEN_ID = 2**63 - 1
