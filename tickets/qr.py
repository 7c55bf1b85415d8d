"""
Signed, time-boxed QR payloads for ticket entry.

The payload shown to the holder is a JSON object::

    {"ticketId": "...", "tokenId": 7, "timestamp": 1767225600000, "signature": "..."}

where ``signature`` is the hex HMAC-SHA256 of ``"{ticketId}-{tokenId}-{timestamp}"``
keyed with the ticket's own secret. ``timestamp`` is in milliseconds.
"""

import hashlib
import hmac
import json
import time
from typing import Optional

from tickets.constants import QR_FIELDS


class QRCodeError(ValueError):
    pass


def now_ms() -> int:
    return int(time.time() * 1000)


def sign(secret: str, ticket_id, token_id, timestamp) -> str:
    message = f"{ticket_id}-{token_id}-{timestamp}"
    return hmac.new(
        secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def build_qr_data(secret: str, ticket_id: str, token_id: int, timestamp: Optional[int] = None) -> dict:
    timestamp = now_ms() if timestamp is None else timestamp
    return {
        "ticketId": ticket_id,
        "tokenId": token_id,
        "timestamp": timestamp,
        "signature": sign(secret, ticket_id, token_id, timestamp),
    }


def parse_qr_data(raw: str) -> dict:
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        raise QRCodeError("Invalid QR data format")
    if not isinstance(payload, dict):
        raise QRCodeError("Invalid QR data format")

    if any(payload.get(name) in (None, "") for name in QR_FIELDS):
        raise QRCodeError("Invalid QR data - missing fields")
    try:
        payload["timestamp"] = int(payload["timestamp"])
    except (TypeError, ValueError):
        raise QRCodeError("Invalid QR data format")
    return payload


def signature_matches(secret: str, payload: dict) -> bool:
    expected = sign(
        secret, payload["ticketId"], payload["tokenId"], payload["timestamp"]
    )
    return hmac.compare_digest(expected, str(payload["signature"]))


def is_stale(timestamp: int, max_age_seconds: int, now: Optional[int] = None) -> bool:
    now = now_ms() if now is None else now
    return now - timestamp > max_age_seconds * 1000
