"""
Order numbers, QR payloads and pickup tokens
"""
import re
import secrets
import uuid
from datetime import datetime
from typing import Optional

ORDER_NUMBER_PATTERN = re.compile(r"^LND\d{8}$")
INTAKE_PREFIX = "ORD-"
PICKUP_PREFIX = "PKP-"
DELIVERY_PREFIX = "DLV-"


def generate_order_number(moment: datetime) -> str:
    """LND followed by the last 8 digits of the epoch milliseconds"""
    millis = str(int(moment.timestamp() * 1000))
    return f"LND{millis[-8:]}"


def random_order_number() -> str:
    return f"LND{secrets.randbelow(10 ** 8):08d}"


def generate_delivery_qr_code() -> str:
    return f"{DELIVERY_PREFIX}{secrets.token_hex(8).upper()}"


def generate_pickup_token() -> str:
    return f"{PICKUP_PREFIX}{secrets.token_urlsafe(18)}"


def build_intake_code(user_id: str, moment: datetime) -> str:
    """Drop-off payload a customer shows at the counter: ORD-<epoch ms>-<user uuid>"""
    return f"{INTAKE_PREFIX}{int(moment.timestamp() * 1000)}-{user_id}"


def parse_intake_code(code: str) -> Optional[str]:
    """
    Extract the user id from a drop-off payload
    
    Returns:
        User id, or None if the payload is malformed
    """
    if not code.startswith(INTAKE_PREFIX):
        return None
    parts = code.split("-")
    # ORD, timestamp, then the five groups of the uuid
    if len(parts) < 7 or not parts[1].isdigit():
        return None
    user_id = "-".join(parts[2:])
    try:
        uuid.UUID(user_id)
    except ValueError:
        return None
    return user_id
