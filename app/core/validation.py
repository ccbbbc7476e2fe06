"""Input validation and sanitization helpers shared by schemas and services."""

import html
import re
from datetime import date, datetime

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[6-9]\d{9}$")  # Indian mobile numbers
GSTIN_RE = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
PAN_RE = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
ORDER_NUMBER_STRIP_RE = re.compile(r"[^a-zA-Z0-9\-_]")

MAX_AMOUNT = 999999999.99
MAX_WEIGHT_GM = 1000000


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email.strip()))


def validate_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(re.sub(r"\s+", "", phone)))


def sanitize_string(value: str | None, max_length: int = 255) -> str:
    """Trim, truncate and drop angle brackets."""
    if not value:
        return ""
    return re.sub(r"[<>]", "", value.strip()[:max_length])


def validate_number(value, min_value: float = 0, max_value: float = float(2**53 - 1)) -> float | None:
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if num != num or num < min_value or num > max_value:  # NaN check
        return None
    return num


def validate_gst_number(gst: str) -> bool:
    return bool(GSTIN_RE.match(gst.strip().upper()))


def validate_pan(pan: str) -> bool:
    return bool(PAN_RE.match(pan.strip().upper()))


def sanitize_order_number(order_number: str) -> str:
    return ORDER_NUMBER_STRIP_RE.sub("", order_number)[:50]


def validate_date(value: str) -> bool:
    """Accept YYYY-MM-DD or a full ISO-8601 timestamp."""
    for parser in (date.fromisoformat, datetime.fromisoformat):
        try:
            parser(value)
            return True
        except (TypeError, ValueError):
            continue
    return False


def escape_html(text: str) -> str:
    return html.escape(text, quote=True)


def validate_amount(amount) -> float | None:
    """Currency amount, rounded to 2 decimals. None when out of range."""
    num = validate_number(amount, 0, MAX_AMOUNT)
    return None if num is None else round(num, 2)


def validate_weight(weight) -> float | None:
    """Weight in grams, rounded to 2 decimals. None when out of range."""
    num = validate_number(weight, 0, MAX_WEIGHT_GM)
    return None if num is None else round(num, 2)
