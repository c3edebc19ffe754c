"""
WhatsApp "checkout": there is no payment flow, orders are enquiries sent
to the store's WhatsApp number as a prefilled message.
"""
from urllib.parse import quote

from django.conf import settings

MAX_MESSAGE_LENGTH = 2000
_URI_SAFE = "!~*'()"


def _digits(number):
    return "".join(ch for ch in str(number or "") if ch.isdigit())


def build_whatsapp_link(number, message):
    number = _digits(number) or _digits(settings.WHATSAPP_NUMBER)
    # Same escaping as encodeURIComponent
    return f"https://wa.me/{number}?text={quote(message, safe=_URI_SAFE)}"


def product_enquiry_message(title, quantity=1):
    return f"Hi! I want to buy: {title} (Qty: {quantity}). Please share the price and availability."


def _line_value(line, name, default=None):
    if isinstance(line, dict):
        return line.get(name, default)
    return getattr(line, name, default)


def cart_enquiry_message(lines):
    """
    lines: iterables of {title, category, quantity} (dicts or objects).
    """
    rows = []
    for i, line in enumerate(lines, start=1):
        title = _line_value(line, "title") or ""
        category = _line_value(line, "category") or "Furniture"
        quantity = _line_value(line, "quantity") or 1
        rows.append(f"{i}. {title} ({category}) - Qty: {quantity}")

    message = (
        "Hello! I'm interested in the following products:\n\n"
        + "\n".join(rows)
        + "\n\nPlease provide pricing and availability details."
    )
    return message[:MAX_MESSAGE_LENGTH]
