"""
Price and discount presentation for product cards and detail pages.

Everything here works on plain attributes so it can be used on model
instances as well as lightweight stand-ins in tests.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CURRENCY_SYMBOL = "₹"
PLACEHOLDER_IMAGE = "/placeholder.svg"


def _dec(val):
    if val is None or val == "":
        return None
    if isinstance(val, Decimal):
        return val
    try:
        return Decimal(str(val))
    except (InvalidOperation, TypeError, ValueError):
        return None


def _round_half_up(val):
    return int(val.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def discount_percent(mrp, price):
    """
    Whole-number percentage off the list price, or None when there is no
    real discount (no mrp, mrp not above price, or a free item).
    """
    mrp, price = _dec(mrp), _dec(price)
    if mrp is None or price is None:
        return None
    if not (mrp > price > 0):
        return None
    return _round_half_up((mrp - price) / mrp * 100)


def discount_badge(product):
    pct = discount_percent(getattr(product, "mrp", None), getattr(product, "price", None))
    if pct is None:
        return None
    return f"{pct}% OFF"


def _base_price(product):
    base = _dec(getattr(product, "base_price", None))
    return base if base is not None else _dec(getattr(product, "price", None))


def display_price(product):
    sale = _dec(getattr(product, "sale_price", None))
    if sale is not None:
        return sale
    base = _base_price(product)
    pct = _dec(getattr(product, "discount_percentage", None))
    if base is not None and pct and pct > 0:
        return (base * (1 - pct / 100)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return base


def original_price(product):
    for attr in ("base_mrp", "mrp"):
        val = _dec(getattr(product, attr, None))
        if val is not None:
            return val
    return _base_price(product)


def has_discount(product):
    pct = _dec(getattr(product, "discount_percentage", None))
    if pct and pct > 0:
        return True
    sale = _dec(getattr(product, "sale_price", None))
    orig = original_price(product)
    return sale is not None and orig is not None and sale < orig


def _group_indian(digits):
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount):
    """INR without decimals, Indian digit grouping. None renders as ₹0.00."""
    value = _dec(amount)
    if value is None:
        return f"{CURRENCY_SYMBOL}0.00"
    whole = _round_half_up(abs(value))
    sign = "-" if value < 0 and whole else ""
    return f"{sign}{CURRENCY_SYMBOL}{_group_indian(str(whole))}"


def variant_price(product, variant=None):
    if variant is not None and getattr(variant, "price", None) is not None:
        return _dec(variant.price)
    return _dec(getattr(product, "price", None))


def resolve_variant_images(product, variant=None):
    """
    Image gallery for the selected colour: the variant's own images by
    sort_order, else the product gallery, else its single image, else the
    placeholder.
    """
    if variant is not None:
        images = getattr(variant, "images", None)
        rows = list(images.all()) if hasattr(images, "all") else list(images or [])
        rows.sort(key=lambda im: (getattr(im, "sort_order", None) is None, getattr(im, "sort_order", None) or 0))
        urls = [im.image_url for im in rows if getattr(im, "image_url", None)]
        if urls:
            return urls

    gallery = [u for u in (getattr(product, "images", None) or []) if u]
    if gallery:
        return gallery
    if getattr(product, "image_url", None):
        return [product.image_url]
    return [PLACEHOLDER_IMAGE]
