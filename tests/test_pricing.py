from decimal import Decimal
from types import SimpleNamespace

import pytest

from storefront.pricing import (
    PLACEHOLDER_IMAGE,
    discount_badge,
    discount_percent,
    display_price,
    format_currency,
    has_discount,
    original_price,
    resolve_variant_images,
    variant_price,
)


def _product(**kw):
    base = dict(
        price=None, mrp=None, base_price=None, base_mrp=None, sale_price=None,
        discount_percentage=None, images=[], image_url=None,
    )
    base.update(kw)
    return SimpleNamespace(**base)


@pytest.mark.parametrize("mrp, price, expected", [
    (10000, 7500, 25),
    (3, 2, 33),
    (8, 7, 13),        # 12.5 rounds half up
    (None, 7500, None),
    (7500, 7500, None),
    (5000, 7500, None),
    (1000, 0, None),
])
def test_discount_percent(mrp, price, expected):
    assert discount_percent(mrp, price) == expected


def test_discount_badge_text():
    assert discount_badge(_product(mrp=Decimal("10000"), price=Decimal("7500"))) == "25% OFF"
    assert discount_badge(_product(mrp=None, price=Decimal("7500"))) is None


@pytest.mark.parametrize("amount, expected", [
    (None, "₹0.00"),
    (0, "₹0"),
    (999, "₹999"),
    (1234.5, "₹1,235"),
    (100000, "₹1,00,000"),
    (1234567, "₹12,34,567"),
    (Decimal("-2500"), "-₹2,500"),
])
def test_format_currency_indian_grouping(amount, expected):
    assert format_currency(amount) == expected


def test_display_price_prefers_sale_price():
    p = _product(price=Decimal("1200"), base_price=Decimal("1000"), sale_price=Decimal("850"),
                 discount_percentage=Decimal("10"))
    assert display_price(p) == Decimal("850")


def test_display_price_applies_percentage_to_base():
    p = _product(price=Decimal("1200"), base_price=Decimal("1000"), discount_percentage=Decimal("10"))
    assert display_price(p) == Decimal("900.00")
    assert has_discount(p)


def test_display_price_falls_back_to_price():
    p = _product(price=Decimal("1200"))
    assert display_price(p) == Decimal("1200")
    assert original_price(p) == Decimal("1200")
    assert not has_discount(p)


def test_original_price_order():
    assert original_price(_product(price=1, base_mrp=Decimal("50"), mrp=Decimal("40"))) == Decimal("50")
    assert original_price(_product(price=1, mrp=Decimal("40"))) == Decimal("40")


def test_variant_price_overrides_product():
    p = _product(price=Decimal("1000"))
    assert variant_price(p) == Decimal("1000")
    assert variant_price(p, SimpleNamespace(price=Decimal("1500"))) == Decimal("1500")
    assert variant_price(p, SimpleNamespace(price=None)) == Decimal("1000")


def test_variant_images_sorted_then_fallbacks():
    variant = SimpleNamespace(images=[
        SimpleNamespace(image_url="/b.jpg", sort_order=2),
        SimpleNamespace(image_url="/c.jpg", sort_order=None),
        SimpleNamespace(image_url="/a.jpg", sort_order=1),
    ])
    product = _product(images=["/gallery-1.jpg"], image_url="/main.jpg")

    assert resolve_variant_images(product, variant) == ["/a.jpg", "/b.jpg", "/c.jpg"]
    assert resolve_variant_images(product, SimpleNamespace(images=[])) == ["/gallery-1.jpg"]
    assert resolve_variant_images(_product(image_url="/main.jpg")) == ["/main.jpg"]
    assert resolve_variant_images(_product()) == [PLACEHOLDER_IMAGE]


@pytest.mark.django_db
def test_product_save_syncs_discount_and_base_price(make_product):
    p = make_product("Teak Sofa", 7500, mrp=Decimal("10000"))
    assert p.discount_percent == 25
    assert p.base_price == Decimal("7500")
    assert p.slug == "teak-sofa"

    p.mrp = None
    p.save()
    p.refresh_from_db()
    assert p.discount_percent is None
