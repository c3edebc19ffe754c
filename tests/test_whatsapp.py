from types import SimpleNamespace

from storefront.whatsapp import (
    MAX_MESSAGE_LENGTH,
    build_whatsapp_link,
    cart_enquiry_message,
    product_enquiry_message,
)


def test_link_escapes_like_encode_uri_component():
    url = build_whatsapp_link("+91 98240 44585", "Hi! Sofa (2) & chair")
    assert url == "https://wa.me/919824044585?text=Hi!%20Sofa%20(2)%20%26%20chair"


def test_link_falls_back_to_store_number():
    assert build_whatsapp_link(None, "x").startswith("https://wa.me/919824044585?text=")


def test_product_enquiry_message():
    assert product_enquiry_message("Oak Bed", 2) == (
        "Hi! I want to buy: Oak Bed (Qty: 2). Please share the price and availability."
    )


def test_cart_message_lists_lines_in_order():
    lines = [
        {"title": "Oak Bed", "category": "Beds", "quantity": 1},
        SimpleNamespace(title="Side Table", category=None, quantity=3),
    ]
    assert cart_enquiry_message(lines) == (
        "Hello! I'm interested in the following products:\n\n"
        "1. Oak Bed (Beds) - Qty: 1\n"
        "2. Side Table (Furniture) - Qty: 3\n\n"
        "Please provide pricing and availability details."
    )


def test_cart_message_is_truncated():
    lines = [{"title": "x" * 100, "category": "Sofas", "quantity": 1} for _ in range(50)]
    assert len(cart_enquiry_message(lines)) == MAX_MESSAGE_LENGTH
