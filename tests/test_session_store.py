import pytest
from django.contrib.auth.models import AnonymousUser

from storefront.exceptions import LoginRequired
from storefront.models import CartItem, WishlistItem
from storefront.session_store import CartStore, WishlistStore

pytestmark = pytest.mark.django_db


@pytest.fixture
def sofa(make_product, sofas):
    return make_product("Teak Sofa", 25000, category=sofas)


@pytest.fixture
def chair(make_product):
    return make_product("Accent Chair", 8000)


def test_guest_cart_lives_in_memory(sofa, chair):
    store = CartStore(AnonymousUser())
    store.add(sofa.pk)
    store.add(sofa.pk, 2)
    store.add(chair.pk)

    assert not store.is_authenticated
    assert store.total_items == 4
    assert [line.title for line in store.items] == ["Teak Sofa", "Accent Chair"]
    assert CartItem.objects.count() == 0

    store.update_quantity(chair.pk, 0)
    assert not store.contains(chair.pk)
    store.clear()
    assert store.items == []


def test_guest_cart_seed_drops_unknown_and_inactive(sofa, make_product):
    hidden = make_product("Retired Sofa", 100, is_active=False)
    store = CartStore(None)
    store.seed([
        {"product_id": str(sofa.pk), "quantity": 1},
        {"product_id": str(sofa.pk), "quantity": "2"},
        {"product_id": str(hidden.pk), "quantity": 1},
        {"product_id": "not-a-uuid", "quantity": 1},
        {"quantity": 5},
    ])
    assert len(store.items) == 1
    assert store.items[0].quantity == 3


def test_signed_in_cart_adds_in_one_row(shopper, sofa):
    store = CartStore(shopper)
    store.add(sofa.pk, 3)
    store.add(sofa.pk, 2)

    assert CartItem.objects.get(user=shopper, product=sofa).quantity == 5
    assert store.total_items == 5
    # Fresh session sees the stored cart
    assert CartStore(shopper).total_items == 5


def test_signed_in_update_and_remove(shopper, sofa, chair):
    store = CartStore(shopper)
    store.add(sofa.pk)
    store.add(chair.pk)
    store.update_quantity(sofa.pk, 4)
    assert CartItem.objects.get(user=shopper, product=sofa).quantity == 4

    store.update_quantity(sofa.pk, -1)
    assert not CartItem.objects.filter(user=shopper, product=sofa).exists()
    assert [line.title for line in store.items] == ["Accent Chair"]

    store.clear()
    assert CartItem.objects.filter(user=shopper).count() == 0


def test_login_replaces_guest_lines_with_stored_cart(shopper, sofa, chair):
    CartItem.objects.create(user=shopper, product=chair, quantity=2)
    store = CartStore(None)
    store.add(sofa.pk)

    store.set_user(shopper)
    assert [(line.title, line.quantity) for line in store.items] == [("Accent Chair", 2)]

    store.set_user(AnonymousUser())
    assert store.items == []


def test_cart_whatsapp_link(sofa):
    store = CartStore(None)
    store.add(sofa.pk, 2)
    link = store.whatsapp_link()
    assert link.startswith("https://wa.me/919824044585?text=")
    assert "Teak%20Sofa%20(Sofas)%20-%20Qty%3A%202" in link


def test_anonymous_wishlist_requires_login(sofa):
    store = WishlistStore(AnonymousUser())
    assert store.items == []
    with pytest.raises(LoginRequired) as exc:
        store.add(sofa.pk)
    assert exc.value.redirect == "/login"
    with pytest.raises(LoginRequired):
        store.remove(sofa.pk)


def test_wishlist_add_is_idempotent(shopper, sofa):
    store = WishlistStore(shopper)
    store.add(sofa.pk)
    store.add(sofa.pk)
    assert WishlistItem.objects.filter(user=shopper).count() == 1
    assert store.contains(sofa.pk)

    store.remove(sofa.pk)
    assert store.items == []
