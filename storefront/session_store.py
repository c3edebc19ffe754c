"""
Cart and wishlist state for one shopper session.

Signed-in shoppers: every mutation is written to the database first and the
in-memory list is then refreshed from the authoritative read. Guests keep a
memory-only cart and have no wishlist.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F

from .exceptions import LoginRequired
from .models import CartItem, Product, WishlistItem
from .whatsapp import build_whatsapp_link, cart_enquiry_message

logger = logging.getLogger(__name__)


def _is_authenticated(user):
    return bool(user is not None and getattr(user, "is_authenticated", False))


class CartLine:
    __slots__ = ("product", "quantity")

    def __init__(self, product, quantity=1):
        self.product = product
        self.quantity = quantity

    @property
    def product_id(self):
        return self.product.pk

    @property
    def title(self):
        return self.product.title

    @property
    def category(self):
        return self.product.category.name if self.product.category_id else None


class _SessionStore:
    def __init__(self, user=None):
        self.user = user if _is_authenticated(user) else None
        self.items = []
        self.is_loading = False
        self.sync()

    @property
    def is_authenticated(self):
        return self.user is not None

    def set_user(self, user):
        """Sign-in / sign-out: drop the current lines and reload for the new identity."""
        self.user = user if _is_authenticated(user) else None
        self.items = []
        return self.sync()

    def contains(self, product_id):
        pid = str(product_id)
        return any(str(line.product_id) == pid for line in self.items)

    def sync(self):
        if not self.is_authenticated:
            return self.items
        self.is_loading = True
        try:
            self.items = self._read()
        finally:
            self.is_loading = False
        return self.items

    def _read(self):
        raise NotImplementedError


class CartStore(_SessionStore):
    def seed(self, lines):
        """
        Guest carts live on the client; rebuild one from [{product_id, quantity}].
        Unknown or inactive products are dropped.
        """
        if self.is_authenticated:
            return self.items
        wanted = []
        for line in lines or []:
            if not isinstance(line, dict) or not line.get("product_id"):
                continue
            try:
                quantity = int(line.get("quantity") or 1)
            except (TypeError, ValueError):
                continue
            if quantity > 0:
                wanted.append((str(line["product_id"]), quantity))

        products = {}
        for pid, _ in wanted:
            try:
                product = Product.objects.select_related("category").filter(pk=pid, is_active=True).first()
            except ValidationError:
                product = None
            if product:
                products[pid] = product

        self.items = []
        for pid, quantity in wanted:
            if pid not in products:
                continue
            existing = next((line for line in self.items if str(line.product_id) == pid), None)
            if existing:
                existing.quantity += quantity
            else:
                self.items.append(CartLine(products[pid], quantity))
        return self.items

    def _read(self):
        rows = (
            CartItem.objects.filter(user=self.user)
            .select_related("product", "product__category")
            .order_by("created_at")
        )
        return [CartLine(row.product, row.quantity) for row in rows]

    def add(self, product_id, quantity=1):
        quantity = int(quantity)
        if quantity <= 0:
            return self.items

        if not self.is_authenticated:
            for line in self.items:
                if str(line.product_id) == str(product_id):
                    line.quantity += quantity
                    return self.items
            product = Product.objects.select_related("category").get(pk=product_id)
            self.items.append(CartLine(product, quantity))
            return self.items

        with transaction.atomic():
            updated = CartItem.objects.filter(user=self.user, product_id=product_id).update(
                quantity=F("quantity") + quantity
            )
            if not updated:
                try:
                    with transaction.atomic():
                        CartItem.objects.create(user=self.user, product_id=product_id, quantity=quantity)
                except IntegrityError:
                    # Row inserted by a concurrent request; fold into it
                    CartItem.objects.filter(user=self.user, product_id=product_id).update(
                        quantity=F("quantity") + quantity
                    )
        return self.sync()

    def remove(self, product_id):
        if not self.is_authenticated:
            self.items = [line for line in self.items if str(line.product_id) != str(product_id)]
            return self.items
        CartItem.objects.filter(user=self.user, product_id=product_id).delete()
        return self.sync()

    def update_quantity(self, product_id, quantity):
        quantity = int(quantity)
        if quantity <= 0:
            return self.remove(product_id)

        if not self.is_authenticated:
            for line in self.items:
                if str(line.product_id) == str(product_id):
                    line.quantity = quantity
            return self.items
        CartItem.objects.filter(user=self.user, product_id=product_id).update(quantity=quantity)
        return self.sync()

    def clear(self):
        if self.is_authenticated:
            CartItem.objects.filter(user=self.user).delete()
        self.items = []
        return self.items

    @property
    def total_items(self):
        return sum(line.quantity for line in self.items)

    def whatsapp_link(self, number=None):
        return build_whatsapp_link(number, cart_enquiry_message(self.items))


class WishlistStore(_SessionStore):
    def _read(self):
        return list(
            WishlistItem.objects.filter(user=self.user)
            .select_related("product", "product__category")
            .order_by("-created_at")
        )

    def add(self, product_id):
        if not self.is_authenticated:
            raise LoginRequired()
        WishlistItem.objects.get_or_create(user=self.user, product_id=product_id)
        return self.sync()

    def remove(self, product_id):
        if not self.is_authenticated:
            raise LoginRequired()
        WishlistItem.objects.filter(user=self.user, product_id=product_id).delete()
        return self.sync()
