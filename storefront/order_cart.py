# Standard Library
import logging

# Django
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .exceptions import LoginRequired
from .models import Product
from .permissions import FrontendOnlyPermission
from .pricing import display_price, format_currency
from .product import serialize_product_card
from .session_store import CartStore, WishlistStore
from .utilities import _as_int, _dec_str, _get_or_none, _iso, _parse_payload, not_found
from .whatsapp import build_whatsapp_link, cart_enquiry_message, product_enquiry_message

logger = logging.getLogger(__name__)


# --------------------------
# Helpers
# --------------------------

def _cart_store(request, data=None):
    """
    Signed-in: the stored cart. Guest: the cart the client sent in `items`.
    """
    store = CartStore(request.user)
    if not store.is_authenticated and data is not None:
        store.seed(data.get("items"))
    return store


def _serialize_cart(store):
    lines = []
    for line in store.items:
        unit = display_price(line.product)
        total = unit * line.quantity if unit is not None else None
        lines.append({
            "product": serialize_product_card(line.product),
            "product_id": str(line.product_id),
            "quantity": line.quantity,
            "line_total": _dec_str(total),
            "formatted_line_total": format_currency(total),
        })
    return {
        "items": lines,
        "total_items": store.total_items,
        "persisted": store.is_authenticated,
        "whatsapp_link": store.whatsapp_link() if store.items else None,
    }


def _active_product(product_id):
    if not product_id:
        return None
    return _get_or_none(Product.objects.filter(is_active=True), pk=product_id)


def _login_required_response(exc):
    return Response({"error": str(exc), "redirect": exc.redirect}, status=status.HTTP_401_UNAUTHORIZED)


# --------------------------
# Cart
# --------------------------

class ShowCartAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        try:
            store = CartStore(request.user)
        except DatabaseError:
            logger.exception("Failed to load cart")
            return Response({"error": "Failed to load cart"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(_serialize_cart(store), status=status.HTTP_200_OK)


class SaveCartAPIView(APIView):
    """
    POST /api/save-cart { product_id, quantity? = 1, items? (guest cart) }
    Adds `quantity` units in one write.
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        product = _active_product(data.get("product_id"))
        if not product:
            return not_found("Product not found")

        quantity = _as_int(data.get("quantity"), 1)
        if quantity is None or quantity <= 0:
            return Response({"error": "quantity must be a positive number"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            store = _cart_store(request, data)
            store.add(product.pk, quantity)
        except DatabaseError:
            logger.exception("Failed to update cart")
            return Response({"error": "Failed to update cart"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(_serialize_cart(store), status=status.HTTP_200_OK)


class EditCartAPIView(APIView):
    """POST /api/edit-cart { product_id, quantity }; quantity <= 0 removes the line."""
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        product_id = data.get("product_id")
        quantity = _as_int(data.get("quantity"))
        if not product_id or quantity is None:
            return Response({"error": "product_id and quantity are required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            store = _cart_store(request, data)
            store.update_quantity(product_id, quantity)
        except ValidationError:
            return Response({"error": "Invalid product_id"}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            logger.exception("Failed to update quantity")
            return Response({"error": "Failed to update quantity"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(_serialize_cart(store), status=status.HTTP_200_OK)


class DeleteCartItemAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        if not data.get("product_id"):
            return Response({"error": "product_id is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            store = _cart_store(request, data)
            store.remove(data["product_id"])
        except ValidationError:
            return Response({"error": "Invalid product_id"}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            logger.exception("Failed to remove item")
            return Response({"error": "Failed to remove item"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(_serialize_cart(store), status=status.HTTP_200_OK)


class ClearCartAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        try:
            store = CartStore(request.user)
            store.clear()
        except DatabaseError:
            logger.exception("Failed to clear cart")
            return Response({"error": "Failed to clear cart"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(_serialize_cart(store), status=status.HTTP_200_OK)


class CartWhatsAppAPIView(APIView):
    """
    POST /api/cart-whatsapp { items?: [{product_id, quantity}] }
    Builds the enquiry link for the stored cart, or for the guest cart sent in the body.
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        store = _cart_store(request, data)
        if not store.items:
            return Response({"error": "Cart is empty"}, status=status.HTTP_400_BAD_REQUEST)

        message = cart_enquiry_message(store.items)
        return Response({
            "message": message,
            "url": build_whatsapp_link(settings.WHATSAPP_NUMBER, message),
            "total_items": store.total_items,
        }, status=status.HTTP_200_OK)


class BuyNowAPIView(APIView):
    """GET /api/buy-now/<slug>?quantity=<n>"""
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, slug):
        product = Product.objects.filter(slug=slug, is_active=True).first()
        if not product:
            return not_found("Product not found")

        quantity = max(1, _as_int(request.query_params.get("quantity"), 1) or 1)
        message = product_enquiry_message(product.title, quantity)
        return Response({
            "message": message,
            "url": build_whatsapp_link(settings.WHATSAPP_NUMBER, message),
        }, status=status.HTTP_200_OK)


# --------------------------
# Wishlist
# --------------------------

def _serialize_wishlist(store):
    return [
        {
            "id": str(item.id),
            "product_id": str(item.product_id),
            "product": serialize_product_card(item.product),
            "created_at": _iso(item.created_at),
        }
        for item in store.items
    ]


class ShowWishlistAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        try:
            store = WishlistStore(request.user)
        except DatabaseError:
            logger.exception("Failed to load wishlist")
            return Response({"error": "Failed to load wishlist"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(_serialize_wishlist(store), status=status.HTTP_200_OK)


class SaveWishlistAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        store = WishlistStore(request.user)
        try:
            if not store.is_authenticated:
                raise LoginRequired()
            product = _active_product(data.get("product_id"))
            if not product:
                return not_found("Product not found")
            store.add(product.pk)
        except LoginRequired as e:
            return _login_required_response(e)
        except DatabaseError:
            logger.exception("Failed to add to wishlist")
            return Response({"error": "Failed to add to wishlist"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"success": True, "message": "Added to wishlist", "items": _serialize_wishlist(store)},
            status=status.HTTP_200_OK,
        )


class DeleteWishlistAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        if not data.get("product_id"):
            return Response({"error": "product_id is required"}, status=status.HTTP_400_BAD_REQUEST)

        store = WishlistStore(request.user)
        try:
            store.remove(data["product_id"])
        except LoginRequired as e:
            return _login_required_response(e)
        except ValidationError:
            return Response({"error": "Invalid product_id"}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            logger.exception("Failed to remove from wishlist")
            return Response({"error": "Failed to remove from wishlist"},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "items": _serialize_wishlist(store)}, status=status.HTTP_200_OK)
