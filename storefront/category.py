# Standard Library
import logging

# Django
from django.db import transaction, IntegrityError
from django.db.models import Count, Q

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .catalog import FilterState, filter_products
from .models import Category
from .permissions import FrontendOnlyPermission, IsStoreAdmin
from .product import serialize_product_card
from .utilities import _as_bool, _as_int, _get_or_none, _iso, _parse_payload, not_found, save_media

logger = logging.getLogger(__name__)


def _serialize_category(c, product_count=None):
    out = {
        "id": str(c.id),
        "name": c.name,
        "slug": c.slug,
        "image_url": c.image_url,
        "show_on_home": c.show_on_home,
        "home_order": c.home_order,
        "created_at": _iso(c.created_at),
    }
    if product_count is not None:
        out["product_count"] = product_count
    return out


def _apply_category_fields(category, data, files=None):
    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            raise IntegrityError("Name is required")
        category.name = name
    if "slug" in data:
        category.slug = (data.get("slug") or "").strip()
    if "show_on_home" in data:
        category.show_on_home = _as_bool(data.get("show_on_home"))
    if "home_order" in data:
        category.home_order = _as_int(data.get("home_order"))

    image = (files or {}).get("image") or data.get("image")
    if image and (not isinstance(image, str) or image.startswith("data:")):
        url = save_media(image, folder="uploads")
        if url:
            category.image_url = url
    elif "image_url" in data:
        category.image_url = data.get("image_url") or None
    return category


class ShowCategoriesAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        qs = Category.objects.annotate(
            product_count=Count("products", filter=Q(products__is_active=True))
        ).order_by("name")
        return Response(
            [_serialize_category(c, c.product_count) for c in qs],
            status=status.HTTP_200_OK,
        )


class ShowHomeCategoriesAPIView(APIView):
    """Category tiles on the home page: flagged categories by home_order."""
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        rows = list(Category.objects.filter(show_on_home=True))
        rows.sort(key=lambda c: (c.home_order is None, c.home_order or 0, c.name.lower()))
        return Response([_serialize_category(c) for c in rows], status=status.HTTP_200_OK)


class ShowCategoryAPIView(APIView):
    """
    GET /api/show-category/<slug> -> category plus its filtered product list.
    Accepts the same filter params as show-products.
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, slug):
        category = Category.objects.filter(slug=slug).first()
        if not category:
            return not_found("Category not found")

        filters = FilterState.from_query_params(request.query_params)
        filters.category_slug = category.slug
        products = [serialize_product_card(p) for p in filter_products(filters)]
        return Response({
            "category": _serialize_category(category),
            "products": products,
            "count": len(products),
            "filters": filters.to_query_params(),
        }, status=status.HTTP_200_OK)


class SaveCategoryAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        if not (data.get("name") or "").strip():
            return Response({"error": "Name is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                category = _apply_category_fields(Category(), data, request.FILES)
                category.save()
        except IntegrityError as e:
            logger.exception("SaveCategory failed")
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"success": True, **_serialize_category(category)}, status=status.HTTP_201_CREATED)


class EditCategoryAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        category = _get_or_none(Category.objects, pk=data.get("id")) if data.get("id") else None
        if not category:
            return not_found("Category not found")

        try:
            with transaction.atomic():
                _apply_category_fields(category, data, request.FILES)
                category.save()
        except IntegrityError as e:
            logger.exception("EditCategory failed")
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"success": True, **_serialize_category(category)}, status=status.HTTP_200_OK)


class DeleteCategoryAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        category = _get_or_none(Category.objects, pk=data.get("id")) if data.get("id") else None
        if not category:
            return not_found("Category not found")
        # Products keep existing, they just lose their category
        category.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)
