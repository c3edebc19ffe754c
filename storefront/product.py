# Standard Library
import logging

# Django
from django.db import transaction, IntegrityError, DatabaseError
from django.core.exceptions import ValidationError

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Utilities / Local
from .catalog import (
    FilterState,
    PriceRangeSlider,
    filter_products,
    product_queryset,
    related_products,
    search_suggestions,
)
from .models import Category, Product, ProductVariant, ProductVariantImage
from .permissions import FrontendOnlyPermission, IsStoreAdmin
from .pricing import (
    discount_badge,
    display_price,
    format_currency,
    has_discount,
    original_price,
    resolve_variant_images,
    variant_price,
)
from .utilities import (
    _as_bool,
    _as_int,
    _as_list,
    _dec_str,
    _iso,
    _parse_payload,
    _to_decimal,
    _get_or_none,
    _is_data_url,
    not_found,
    save_media,
)

logger = logging.getLogger(__name__)

# -----------------------
# Serializers
# -----------------------

def _serialize_category_ref(category):
    if not category:
        return None
    return {"id": str(category.id), "name": category.name, "slug": category.slug}


def _serialize_variant(v, product=None):
    images = sorted(
        v.images.all(),
        key=lambda im: (im.sort_order is None, im.sort_order or 0),
    )
    return {
        "id": str(v.id),
        "color_name": v.color_name,
        "color_hex": v.color_hex,
        "price": _dec_str(v.price),
        "mrp": _dec_str(v.mrp),
        "sku": v.sku,
        "stock": v.stock,
        "is_active": v.is_active,
        "images": [
            {"id": str(im.id), "image_url": im.image_url, "sort_order": im.sort_order}
            for im in images
        ],
    }


def serialize_product_card(p):
    price_now = display_price(p)
    return {
        "id": str(p.id),
        "title": p.title,
        "slug": p.slug,
        "short_description": p.short_description or "",
        "price": _dec_str(p.price),
        "mrp": _dec_str(p.mrp),
        "discount_percent": p.discount_percent,
        "discount_badge": discount_badge(p),
        "base_price": _dec_str(p.base_price),
        "display_price": _dec_str(price_now),
        "original_price": _dec_str(original_price(p)),
        "has_discount": has_discount(p),
        "formatted_price": format_currency(price_now),
        "images": resolve_variant_images(p),
        "image_url": p.image_url,
        "image_alt": p.image_alt or p.title,
        "category": _serialize_category_ref(p.category),
        "is_new_arrival": p.is_new_arrival,
        "is_hot_selling": p.is_hot_selling,
        "is_featured": p.is_featured,
        "is_on_sale": p.is_on_sale,
        "is_active": p.is_active,
        "created_at": _iso(p.created_at),
    }


def serialize_product_detail(p, variant=None):
    data = serialize_product_card(p)
    data.update({
        "description": p.description or "",
        "specifications": p.specifications or {},
        "key_features": p.key_features or [],
        "warranty_coverage": p.warranty_coverage or [],
        "warranty_care": p.warranty_care or [],
        "dimensions": p.dimensions or "",
        "base_mrp": _dec_str(p.base_mrp),
        "sale_price": _dec_str(p.sale_price),
        "discount_percentage": _dec_str(p.discount_percentage),
        "meta_title": p.meta_title or p.title,
        "meta_description": p.meta_description or p.short_description or "",
        "variants": [_serialize_variant(v) for v in p.variants.all() if v.is_active],
    })

    # Gallery and price follow the selected colour
    data["selected_variant_id"] = str(variant.id) if variant else None
    data["images"] = resolve_variant_images(p, variant)
    selected_price = variant_price(p, variant)
    data["selected_price"] = _dec_str(selected_price)
    data["formatted_selected_price"] = format_currency(selected_price)
    return data


# -----------------------
# Save/Update Functions
# -----------------------

_DECIMAL_FIELDS = (
    "price", "mrp", "base_price", "base_mrp", "sale_price", "discount_percentage",
)
_TEXT_FIELDS = (
    "description", "short_description", "dimensions", "meta_title", "meta_description", "image_alt",
)
_FLAG_FIELDS = (
    "is_new_arrival", "is_hot_selling", "is_featured", "is_on_sale", "is_active",
)
_LIST_FIELDS = ("key_features", "warranty_coverage", "warranty_care")


def _resolve_images(values):
    """Upload data URLs, keep plain URLs, preserve order."""
    urls = []
    for item in values or []:
        if _is_data_url(item):
            url = save_media(item, folder="products")
            if url:
                urls.append(url)
        elif isinstance(item, str) and item.strip():
            urls.append(item.strip())
    return urls


def save_product_basic(data, existing_product=None):
    product = existing_product or Product()

    if existing_product is None or "title" in data:
        title = (data.get("title") or "").strip()
        if not title:
            raise IntegrityError("Missing required field: title")
        product.title = title

    if existing_product is None and data.get("price") in (None, ""):
        raise IntegrityError("Missing required field: price")

    for field in _DECIMAL_FIELDS:
        if field in data:
            val = _to_decimal(data.get(field))
            if val is None and field == "price":
                raise IntegrityError("Invalid price")
            setattr(product, field, val)

    # price/base_price and mrp/base_mrp are written as pairs
    for field, base in (("price", "base_price"), ("mrp", "base_mrp")):
        if field in data and base not in data:
            setattr(product, base, getattr(product, field))
        elif base in data and field not in data and getattr(product, base) is not None:
            setattr(product, field, getattr(product, base))

    if product.price is not None and product.price < 0:
        raise IntegrityError("Price cannot be negative")

    for field in _TEXT_FIELDS:
        if field in data:
            setattr(product, field, data.get(field) or "")

    for field in _FLAG_FIELDS:
        if field in data:
            setattr(product, field, _as_bool(data.get(field)))

    for field in _LIST_FIELDS:
        if field in data:
            setattr(product, field, _as_list(data.get(field)))

    if "specifications" in data:
        specs = data.get("specifications") or {}
        if not isinstance(specs, dict):
            raise IntegrityError("specifications must be an object")
        product.specifications = {str(k): str(v) for k, v in specs.items()}

    if "slug" in data:
        product.slug = (data.get("slug") or "").strip()

    if "category_id" in data:
        cid = data.get("category_id")
        product.category = _get_or_none(Category.objects, pk=cid) if cid else None

    if "images" in data:
        product.images = _resolve_images(data.get("images"))
    if "image_url" in data:
        product.image_url = data.get("image_url") or None
    if not product.image_url and product.images:
        product.image_url = product.images[0]

    product.save()
    return product


def save_variant(data, product, variant=None):
    variant = variant or ProductVariant(product=product)
    if "color_name" in data or variant._state.adding:
        color_name = (data.get("color_name") or "").strip()
        if not color_name:
            raise IntegrityError("Missing required field: color_name")
        variant.color_name = color_name
    if "color_hex" in data:
        variant.color_hex = data.get("color_hex") or None
    if "price" in data:
        variant.price = _to_decimal(data.get("price"))
    if "mrp" in data:
        variant.mrp = _to_decimal(data.get("mrp"))
    if "sku" in data:
        variant.sku = data.get("sku") or None
    if "stock" in data:
        variant.stock = _as_int(data.get("stock"), 0)
    if "is_active" in data:
        variant.is_active = _as_bool(data.get("is_active"), True)
    variant.save()

    if "images" in data:
        variant.images.all().delete()
        for i, url in enumerate(_resolve_images(data.get("images"))):
            ProductVariantImage.objects.create(variant=variant, image_url=url, sort_order=i)
    return variant


def save_product_variants(data, product):
    for item in data.get("variants") or []:
        if not isinstance(item, dict):
            continue
        existing = None
        if item.get("id"):
            existing = ProductVariant.objects.filter(pk=item["id"], product=product).first()
        save_variant(item, product, existing)


def _fresh_product(pk):
    return Product.objects.select_related("category").prefetch_related("variants__images").get(pk=pk)


# -----------------------
# API Views (public)
# -----------------------

class ShowProductsAPIView(APIView):
    """
    GET /api/show-products?category=&minPrice=&maxPrice=&discountedOnly=&newArrivals=&hotSelling=&sort=
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        filters = FilterState.from_query_params(request.query_params)
        try:
            products = list(filter_products(filters))
        except DatabaseError:
            logger.exception("ShowProducts query failed")
            return Response({"error": "Failed to load products"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        slider = PriceRangeSlider()
        slider.sync_from(filters)
        return Response({
            "products": [serialize_product_card(p) for p in products],
            "count": len(products),
            "filters": filters.to_query_params(),
            "has_active_filters": filters.has_active_filters,
            "price_range": {
                "min": 0,
                "max": slider.upper_bound,
                "step": slider.step,
                "value": list(slider.value),
            },
        }, status=status.HTTP_200_OK)


class ShowProductAPIView(APIView):
    """GET /api/show-product/<slug>?variant=<variant id>"""
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, slug):
        product = product_queryset().filter(slug=slug).first()
        if not product:
            return not_found("Product not found")

        variant = None
        variant_id = request.query_params.get("variant")
        if variant_id:
            variant = next((v for v in product.variants.all() if str(v.id) == variant_id), None)

        return Response(serialize_product_detail(product, variant), status=status.HTTP_200_OK)


class ShowRelatedProductsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, slug):
        product = Product.objects.filter(slug=slug, is_active=True).first()
        if not product:
            return not_found("Product not found")
        return Response(
            [serialize_product_card(p) for p in related_products(product)],
            status=status.HTTP_200_OK,
        )


class SearchSuggestionsAPIView(APIView):
    """
    GET /api/search-suggestions?q=<text>&seq=<n>
    `seq` is echoed back so the client can ignore responses to older keystrokes.
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        query = request.query_params.get("q", "")
        seq = _as_int(request.query_params.get("seq"))
        try:
            results = search_suggestions(query)
        except DatabaseError:
            logger.exception("Search suggestions failed for %r", query)
            results = []
        return Response({"query": query, "seq": seq, "results": results}, status=status.HTTP_200_OK)


# -----------------------
# API Views (admin)
# -----------------------

class ShowAdminProductsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def get(self, request):
        qs = Product.objects.select_related("category").order_by("-created_at")
        if not _as_bool(request.query_params.get("all"), default=True):
            qs = qs.filter(is_active=True)
        return Response([serialize_product_card(p) for p in qs], status=status.HTTP_200_OK)


class SaveProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)

        if not (data.get("title") or "").strip():
            return Response({"error": "Field 'title' is required."}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                product = save_product_basic(data)
                save_product_variants(data, product)
            return Response(
                {"success": True, "product": serialize_product_detail(_fresh_product(product.pk))},
                status=status.HTTP_201_CREATED,
            )

        except (IntegrityError, ValidationError) as e:
            logger.exception("SaveProduct IntegrityError (rolled back)")
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        except Exception as e:
            logger.exception("SaveProduct failed")
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class EditProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        product_id = data.get("id")
        if not product_id:
            return Response({"error": "id is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                product = _get_or_none(Product.objects.select_for_update(), pk=product_id)
                if not product:
                    return not_found("Product not found")
                product = save_product_basic(data, existing_product=product)
                save_product_variants(data, product)
            return Response(
                {"success": True, "product": serialize_product_detail(_fresh_product(product.pk))},
                status=status.HTTP_200_OK,
            )

        except (IntegrityError, ValidationError) as e:
            logger.exception("EditProduct IntegrityError (rolled back)")
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        except Exception as e:
            logger.exception("EditProduct failed")
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    put = post


class DeleteProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        ids = data.get("ids") or ([data["id"]] if data.get("id") else [])
        if not ids:
            return Response({"error": "No product IDs provided"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                qs = Product.objects.filter(pk__in=ids)
                deleted = qs.count()
                qs.delete()
            return Response({"success": True, "deleted": deleted}, status=status.HTTP_200_OK)
        except (ValidationError, ValueError) as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            logger.exception("DeleteProduct failed")
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    delete = post


class SaveVariantAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        product = _get_or_none(Product.objects, pk=data.get("product_id"))
        if not product:
            return not_found("Product not found")
        try:
            with transaction.atomic():
                variant = save_variant(data, product)
        except IntegrityError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, "variant": _serialize_variant(variant)}, status=status.HTTP_201_CREATED)


class EditVariantAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        variant = _get_or_none(ProductVariant.objects.select_related("product"), pk=data.get("id"))
        if not variant:
            return not_found("Variant not found")
        try:
            with transaction.atomic():
                variant = save_variant(data, variant.product, variant)
        except IntegrityError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, "variant": _serialize_variant(variant)}, status=status.HTTP_200_OK)


class DeleteVariantAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        if not data.get("id"):
            return Response({"error": "id is required"}, status=status.HTTP_400_BAD_REQUEST)
        variant = _get_or_none(ProductVariant.objects, pk=data["id"])
        if not variant:
            return not_found("Variant not found")
        variant.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)


class SaveVariantImageAPIView(APIView):
    """
    POST /api/save-variant-image
    { variant_id, image_url | image (data URL / file), sort_order? }
    """
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        variant = _get_or_none(ProductVariant.objects, pk=data.get("variant_id"))
        if not variant:
            return not_found("Variant not found")

        payload = request.FILES.get("image") or data.get("image")
        url = (data.get("image_url") or "").strip()
        if payload and not url:
            url = save_media(payload, folder="products") or ""
        if not url:
            return Response({"error": "image_url or image is required"}, status=status.HTTP_400_BAD_REQUEST)

        sort_order = _as_int(data.get("sort_order"))
        if sort_order is None:
            sort_order = variant.images.count()
        image = ProductVariantImage.objects.create(variant=variant, image_url=url, sort_order=sort_order)
        return Response(
            {"success": True, "id": str(image.id), "image_url": image.image_url, "sort_order": image.sort_order},
            status=status.HTTP_201_CREATED,
        )


class DeleteVariantImageAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        if not data.get("id"):
            return Response({"error": "id is required"}, status=status.HTTP_400_BAD_REQUEST)
        image = _get_or_none(ProductVariantImage.objects, pk=data["id"])
        if not image:
            return not_found("Image not found")
        image.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)
