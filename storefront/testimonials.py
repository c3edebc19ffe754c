# views/testimonials.py
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction, IntegrityError
from django.db.models import Avg, Count

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import DuplicateReview
from .models import Product, ProductReview, Testimonial
from .permissions import FrontendOnlyPermission, IsStoreAdmin
from .utilities import (
    _as_bool,
    _as_int,
    _get_or_none,
    _iso,
    _parse_payload,
    not_found,
    save_media,
)

logger = logging.getLogger(__name__)

# --------------------------
# Helpers
# --------------------------

def _clamp_rating(n, default=5):
    try:
        n = int(round(float(n)))
    except (TypeError, ValueError):
        return default
    return max(1, min(5, n))


def _serialize_testimonial(t, request=None):
    photo = t.photo_url or ""
    if request and photo.startswith("/"):
        photo = request.build_absolute_uri(photo)
    return {
        "id": str(t.id),
        "name": t.name,
        "designation": t.designation or "",
        "company": t.company or "",
        "city": t.city or "",
        "review_text": t.review_text,
        "rating": int(t.rating or 5),
        "photo_url": photo,
        "show_on_home": t.show_on_home,
        "display_order": t.display_order,
        "active": t.active,
        "created_at": _iso(t.created_at),
    }


def _apply_testimonial_fields(t, data, files=None):
    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            raise IntegrityError("name is required")
        t.name = name
    for field in ("designation", "company", "city"):
        if field in data:
            setattr(t, field, (data.get(field) or "").strip() or None)
    if "review_text" in data:
        text = (data.get("review_text") or "").strip()
        if not text:
            raise IntegrityError("review_text is required")
        t.review_text = text
    if "rating" in data:
        t.rating = _clamp_rating(data.get("rating"))
    if "show_on_home" in data:
        t.show_on_home = _as_bool(data.get("show_on_home"), True)
    if "active" in data:
        t.active = _as_bool(data.get("active"), True)
    if "display_order" in data:
        t.display_order = max(0, _as_int(data.get("display_order"), 0))

    photo = (files or {}).get("photo") or data.get("photo")
    if photo and (not isinstance(photo, str) or photo.startswith("data:")):
        url = save_media(photo, folder="uploads")
        if url:
            t.photo_url = url
    elif "photo_url" in data:
        t.photo_url = (data.get("photo_url") or "").strip() or None
    return t


# --------------------------
# Testimonials
# GET /api/show-testimonials[?all=1]
# --------------------------
class ShowTestimonialsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        qs = Testimonial.objects.all().order_by("display_order", "-created_at")
        include_all = _as_bool(request.query_params.get("all"), default=False)
        if include_all:
            # Full list is for the admin panel only
            IsStoreAdmin().has_permission(request, self)
        else:
            qs = qs.filter(active=True, show_on_home=True)

        data = [_serialize_testimonial(t, request) for t in qs]
        return Response(data, status=status.HTTP_200_OK)


class SaveTestimonialAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        if not (data.get("name") or "").strip() or not (data.get("review_text") or "").strip():
            return Response({"error": "name and review_text are required"}, status=status.HTTP_400_BAD_REQUEST)

        t = _apply_testimonial_fields(Testimonial(), data, request.FILES)
        t.save()
        return Response(_serialize_testimonial(t, request), status=status.HTTP_201_CREATED)


class EditTestimonialAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        t = _get_or_none(Testimonial.objects, pk=data.get("id")) if data.get("id") else None
        if not t:
            return not_found("Testimonial not found")
        try:
            with transaction.atomic():
                _apply_testimonial_fields(t, data, request.FILES)
                t.save()
        except IntegrityError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, **_serialize_testimonial(t, request)}, status=status.HTTP_200_OK)

    put = post


class DeleteTestimonialAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        t = _get_or_none(Testimonial.objects, pk=data.get("id")) if data.get("id") else None
        if not t:
            return not_found("Testimonial not found")
        t.delete()
        return Response({"success": True, "deleted": str(data.get("id"))}, status=status.HTTP_200_OK)


# -----------------------
# Product reviews
# -----------------------

def _serialize_review(r, with_product=False):
    user = r.user
    out = {
        "id": str(r.id),
        "product_id": str(r.product_id),
        "rating": r.rating,
        "title": r.title or "",
        "comment": r.comment or "",
        "status": r.status,
        "author": (user.get_full_name() or user.username) if user else "",
        "created_at": _iso(r.created_at),
    }
    if with_product:
        out["product"] = {"id": str(r.product.id), "title": r.product.title, "slug": r.product.slug}
    return out


def rating_summary(product):
    agg = ProductReview.objects.filter(product=product, status="approved").aggregate(
        avg=Avg("rating"), cnt=Count("id")
    )
    count = int(agg.get("cnt") or 0)
    if not count:
        return {"average": 0.0, "count": 0}
    average = Decimal(str(agg["avg"])).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return {"average": float(average), "count": count}


def submit_review(product, user, rating, title="", comment=""):
    """Reviews always start as pending; one per shopper per product."""
    if ProductReview.objects.filter(product=product, user=user).exists():
        raise DuplicateReview()
    try:
        with transaction.atomic():
            return ProductReview.objects.create(
                product=product,
                user=user,
                rating=_clamp_rating(rating),
                title=(title or "").strip() or None,
                comment=(comment or "").strip() or None,
                status="pending",
            )
    except IntegrityError:
        raise DuplicateReview()


class ShowProductReviewsAPIView(APIView):
    """GET /api/show-product-reviews/<slug> -> approved reviews + rating summary."""
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, slug):
        product = Product.objects.filter(slug=slug, is_active=True).first()
        if not product:
            return not_found("Product not found")

        reviews = (
            ProductReview.objects.filter(product=product, status="approved")
            .select_related("user")
            .order_by("-created_at")
        )
        return Response({
            "summary": rating_summary(product),
            "reviews": [_serialize_review(r) for r in reviews],
        }, status=status.HTTP_200_OK)


class SaveProductReviewAPIView(APIView):
    """
    POST /api/save-product-review
    { product_id, rating (1-5), title?, comment? }  (signed-in shoppers)
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        if not request.user or not request.user.is_authenticated:
            return Response({"error": "Please login to write a review", "redirect": "/login"},
                            status=status.HTTP_401_UNAUTHORIZED)

        data = _parse_payload(request)
        product = _get_or_none(Product.objects.filter(is_active=True), pk=data.get("product_id")) \
            if data.get("product_id") else None
        if not product:
            return not_found("Product not found")
        if data.get("rating") in (None, ""):
            return Response({"error": "rating is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            review = submit_review(
                product, request.user, data.get("rating"), data.get("title"), data.get("comment")
            )
        except DuplicateReview as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            "success": True,
            "message": "Thank you! Your review has been submitted for approval.",
            "review": _serialize_review(review),
        }, status=status.HTTP_201_CREATED)


class ShowAdminReviewsAPIView(APIView):
    """GET /api/show-admin-reviews[?status=pending|approved|rejected]"""
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def get(self, request):
        qs = ProductReview.objects.select_related("user", "product").order_by("-created_at")
        status_filter = (request.query_params.get("status") or "").strip().lower()
        if status_filter in dict(ProductReview.STATUS_CHOICES):
            qs = qs.filter(status=status_filter)
        return Response([_serialize_review(r, with_product=True) for r in qs], status=status.HTTP_200_OK)


class EditReviewStatusAPIView(APIView):
    """POST /api/edit-review-status { id, status: approved|rejected }"""
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        new_status = (data.get("status") or "").strip().lower()
        if new_status not in ("approved", "rejected"):
            return Response({"error": "status must be approved or rejected"}, status=status.HTTP_400_BAD_REQUEST)

        review = _get_or_none(ProductReview.objects.select_related("user", "product"), pk=data.get("id")) \
            if data.get("id") else None
        if not review:
            return not_found("Review not found")

        review.status = new_status
        review.save(update_fields=["status"])
        return Response({"success": True, "review": _serialize_review(review, with_product=True)},
                        status=status.HTTP_200_OK)


class DeleteReviewAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        review = _get_or_none(ProductReview.objects, pk=data.get("id")) if data.get("id") else None
        if not review:
            return not_found("Review not found")
        review.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)
