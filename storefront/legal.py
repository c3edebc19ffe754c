# ---- LEGAL PAGES APIS ----
import logging

from django.db import transaction, IntegrityError
from django.utils.text import slugify
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .models import LegalPage
from .permissions import FrontendOnlyPermission, IsStoreAdmin
from .utilities import _as_bool, _get_or_none, _iso, _parse_payload, not_found

logger = logging.getLogger(__name__)


def _serialize_legal(page, with_content=True):
    out = {
        "id": str(page.id),
        "slug": page.slug,
        "title": page.title,
        "is_published": page.is_published,
        "created_at": _iso(page.created_at),
    }
    if with_content:
        out["content"] = page.content or ""
    return out


# --------------------------
# Public
# --------------------------

class ShowLegalPagesAPIView(APIView):
    """GET /api/show-legal-pages -> published pages (slug + title) for the footer."""
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        pages = LegalPage.objects.filter(is_published=True).order_by("title")
        return Response([{"slug": p.slug, "title": p.title} for p in pages], status=status.HTTP_200_OK)


class ShowLegalPageAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, slug):
        page = LegalPage.objects.filter(slug=slug, is_published=True).first()
        if not page:
            return not_found("Page not found")
        return Response(_serialize_legal(page), status=status.HTTP_200_OK)


# --------------------------
# Admin
# --------------------------

class ShowAdminLegalPagesAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def get(self, request):
        pages = LegalPage.objects.all().order_by("title")
        return Response([_serialize_legal(p, with_content=False) for p in pages], status=status.HTTP_200_OK)


class SaveLegalPageAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        title = (data.get("title") or "").strip()
        if not title:
            return Response({"error": "title is required"}, status=status.HTTP_400_BAD_REQUEST)

        slug = slugify(data.get("slug") or "")
        if slug and LegalPage.objects.filter(slug=slug).exists():
            return Response({"error": "A page with this slug already exists"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                page = LegalPage.objects.create(
                    title=title,
                    slug=slug,
                    content=data.get("content") or "",
                    is_published=_as_bool(data.get("is_published"), False),
                )
        except IntegrityError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(_serialize_legal(page), status=status.HTTP_201_CREATED)


class EditLegalPageAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        page = _get_or_none(LegalPage.objects, pk=data.get("id")) if data.get("id") else None
        if not page:
            return not_found("Page not found")

        if "title" in data:
            title = (data.get("title") or "").strip()
            if not title:
                return Response({"error": "title cannot be empty"}, status=status.HTTP_400_BAD_REQUEST)
            page.title = title
        if data.get("slug"):
            slug = slugify(data["slug"])
            if LegalPage.objects.filter(slug=slug).exclude(pk=page.pk).exists():
                return Response({"error": "A page with this slug already exists"},
                                status=status.HTTP_400_BAD_REQUEST)
            page.slug = slug
        if "content" in data:
            page.content = data.get("content") or ""
        if "is_published" in data:
            page.is_published = _as_bool(data.get("is_published"))

        with transaction.atomic():
            page.save()
        return Response({"success": True, **_serialize_legal(page)}, status=status.HTTP_200_OK)


class DeleteLegalPageAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        page = _get_or_none(LegalPage.objects, pk=data.get("id")) if data.get("id") else None
        if not page:
            return not_found("Page not found")
        page.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)
