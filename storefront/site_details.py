# ---- SITE DETAILS APIS ----
import logging

from django.db import transaction
from django.core.exceptions import ValidationError
from django.core.validators import URLValidator
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .models import FooterSocialLink, ProductPageSettings
from .permissions import FrontendOnlyPermission, IsStoreAdmin
from .utilities import _as_bool, _as_int, _get_or_none, _parse_payload, not_found

logger = logging.getLogger(__name__)

_PRODUCT_PAGE_FIELDS = (
    "product_tag_label",
    "pricing_note",
    "delivery_title",
    "pincode_placeholder",
    "delivery_button_text",
)

_validate_url = URLValidator(schemes=["http", "https"])


def _product_page_settings(create=False):
    # Reads fall back to unsaved defaults; the first edit creates the row
    if create:
        s, _ = ProductPageSettings.objects.get_or_create(singleton_lock="X")
        return s
    return ProductPageSettings.objects.filter(singleton_lock="X").first() or ProductPageSettings()


def _serialize_product_page_settings(s):
    return {field: getattr(s, field) for field in _PRODUCT_PAGE_FIELDS}


def _serialize_link(link):
    return {
        "id": str(link.id),
        "platform": link.platform,
        "icon": link.icon or link.platform.lower(),
        "url": link.url,
        "is_active": link.is_active,
        "display_order": link.display_order,
    }


def _apply_link_fields(link, data):
    if "platform" in data:
        link.platform = (data.get("platform") or "").strip()
    if "icon" in data:
        link.icon = (data.get("icon") or "").strip().lower()
    if "url" in data:
        link.url = (data.get("url") or "").strip()
    if "is_active" in data:
        link.is_active = _as_bool(data.get("is_active"), True)
    if "display_order" in data:
        link.display_order = _as_int(data.get("display_order"), 0)

    if not link.platform:
        raise ValidationError("platform is required")
    _validate_url(link.url)
    return link


# --------------------------
# Footer social links
# --------------------------

class ShowFooterLinksAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        links = FooterSocialLink.objects.filter(is_active=True).order_by("display_order", "created_at")
        return Response([_serialize_link(link) for link in links], status=status.HTTP_200_OK)


class ShowAdminFooterLinksAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def get(self, request):
        links = FooterSocialLink.objects.all().order_by("display_order", "created_at")
        return Response([_serialize_link(link) for link in links], status=status.HTTP_200_OK)


class SaveFooterLinkAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        link = FooterSocialLink()
        if "display_order" not in data:
            link.display_order = FooterSocialLink.objects.count()
        try:
            _apply_link_fields(link, data)
        except ValidationError as e:
            return Response({"error": "; ".join(e.messages)}, status=status.HTTP_400_BAD_REQUEST)
        link.save()
        return Response(_serialize_link(link), status=status.HTTP_201_CREATED)


class EditFooterLinkAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        link = _get_or_none(FooterSocialLink.objects, pk=data.get("id")) if data.get("id") else None
        if not link:
            return not_found("Link not found")
        try:
            _apply_link_fields(link, data)
        except ValidationError as e:
            return Response({"error": "; ".join(e.messages)}, status=status.HTTP_400_BAD_REQUEST)
        link.save()
        return Response({"success": True, **_serialize_link(link)}, status=status.HTTP_200_OK)


class DeleteFooterLinkAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        link = _get_or_none(FooterSocialLink.objects, pk=data.get("id")) if data.get("id") else None
        if not link:
            return not_found("Link not found")
        link.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)


# --------------------------
# Product page copy
# --------------------------

class ShowProductPageSettingsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        try:
            s = _product_page_settings()
        except Exception as e:
            logger.exception("Loading product page settings failed")
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(_serialize_product_page_settings(s), status=status.HTTP_200_OK)


class EditProductPageSettingsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        s = _product_page_settings(create=True)
        for field in _PRODUCT_PAGE_FIELDS:
            if field in data:
                value = (data.get(field) or "").strip()
                if not value:
                    return Response({"error": f"{field} cannot be empty"}, status=status.HTTP_400_BAD_REQUEST)
                setattr(s, field, value)
        s.save()
        return Response({"success": True, **_serialize_product_page_settings(s)}, status=status.HTTP_200_OK)
