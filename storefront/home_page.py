# ---- HERO CAROUSEL APIS ----
import logging

from django.db import transaction, IntegrityError
from django.core.exceptions import ValidationError
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .carousel import CarouselController, resolve_slide_layout
from .models import HeroBanner, HeroSettings
from .permissions import FrontendOnlyPermission, IsStoreAdmin
from .utilities import (
    _as_bool,
    _as_int,
    _get_or_none,
    _iso,
    _parse_payload,
    media_type_for,
    not_found,
    save_media,
)

logger = logging.getLogger(__name__)

_BANNER_TEXT_FIELDS = (
    "title", "subtitle",
    "primary_button_text", "primary_button_link",
    "secondary_button_text", "secondary_button_link",
    "text_position", "vertical_alignment", "heading_align", "subheading_align", "button_align",
    "title_color", "title_font_size", "title_font_weight",
    "subtitle_color", "subtitle_font_size", "subtitle_font_weight",
    "text_animation", "content_width",
)

_SETTINGS_ALIGN_FIELDS = (
    "content_vertical_align", "content_horizontal_align", "heading_align", "subheading_align", "button_align",
)


def _hero_settings():
    settings_row, _ = HeroSettings.objects.get_or_create(singleton_lock="X")
    return settings_row


def _serialize_settings(s):
    return {
        "autoplay": s.autoplay,
        "autoplay_interval": s.autoplay_interval,
        "pause_on_hover": s.pause_on_hover,
        "show_arrows": s.show_arrows,
        "show_dots": s.show_dots,
        "transition_effect": s.transition_effect,
        "content_vertical_align": s.content_vertical_align,
        "content_horizontal_align": s.content_horizontal_align,
        "heading_align": s.heading_align,
        "subheading_align": s.subheading_align,
        "button_align": s.button_align,
    }


def _serialize_banner(b, settings_row=None, controller=None, index=None):
    out = {
        "id": str(b.id),
        "media_url": b.media_url,
        "media_type": b.media_type,
        "overlay_opacity": b.overlay_opacity,
        "advance_after_video": b.advance_after_video,
        "is_active": b.is_active,
        "order_index": b.order_index,
        "created_at": _iso(b.created_at),
    }
    for field in _BANNER_TEXT_FIELDS:
        out[field] = getattr(b, field)

    if settings_row is not None:
        out["layout"] = resolve_slide_layout(b, settings_row)
    if controller is not None and index is not None:
        out["loop_video"] = b.media_type == "video" and controller.should_loop_video(index)
        # Buttons render only as complete text/link pairs
        out["show_primary_button"] = bool(b.primary_button_text and b.primary_button_link)
        out["show_secondary_button"] = bool(b.secondary_button_text and b.secondary_button_link)
    return out


def _apply_banner_fields(banner, data):
    if "media_url" in data:
        banner.media_url = (data.get("media_url") or "").strip()
    if "media_type" in data:
        media_type = (data.get("media_type") or "").strip().lower()
        banner.media_type = media_type if media_type in ("image", "video") else media_type_for(banner.media_url)
    elif banner._state.adding and banner.media_url:
        banner.media_type = media_type_for(banner.media_url)

    for field in _BANNER_TEXT_FIELDS:
        if field in data:
            setattr(banner, field, data.get(field) or None)

    if "overlay_opacity" in data:
        raw = data.get("overlay_opacity")
        try:
            banner.overlay_opacity = None if raw in (None, "") else max(0.0, min(1.0, float(raw)))
        except (TypeError, ValueError):
            raise ValidationError("overlay_opacity must be a number between 0 and 1")
    if "advance_after_video" in data:
        banner.advance_after_video = _as_bool(data.get("advance_after_video"))
    if "is_active" in data:
        banner.is_active = _as_bool(data.get("is_active"), True)
    if "order_index" in data:
        banner.order_index = _as_int(data.get("order_index"), 0)

    if not banner.media_url:
        raise ValidationError("media_url is required")
    return banner


# --------------------------
# Public
# --------------------------

class ShowHeroAPIView(APIView):
    """
    GET /api/show-hero
    Active slides in display order, each with its resolved layout, plus the
    settings and the initial carousel state (autoplay on/off, dots).
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        try:
            settings_row = _hero_settings()
            banners = list(HeroBanner.objects.filter(is_active=True).order_by("order_index", "created_at"))
        except Exception as e:
            logger.exception("ShowHero failed")
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        controller = CarouselController(banners, settings_row)
        controller.mount()

        return Response({
            "banners": [
                _serialize_banner(b, settings_row, controller, i) for i, b in enumerate(banners)
            ],
            "settings": _serialize_settings(settings_row),
            "carousel": controller.snapshot(),
            "dots": controller.dots(),
        }, status=status.HTTP_200_OK)


# --------------------------
# Admin
# --------------------------

class ShowHeroBannersAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def get(self, request):
        banners = HeroBanner.objects.all().order_by("order_index", "created_at")
        return Response([_serialize_banner(b) for b in banners], status=status.HTTP_200_OK)


class SaveHeroBannerAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        try:
            with transaction.atomic():
                banner = HeroBanner()
                if "order_index" not in data:
                    last = HeroBanner.objects.order_by("-order_index").first()
                    banner.order_index = (last.order_index + 1) if last else 0
                _apply_banner_fields(banner, data)
                banner.save()
        except (ValidationError, IntegrityError) as e:
            return Response({"error": "; ".join(getattr(e, "messages", [str(e)]))},
                            status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, **_serialize_banner(banner)}, status=status.HTTP_201_CREATED)


class EditHeroBannerAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        banner = _get_or_none(HeroBanner.objects, pk=data.get("id")) if data.get("id") else None
        if not banner:
            return not_found("Banner not found")
        try:
            with transaction.atomic():
                _apply_banner_fields(banner, data)
                banner.save()
        except (ValidationError, IntegrityError) as e:
            return Response({"error": "; ".join(getattr(e, "messages", [str(e)]))},
                            status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, **_serialize_banner(banner)}, status=status.HTTP_200_OK)


class DeleteHeroBannerAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        banner = _get_or_none(HeroBanner.objects, pk=data.get("id")) if data.get("id") else None
        if not banner:
            return not_found("Banner not found")
        banner.delete()
        return Response({"success": True}, status=status.HTTP_200_OK)


class UpdateHeroOrderAPIView(APIView):
    """POST /api/update-hero-order { "ordered_ids": [id, id, ...] }"""
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        ordered_ids = data.get("ordered_ids") or []
        if not isinstance(ordered_ids, list) or not ordered_ids:
            return Response({"error": "ordered_ids is required"}, status=status.HTTP_400_BAD_REQUEST)

        for index, banner_id in enumerate(ordered_ids):
            banner = _get_or_none(HeroBanner.objects, pk=banner_id)
            if banner and banner.order_index != index:
                banner.order_index = index
                banner.save(update_fields=["order_index"])
        return Response({"success": True}, status=status.HTTP_200_OK)


class ShowHeroSettingsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def get(self, request):
        return Response(_serialize_settings(_hero_settings()), status=status.HTTP_200_OK)


class EditHeroSettingsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    @transaction.atomic
    def post(self, request):
        data = _parse_payload(request)
        s = _hero_settings()

        for field in ("autoplay", "pause_on_hover", "show_arrows", "show_dots"):
            if field in data:
                setattr(s, field, _as_bool(data.get(field)))
        if "autoplay_interval" in data:
            interval = _as_int(data.get("autoplay_interval"))
            if interval is None or interval <= 0:
                return Response({"error": "autoplay_interval must be a positive number of milliseconds"},
                                status=status.HTTP_400_BAD_REQUEST)
            s.autoplay_interval = interval
        if "transition_effect" in data:
            effect = (data.get("transition_effect") or "").strip().lower()
            if effect not in ("fade", "slide"):
                return Response({"error": "transition_effect must be fade or slide"},
                                status=status.HTTP_400_BAD_REQUEST)
            s.transition_effect = effect
        for field in _SETTINGS_ALIGN_FIELDS:
            if field in data:
                setattr(s, field, data.get(field) or None)

        s.save()
        return Response({"success": True, **_serialize_settings(s)}, status=status.HTTP_200_OK)


class UploadHeroMediaAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        """
        Accepts:
          - multipart: field name 'file'
          - JSON: { "file": <data-url> }
        """
        payload = request.FILES.get("file") or request.data.get("file")
        if not payload:
            return Response({"error": "No file provided"}, status=status.HTTP_400_BAD_REQUEST)

        url = save_media(payload, folder="hero")
        if not url:
            return Response({"error": "Invalid media"}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            "success": True,
            "url": request.build_absolute_uri(url) if url.startswith("/") else url,
            "media_type": media_type_for(url),
        }, status=status.HTTP_201_CREATED)
