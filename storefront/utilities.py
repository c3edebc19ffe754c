# Standard Library
import os
import json
import uuid
import base64
import logging
from decimal import Decimal, InvalidOperation
from io import BytesIO

# Third-party
from PIL import Image as PILImage, UnidentifiedImageError

# Django
from django.utils import timezone
from django.core.exceptions import ValidationError
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .permissions import FrontendOnlyPermission, IsStoreAdmin

logger = logging.getLogger(__name__)

MEDIA_FOLDERS = ("hero", "products", "uploads")

_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".svg"}
_VIDEO_EXTS = {".mp4", ".webm", ".ogg", ".mov"}

_PIL_FORMAT_TO_EXT = {
    "jpeg": ".jpg",
    "png": ".png",
    "webp": ".webp",
    "gif": ".gif",
    "bmp": ".bmp",
}


# --------------------------
# Request parsing / coercion
# --------------------------

def _parse_payload(request):
    """Consistent, tolerant request payload parsing."""
    if isinstance(request.data, dict):
        return request.data
    try:
        body = request.body.decode("utf-8") if request.body else "{}"
        return json.loads(body or "{}")
    except (ValueError, UnicodeDecodeError):
        return {}


def _now():
    return timezone.now()


def _as_bool(val, default=False):
    if val is None or val == "":
        return default
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in ("true", "1", "yes", "on"):
        return True
    if s in ("false", "0", "no", "off"):
        return False
    return default


def _as_int(val, default=None):
    if val is None or str(val).strip() == "":
        return default
    try:
        return int(float(str(val).strip()))
    except (TypeError, ValueError):
        return default


def _to_decimal(val, default=None):
    if val is None or str(val).strip() == "":
        return default
    try:
        d = Decimal(str(val).strip())
    except (InvalidOperation, TypeError, ValueError):
        return default
    return d if d.is_finite() else default


def _as_list(val):
    """Coerce incoming field to list[str] safely."""
    if val is None:
        return []
    if isinstance(val, (list, tuple)):
        return [str(x) for x in val if str(x).strip()]
    if isinstance(val, str):
        return [v.strip() for v in val.split(",") if v.strip()]
    return []


def _iso(dt):
    return dt.isoformat() if dt else None


def _dec_str(val):
    return str(val) if val is not None else None


def _get_or_none(queryset, **lookup):
    """First row matching lookup, or None (also for malformed ids)."""
    try:
        return queryset.filter(**lookup).first()
    except (ValidationError, ValueError):
        return None


def not_found(message):
    return Response({"error": message, "not_found": True}, status=status.HTTP_404_NOT_FOUND)


# --------------------------
# Media
# --------------------------

def _is_data_url(s):
    return isinstance(s, str) and s.startswith("data:")


def _decode_data_url(data_url):
    """Returns (bytes, mime type)."""
    header, encoded = data_url.split(",", 1)
    mime = header[5:].split(";")[0].strip().lower()
    return base64.b64decode(encoded), mime


def _validated_image_ext(blob, fallback=".png"):
    img = PILImage.open(BytesIO(blob))
    img.load()  # force decode to catch truncated files early
    return _PIL_FORMAT_TO_EXT.get((img.format or "").lower(), fallback)


def save_media(file_or_data_url, folder="uploads"):
    """
    Store an uploaded file or a data URL under MEDIA_ROOT/<folder>/ and
    return its public URL. Images are validated with Pillow; videos are
    stored as-is. Returns None when the payload cannot be decoded.
    """
    if folder not in MEDIA_FOLDERS:
        folder = "uploads"

    try:
        # --- CASE 1: Data URL (base64) ---
        if _is_data_url(file_or_data_url):
            blob, mime = _decode_data_url(file_or_data_url)
            if mime.startswith("video/"):
                ext = "." + (mime.split("/", 1)[1] or "mp4")
            elif mime == "image/svg+xml":
                ext = ".svg"
            else:
                ext = _validated_image_ext(blob)

        # --- CASE 2: File-like / In-memory upload ---
        else:
            name = getattr(file_or_data_url, "name", "") or ""
            ext = os.path.splitext(name)[-1].lower()
            blob = file_or_data_url.read()
            if ext not in _VIDEO_EXTS and ext != ".svg":
                ext = _validated_image_ext(blob, fallback=ext if ext in _IMAGE_EXTS else ".png")

    except (ValueError, UnidentifiedImageError, OSError, AttributeError) as e:
        logger.warning("Media decode failed: %s", e)
        return None

    filename = f"{folder}/{uuid.uuid4().hex}{ext}"
    stored = default_storage.save(filename, ContentFile(blob))
    return default_storage.url(stored)


def media_type_for(url):
    ext = os.path.splitext((url or "").split("?")[0])[-1].lower()
    return "video" if ext in _VIDEO_EXTS else "image"


class UploadMediaAPIView(APIView):
    """
    POST /api/upload-media
    Multipart with `file`, or JSON with a data URL in `file`; optional `folder`.
    """
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request):
        data = _parse_payload(request)
        payload = request.FILES.get("file") or data.get("file")
        if not payload:
            return Response({"error": "No file provided"}, status=status.HTTP_400_BAD_REQUEST)

        folder = (data.get("folder") or "uploads").strip()
        url = save_media(payload, folder=folder)
        if not url:
            return Response({"error": "Media save failed"}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            "success": True,
            "url": request.build_absolute_uri(url) if url.startswith("/") else url,
            "media_type": media_type_for(url),
        }, status=status.HTTP_201_CREATED)
