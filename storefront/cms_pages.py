import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .cms_defaults import PAGE_DEFAULTS
from .content_editor import ContentEditor, merge_with_defaults, read_page_content
from .exceptions import ContentPathError, ContentSaveError
from .models import CMSPage
from .permissions import FrontendOnlyPermission, IsStoreAdmin
from .utilities import _iso, _parse_payload

logger = logging.getLogger(__name__)


class ShowCMSPageAPIView(APIView):
    """
    GET /api/show-cms-page/<page_key>
    `content` is what the editor works on (stored row, else the default shape);
    `display` is the stored content laid over the defaults for rendering.
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, page_key):
        default = PAGE_DEFAULTS.get(page_key)
        try:
            stored = read_page_content(page_key)
        except Exception:
            logger.exception("Reading CMS page %s failed", page_key)
            stored = None

        if stored is None and default is None:
            return Response({"page_key": page_key, "content": None, "display": None, "stored": False},
                            status=status.HTTP_200_OK)

        return Response({
            "page_key": page_key,
            "stored": stored is not None,
            "content": stored if stored is not None else default,
            "display": merge_with_defaults(default or {}, stored),
        }, status=status.HTTP_200_OK)


class SaveCMSPageAPIView(APIView):
    """
    POST /api/save-cms-page/<page_key>
    Either { "content": {...} } to replace the whole document, or
    { "updates": [{"path": "hero.heading", "value": "..."}, ...] } to edit fields.
    """
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def post(self, request, page_key):
        data = _parse_payload(request)
        editor = ContentEditor(page_key)

        if "content" in data:
            content = data.get("content")
            if not isinstance(content, dict):
                return Response({"error": "content must be an object"}, status=status.HTTP_400_BAD_REQUEST)
            editor.content = content
            editor.is_loaded = True
            editor.is_dirty = True
        else:
            updates = data.get("updates")
            if not isinstance(updates, list) or not updates:
                return Response({"error": "Provide content or a list of updates"},
                                status=status.HTTP_400_BAD_REQUEST)
            editor.load()
            try:
                for item in updates:
                    if not isinstance(item, dict) or "path" not in item:
                        return Response({"error": "Each update needs a path"}, status=status.HTTP_400_BAD_REQUEST)
                    editor.update(item["path"], item.get("value"))
            except ContentPathError as e:
                return Response({"error": str(e), "path": e.path}, status=status.HTTP_400_BAD_REQUEST)

        try:
            editor.submit()
        except ContentSaveError as e:
            return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "page_key": page_key, "content": editor.content},
                        status=status.HTTP_200_OK)


class ShowCMSPagesAPIView(APIView):
    permission_classes = [FrontendOnlyPermission, IsStoreAdmin]

    def get(self, request):
        rows = {p.page_key: p for p in CMSPage.objects.all().order_by("page_key")}
        keys = sorted(set(rows) | set(PAGE_DEFAULTS))
        return Response([
            {
                "page_key": key,
                "stored": key in rows,
                "updated_at": _iso(rows[key].updated_at) if key in rows else None,
            }
            for key in keys
        ], status=status.HTTP_200_OK)
