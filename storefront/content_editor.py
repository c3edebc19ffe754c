"""
Generic editor for the JSON documents behind the marketing pages.

A page is one nested JSON object keyed by its page key ("about_page",
"quality_page", ...). Admin forms address fields with dot-paths such as
"hero.heading" or "core_values.2.title"; edits are applied to a local copy
and only written back, as a whole object, on submit().
"""
import copy
import logging

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from .cms_defaults import PAGE_DEFAULTS
from .exceptions import ContentPathError, ContentSaveError
from .models import CMSPage

logger = logging.getLogger(__name__)

CACHE_PREFIX = "cms-page:"
_MISSING = object()


# --------------------------
# Dot-path helpers
# --------------------------

def _split(path):
    if isinstance(path, (list, tuple)):
        parts = [str(p) for p in path]
    else:
        parts = str(path or "").split(".")
    if not parts or any(p == "" for p in parts):
        raise ContentPathError(path, "")
    return parts


def _index(container, segment, path):
    try:
        idx = int(segment)
    except ValueError:
        raise ContentPathError(path, segment)
    if idx < 0 or idx > len(container):
        raise ContentPathError(path, segment)
    return idx


def get_path(content, path, default=None):
    current = content
    for segment in _split(path):
        if isinstance(current, dict):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return default
        else:
            return default
    return current


def _clone(value):
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, list):
        return list(value)
    return value


def _get_child(container, segment, path):
    if isinstance(container, dict):
        return container.get(segment)
    idx = _index(container, segment, path)
    return container[idx] if idx < len(container) else None


def _put_child(container, segment, value, path):
    if isinstance(container, dict):
        container[segment] = value
        return
    idx = _index(container, segment, path)
    if idx == len(container):
        container.append(value)
    else:
        container[idx] = value


def set_path(content, path, value):
    """
    Return a copy of `content` with `value` at `path`.

    The input is never mutated: the root and every container on the way
    down are shallow-copied. Missing segments become empty objects; an
    existing scalar in the middle of the path raises ContentPathError.
    """
    parts = _split(path)
    root = _clone(content) if isinstance(content, (dict, list)) else {}
    current = root

    for segment in parts[:-1]:
        child = _get_child(current, segment, path)
        if child is None:
            child = {}
        elif isinstance(child, (dict, list)):
            child = _clone(child)
        else:
            raise ContentPathError(path, segment)
        _put_child(current, segment, child, path)
        current = child

    _put_child(current, parts[-1], value, path)
    return root


def merge_with_defaults(default, stored):
    """
    Stored values win over defaults field by field. Lists are taken whole,
    and an empty stored list falls back to the default list.
    """
    if stored is None:
        return copy.deepcopy(default)
    if isinstance(default, dict) and isinstance(stored, dict):
        merged = {k: copy.deepcopy(v) for k, v in stored.items()}
        for key, dval in default.items():
            merged[key] = merge_with_defaults(dval, stored.get(key))
        return merged
    if isinstance(default, list):
        return copy.deepcopy(stored) if isinstance(stored, list) and stored else copy.deepcopy(default)
    return copy.deepcopy(stored)


# --------------------------
# Persistence
# --------------------------

def cache_key(page_key):
    return f"{CACHE_PREFIX}{page_key}"


def invalidate_page_cache(page_key):
    cache.delete(cache_key(page_key))


def read_page_content(page_key):
    """Stored content for the page, or None when no row exists."""
    key = cache_key(page_key)
    cached = cache.get(key, _MISSING)
    if cached is not _MISSING:
        return cached

    content = (
        CMSPage.objects.filter(page_key=page_key)
        .values_list("content", flat=True)
        .first()
    )
    cache.set(key, content, settings.CMS_PAGE_CACHE_TIMEOUT)
    return content


@transaction.atomic
def upsert_page_content(page_key, content):
    page, _ = CMSPage.objects.update_or_create(
        page_key=page_key,
        defaults={"content": content},
    )
    invalidate_page_cache(page_key)
    return page


def page_content_for_display(page_key):
    return merge_with_defaults(PAGE_DEFAULTS.get(page_key, {}), read_page_content(page_key))


class ContentEditor:
    """
    Load once, edit locally, submit the whole object.

        editor = ContentEditor("about_page")
        editor.load()
        editor.update("hero.heading", "About us")
        editor.submit()
    """

    def __init__(self, page_key, default=None, loader=None, saver=None):
        self.page_key = page_key
        self.default = default if default is not None else PAGE_DEFAULTS.get(page_key, {})
        self._loader = loader or read_page_content
        self._saver = saver or upsert_page_content
        self.content = None
        self.is_loaded = False
        self.is_dirty = False
        self.is_saving = False

    def load(self):
        if self.is_loaded:
            return self.content
        try:
            stored = self._loader(self.page_key)
        except Exception:
            logger.warning("Could not load CMS page %s; using defaults", self.page_key, exc_info=True)
            stored = None

        if stored is None:
            logger.warning("CMS page %s has no stored content; using defaults", self.page_key)
            self.content = copy.deepcopy(self.default)
        else:
            self.content = copy.deepcopy(stored)
        self.is_loaded = True
        return self.content

    def get(self, path, default=None):
        self.load()
        return get_path(self.content, path, default)

    def update(self, path, value):
        self.load()
        self.content = set_path(self.content, path, value)
        self.is_dirty = True

    def submit(self):
        self.load()
        self.is_saving = True
        try:
            result = self._saver(self.page_key, self.content)
        except Exception as e:
            logger.exception("Saving CMS page %s failed", self.page_key)
            raise ContentSaveError(f"Failed to update {self.page_key}") from e
        finally:
            self.is_saving = False

        invalidate_page_cache(self.page_key)
        self.is_dirty = False
        return result
