"""
Catalog filtering, sorting and search.

FilterState mirrors the query string of the listing page; every call to
filter_products() builds a fresh query from it.
"""
import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db.models import Prefetch

from .models import Category, Product, ProductVariant, ProductVariantImage
from .utilities import _as_bool, _to_decimal

logger = logging.getLogger(__name__)


class SortOption:
    DEFAULT = "default"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEW = "new"
    HOT = "hot"
    FEATURED = "featured"

    CHOICES = (DEFAULT, PRICE_ASC, PRICE_DESC, NEW, HOT, FEATURED)

    @classmethod
    def parse(cls, value):
        value = (value or "").strip().lower()
        return value if value in cls.CHOICES else cls.DEFAULT


_SORT_ORDERING = {
    SortOption.PRICE_ASC: ("base_price", "-created_at"),
    SortOption.PRICE_DESC: ("-base_price", "-created_at"),
    SortOption.NEW: ("-is_new_arrival", "-created_at"),
    SortOption.HOT: ("-is_hot_selling", "-created_at"),
    SortOption.FEATURED: ("-is_featured", "-created_at"),
    SortOption.DEFAULT: ("-created_at",),
}


def _price_bound(val):
    val = _to_decimal(val)
    if val is None:
        return None
    return max(Decimal(0), min(val, Decimal(settings.CATALOG_PRICE_MAX)))


def _price_param(val):
    # JSON-friendly: whole rupees stay ints in the query string
    if val is None:
        return None
    return str(int(val)) if val == val.to_integral_value() else str(val)


@dataclass
class FilterState:
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    discounted_only: bool = False
    new_arrivals: bool = False
    hot_selling: bool = False
    sort: str = SortOption.DEFAULT
    category_slug: Optional[str] = None

    @classmethod
    def from_query_params(cls, params):
        return cls(
            min_price=_price_bound(params.get("minPrice")),
            max_price=_price_bound(params.get("maxPrice")),
            discounted_only=_as_bool(params.get("discountedOnly")),
            new_arrivals=_as_bool(params.get("newArrivals")),
            hot_selling=_as_bool(params.get("hotSelling")),
            sort=SortOption.parse(params.get("sort")),
            category_slug=(params.get("category") or "").strip() or None,
        )

    def to_query_params(self):
        """Unset values are left out entirely."""
        out = {}
        if self.category_slug:
            out["category"] = self.category_slug
        if self.min_price is not None:
            out["minPrice"] = _price_param(self.min_price)
        if self.max_price is not None:
            out["maxPrice"] = _price_param(self.max_price)
        if self.discounted_only:
            out["discountedOnly"] = "true"
        if self.new_arrivals:
            out["newArrivals"] = "true"
        if self.hot_selling:
            out["hotSelling"] = "true"
        if self.sort != SortOption.DEFAULT:
            out["sort"] = self.sort
        return out

    def cleared(self):
        # Sort and category belong to the page, not to the filter panel
        return replace(
            self,
            min_price=None,
            max_price=None,
            discounted_only=False,
            new_arrivals=False,
            hot_selling=False,
        )

    @property
    def has_active_filters(self):
        return (
            self.min_price is not None
            or self.max_price is not None
            or self.discounted_only
            or self.new_arrivals
            or self.hot_selling
        )


@dataclass
class PriceRangeSlider:
    """
    Two-handle price slider. Dragging only moves the pending range; the
    filter changes on apply().
    """
    upper_bound: int = field(default_factory=lambda: settings.CATALOG_PRICE_MAX)
    step: int = field(default_factory=lambda: settings.CATALOG_PRICE_STEP)
    low: int = 0
    high: Optional[int] = None

    def __post_init__(self):
        if self.high is None:
            self.high = self.upper_bound

    def _snap(self, value):
        value = max(0, min(int(value), self.upper_bound))
        snapped = int(round(value / self.step)) * self.step
        return min(snapped, self.upper_bound)

    @property
    def value(self):
        return (self.low, self.high)

    def drag(self, low, high):
        low, high = self._snap(low), self._snap(high)
        if low > high:
            low, high = high, low
        self.low, self.high = low, high
        return self.value

    def sync_from(self, state):
        self.low = int(state.min_price) if state.min_price is not None else 0
        self.high = int(state.max_price) if state.max_price is not None else self.upper_bound
        return self.value

    def apply(self, state):
        return replace(
            state,
            min_price=Decimal(self.low) if self.low > 0 else None,
            max_price=Decimal(self.high) if self.high < self.upper_bound else None,
        )

    def reset(self):
        self.low, self.high = 0, self.upper_bound
        return self.value


def _variant_prefetch():
    return Prefetch(
        "variants",
        queryset=ProductVariant.objects.prefetch_related(
            Prefetch("images", queryset=ProductVariantImage.objects.order_by("sort_order", "created_at"))
        ),
    )


def product_queryset():
    return (
        Product.objects.filter(is_active=True)
        .select_related("category")
        .prefetch_related(_variant_prefetch())
    )


def filter_products(filters, queryset=None):
    qs = queryset if queryset is not None else product_queryset()

    if filters.category_slug:
        category = Category.objects.filter(slug=filters.category_slug).first()
        if category is None:
            return qs.none()
        qs = qs.filter(category=category)

    if filters.min_price is not None:
        qs = qs.filter(base_price__gte=filters.min_price)
    if filters.max_price is not None:
        qs = qs.filter(base_price__lte=filters.max_price)
    if filters.discounted_only:
        qs = qs.filter(discount_percentage__gt=0)
    if filters.new_arrivals:
        qs = qs.filter(is_new_arrival=True)
    if filters.hot_selling:
        qs = qs.filter(is_hot_selling=True)

    return qs.order_by(*_SORT_ORDERING.get(filters.sort, _SORT_ORDERING[SortOption.DEFAULT]))


def related_products(product, limit=4):
    if not product.category_id:
        return product_queryset().none()
    return (
        product_queryset()
        .filter(category_id=product.category_id)
        .exclude(pk=product.pk)
        .order_by("-created_at")[:limit]
    )


# --------------------------
# Search suggestions
# --------------------------

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10


def _rank(label, query):
    lowered = label.lower()
    if lowered == query:
        return 0
    if lowered.startswith(query):
        return 1
    return 2


def search_suggestions(query):
    query = (query or "").strip()
    if len(query) < SEARCH_MIN_LENGTH:
        return []

    categories = Category.objects.filter(name__icontains=query).order_by("name")[:5]
    products = (
        Product.objects.filter(is_active=True, title__icontains=query)
        .select_related("category")
        .order_by("title")[:SEARCH_LIMIT]
    )

    results = [
        {"type": "category", "id": str(c.id), "label": c.name, "slug": c.slug, "image_url": c.image_url}
        for c in categories
    ]
    results += [
        {
            "type": "product",
            "id": str(p.id),
            "label": p.title,
            "slug": p.slug,
            "image_url": (p.images or [None])[0] or p.image_url,
            "category": p.category.name if p.category else None,
        }
        for p in products
    ]

    q = query.lower()
    results.sort(key=lambda r: (_rank(r["label"], q), r["label"].lower(), r["type"] != "category"))
    return results[:SEARCH_LIMIT]
