from decimal import Decimal

import pytest

from storefront.catalog import (
    FilterState,
    PriceRangeSlider,
    SortOption,
    filter_products,
    related_products,
    search_suggestions,
)
from storefront.models import Category


def test_query_params_round_trip():
    params = {
        "category": "sofas",
        "minPrice": "1000",
        "maxPrice": "50000",
        "discountedOnly": "true",
        "sort": "price_asc",
    }
    state = FilterState.from_query_params(params)
    assert state.min_price == Decimal("1000")
    assert state.discounted_only is True
    assert state.sort == SortOption.PRICE_ASC
    assert state.to_query_params() == params


def test_unset_values_are_left_out_of_the_query():
    assert FilterState().to_query_params() == {}
    assert FilterState.from_query_params({"sort": "bogus"}).sort == SortOption.DEFAULT


def test_cleared_keeps_sort_and_category():
    state = FilterState(
        min_price=Decimal("10"), hot_selling=True, sort=SortOption.NEW, category_slug="beds"
    )
    assert state.has_active_filters
    cleared = state.cleared()
    assert not cleared.has_active_filters
    assert cleared.sort == SortOption.NEW
    assert cleared.category_slug == "beds"

    query = cleared.to_query_params()
    assert "minPrice" not in query
    assert "maxPrice" not in query
    assert query == {"category": "beds", "sort": SortOption.NEW}

    slider = PriceRangeSlider(upper_bound=100000, step=1000)
    slider.sync_from(state)
    assert slider.value == (10, 100000)
    assert slider.reset() == (0, 100000)
    assert slider.apply(cleared).min_price is None


def test_price_params_are_clamped_and_must_be_finite(settings):
    settings.CATALOG_PRICE_MAX = 100000
    state = FilterState.from_query_params({"minPrice": "-50", "maxPrice": "1e999999"})
    assert state.min_price == Decimal(0)
    assert state.max_price == Decimal(100000)
    assert state.to_query_params() == {"minPrice": "0", "maxPrice": "100000"}

    for bad in ("nan", "Infinity", "-inf", "sNaN"):
        assert FilterState.from_query_params({"minPrice": bad}).min_price is None


def test_slider_drag_does_not_touch_filters_until_apply():
    state = FilterState()
    slider = PriceRangeSlider(upper_bound=100000, step=1000)
    assert slider.drag(1499, 20501) == (1000, 21000)
    assert state.min_price is None

    applied = slider.apply(state)
    assert applied.min_price == Decimal(1000)
    assert applied.max_price == Decimal(21000)


def test_slider_full_range_means_no_price_filter():
    slider = PriceRangeSlider(upper_bound=100000, step=1000)
    slider.drag(0, 100000)
    applied = slider.apply(FilterState(min_price=Decimal("5000")))
    assert applied.min_price is None
    assert applied.max_price is None


def test_slider_swaps_crossed_handles_and_syncs():
    slider = PriceRangeSlider(upper_bound=100000, step=1000)
    assert slider.drag(30000, 10000) == (10000, 30000)
    assert slider.sync_from(FilterState(max_price=Decimal("45000"))) == (0, 45000)
    assert slider.reset() == (0, 100000)


def test_slider_defaults_come_from_settings(settings):
    settings.CATALOG_PRICE_MAX = 50000
    settings.CATALOG_PRICE_STEP = 500
    slider = PriceRangeSlider()
    assert slider.value == (0, 50000)
    assert slider.step == 500


@pytest.fixture
def catalog(sofas, make_product):
    beds = Category.objects.create(name="Beds")
    return {
        "cheap": make_product("Compact Sofa", 15000, category=sofas, is_new_arrival=True),
        "mid": make_product("Sofa Cum Bed", 30000, category=sofas, discount_percentage=Decimal("10")),
        "dear": make_product("Chesterfield Sofa", 90000, category=sofas, is_hot_selling=True),
        "bed": make_product("King Bed", 45000, category=beds),
        "hidden": make_product("Old Sofa", 100, category=sofas, is_active=False),
    }


@pytest.mark.django_db
def test_sorting_by_price(catalog):
    asc = list(filter_products(FilterState(sort=SortOption.PRICE_ASC)))
    assert [p.title for p in asc] == ["Compact Sofa", "Sofa Cum Bed", "King Bed", "Chesterfield Sofa"]
    desc = list(filter_products(FilterState(sort=SortOption.PRICE_DESC)))
    assert desc[0].title == "Chesterfield Sofa"


@pytest.mark.django_db
def test_category_and_price_range(catalog):
    state = FilterState(category_slug="sofas", min_price=Decimal("20000"), max_price=Decimal("95000"))
    titles = {p.title for p in filter_products(state)}
    assert titles == {"Sofa Cum Bed", "Chesterfield Sofa"}


@pytest.mark.django_db
def test_flags(catalog):
    assert [p.title for p in filter_products(FilterState(discounted_only=True))] == ["Sofa Cum Bed"]
    assert [p.title for p in filter_products(FilterState(new_arrivals=True))] == ["Compact Sofa"]
    assert [p.title for p in filter_products(FilterState(hot_selling=True))] == ["Chesterfield Sofa"]


@pytest.mark.django_db
def test_unknown_category_is_empty(catalog):
    assert list(filter_products(FilterState(category_slug="nope"))) == []


@pytest.mark.django_db
def test_related_products_share_category(catalog):
    related = list(related_products(catalog["cheap"]))
    assert {p.title for p in related} == {"Sofa Cum Bed", "Chesterfield Sofa"}


@pytest.mark.django_db
def test_search_suggestions_ranking(catalog):
    assert search_suggestions("s") == []

    results = search_suggestions("sofa")
    labels = [r["label"] for r in results]
    # Prefix matches first, then contains
    assert labels[:2] == ["Sofa Cum Bed", "Sofas"]
    assert "Chesterfield Sofa" in labels
    assert "Old Sofa" not in labels
    assert {r["type"] for r in results} == {"category", "product"}
