from __future__ import annotations

from decimal import Decimal

from storefront import filters
from storefront.models import Item, QueryParams, SortOrder


def _item(title="Item", price="10", item_id=None):
    return Item(id=item_id or title, title=title, price=price, listing_url=f"https://example.test/{title}")


def test_keyword_filter_is_case_insensitive_and_keeps_order():
    items = [_item("Oak Table"), _item("oak chair"), _item("Metal Frame")]

    result = filters.apply(items, QueryParams(keywords="oak"))

    assert [item.title for item in result] == ["Oak Table", "oak chair"]


def test_empty_keyword_keeps_everything():
    items = [_item("Oak Table"), _item("Metal Frame")]

    assert filters.filter_keywords(items, "") == items
    assert filters.filter_keywords(items, None) == items


def test_price_bounds_are_inclusive():
    items = [_item("a", "10"), _item("b", "20"), _item("c", "30")]

    result = filters.apply(items, QueryParams(min_price=Decimal("15"), max_price=Decimal("25")))

    assert [item.price for item in result] == ["20"]

    result = filters.apply(items, QueryParams(min_price=Decimal("10"), max_price=Decimal("20")))

    assert [item.price for item in result] == ["10", "20"]


def test_unparsable_price_is_excluded_by_any_bound():
    items = [_item("a", "10"), _item("b", "n/a")]

    assert [item.title for item in filters.filter_price(items, min_price=Decimal("0"))] == ["a"]
    assert [item.title for item in filters.filter_price(items, max_price=Decimal("100"))] == ["a"]


def test_unparsable_price_is_kept_without_bounds():
    items = [_item("a", "10"), _item("b", "n/a")]

    assert filters.filter_price(items) == items


def test_price_sort_is_stable_on_ties():
    items = [_item("B", "5"), _item("A", "5")]

    result = filters.apply(items, QueryParams(sort_by=SortOrder.PRICE_ASC))

    assert [item.title for item in result] == ["B", "A"]


def test_price_desc_sort_is_stable_on_ties():
    items = [_item("B", "5"), _item("A", "5"), _item("C", "9")]

    result = filters.sort_items(items, SortOrder.PRICE_DESC)

    assert [item.title for item in result] == ["C", "B", "A"]


def test_price_sort_compares_numerically():
    items = [_item("a", "100"), _item("b", "9.99"), _item("c", "20")]

    assert [item.price for item in filters.sort_items(items, SortOrder.PRICE_ASC)] == ["9.99", "20", "100"]
    assert [item.price for item in filters.sort_items(items, SortOrder.PRICE_DESC)] == ["100", "20", "9.99"]


def test_unparsable_price_sorts_last_in_both_directions():
    items = [_item("unknown", "n/a"), _item("cheap", "5"), _item("dear", "50")]

    assert [item.title for item in filters.sort_items(items, SortOrder.PRICE_ASC)] == ["cheap", "dear", "unknown"]
    assert [item.title for item in filters.sort_items(items, SortOrder.PRICE_DESC)] == ["dear", "cheap", "unknown"]


def test_title_sort_is_case_insensitive_and_stable():
    items = [_item("banana", item_id="1"), _item("Apple", item_id="2"), _item("apple", item_id="3")]

    result = filters.sort_items(items, SortOrder.TITLE_ASC)

    assert [item.id for item in result] == ["2", "3", "1"]


def test_best_match_preserves_order():
    items = [_item("c", "3"), _item("a", "1"), _item("b", "2")]

    assert filters.sort_items(items, SortOrder.BEST_MATCH) == items


def test_filters_run_before_sort_and_combine():
    items = [
        _item("Oak Table", "50"),
        _item("Oak Shelf", "30"),
        _item("Oak Bench", "5"),
        _item("Pine Table", "40"),
    ]
    query = QueryParams(sort_by=SortOrder.PRICE_ASC, min_price=Decimal("10"), keywords="OAK")

    result = filters.apply(items, query)

    assert [item.title for item in result] == ["Oak Shelf", "Oak Table"]


def test_apply_does_not_mutate_input():
    items = [_item("b", "2"), _item("a", "1")]
    original = list(items)

    filters.apply(items, QueryParams(sort_by=SortOrder.PRICE_ASC))

    assert items == original
