"""Keyword, price and sort post-processing of normalized items.

Filtering runs on every request on top of the cached base set. Items whose
price cannot be parsed are excluded whenever a price bound is supplied, and
are sorted last for both price directions.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional

from .models import Item, QueryParams, SortOrder

_INFINITY = Decimal("Infinity")


def filter_keywords(items: Iterable[Item], keywords: Optional[str]) -> List[Item]:
    needle = (keywords or "").strip().casefold()
    if not needle:
        return list(items)
    return [item for item in items if needle in (item.title or "").casefold()]


def filter_price(
    items: Iterable[Item],
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
) -> List[Item]:
    if min_price is None and max_price is None:
        return list(items)
    kept: List[Item] = []
    for item in items:
        price = item.price_value
        if price is None:
            continue
        if min_price is not None and price < min_price:
            continue
        if max_price is not None and price > max_price:
            continue
        kept.append(item)
    return kept


def sort_items(items: Iterable[Item], sort_by: SortOrder) -> List[Item]:
    items = list(items)
    if sort_by is SortOrder.PRICE_ASC:
        return sorted(items, key=lambda item: _price_or(item, _INFINITY))
    if sort_by is SortOrder.PRICE_DESC:
        # reverse=True keeps ties in their original order
        return sorted(items, key=lambda item: _price_or(item, -_INFINITY), reverse=True)
    if sort_by is SortOrder.TITLE_ASC:
        return sorted(items, key=lambda item: (item.title or "").casefold())
    return items


def _price_or(item: Item, fallback: Decimal) -> Decimal:
    price = item.price_value
    return fallback if price is None else price


def apply(items: Iterable[Item], query: QueryParams) -> List[Item]:
    """Filter then sort ``items`` according to ``query``; the input is not modified."""
    result = filter_keywords(items, query.keywords)
    result = filter_price(result, query.min_price, query.max_price)
    return sort_items(result, query.sort_by)
