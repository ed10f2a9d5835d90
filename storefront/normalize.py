"""Flatten Finding API item records into :class:`Item` objects."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from .models import Item, RawEnvelope, unwrap

_LOGGER = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    value = unwrap(value)
    if value is None or isinstance(value, (dict, bool)):
        return None
    text = str(value).strip()
    return text or None


def _current_price(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    selling_status = unwrap(raw.get("sellingStatus"))
    if not isinstance(selling_status, Mapping):
        return {}
    price = unwrap(selling_status.get("currentPrice"))
    return price if isinstance(price, Mapping) else {}


def normalize_item(raw: Any, default_currency: Optional[str] = None) -> Optional[Item]:
    """Return the flattened item, or ``None`` when a required field is missing."""
    if not isinstance(raw, Mapping):
        return None
    price = _current_price(raw)
    item_id = _text(raw.get("itemId"))
    title = _text(raw.get("title"))
    price_value = _text(price.get("__value__"))
    listing_url = _text(raw.get("viewItemURL"))
    if not (item_id and title and price_value and listing_url):
        _LOGGER.debug("Dropping incomplete item %s", item_id or "<no id>")
        return None
    return Item(
        id=item_id,
        title=title,
        price=price_value,
        listing_url=listing_url,
        currency=_text(price.get("@currencyId")) or default_currency,
        image_url=_text(raw.get("pictureURLLarge")) or _text(raw.get("galleryURL")),
    )


def normalize(envelope: RawEnvelope, default_currency: Optional[str] = None) -> List[Item]:
    items: List[Item] = []
    for raw in envelope.raw_items:
        item = normalize_item(raw, default_currency)
        if item is not None:
            items.append(item)
    dropped = len(envelope.raw_items) - len(items)
    if dropped:
        _LOGGER.info("Dropped %d of %d items missing id, title, price or URL", dropped, len(envelope.raw_items))
    return items
