from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from .errors import MalformedResponseError


def parse_price(value: Any) -> Optional[Decimal]:
    """Parse an upstream price into a finite ``Decimal``, or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not parsed.is_finite():
        return None
    return parsed


@dataclass
class Item:
    """Normalized representation of a store listing returned by the Finding API."""

    id: str
    title: str
    price: str
    listing_url: str
    currency: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def price_value(self) -> Optional[Decimal]:
        return parse_price(self.price)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "currency": self.currency,
            "imageUrl": self.image_url,
            "listingUrl": self.listing_url,
        }


class SortOrder(enum.Enum):
    BEST_MATCH = "best_match"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    TITLE_ASC = "title_asc"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortOrder":
        if not raw:
            return cls.BEST_MATCH
        value = raw.strip().lower()
        if value == "title":
            return cls.TITLE_ASC
        try:
            return cls(value)
        except ValueError:
            return cls.BEST_MATCH


@dataclass(frozen=True)
class QueryParams:
    """Per-request sort and filter options."""

    sort_by: SortOrder = SortOrder.BEST_MATCH
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    keywords: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "QueryParams":
        keywords = args.get("keywords")
        if isinstance(keywords, str):
            keywords = keywords.strip() or None
        else:
            keywords = None
        return cls(
            sort_by=SortOrder.parse(args.get("sortBy")),
            min_price=parse_price(args.get("minPrice")),
            max_price=parse_price(args.get("maxPrice")),
            keywords=keywords,
        )


def unwrap(value: Any) -> Any:
    """Return the first element of (possibly nested) single-element lists."""
    while isinstance(value, list):
        if not value:
            return None
        value = value[0]
    return value


def _error_message(error_block: Any) -> Optional[str]:
    error_block = unwrap(error_block)
    if not isinstance(error_block, dict):
        return None
    error = unwrap(error_block.get("error"))
    if not isinstance(error, dict):
        return None
    message = unwrap(error.get("message"))
    return message if isinstance(message, str) else None


@dataclass
class RawEnvelope:
    """The Finding API response before normalization.

    Every scalar in the upstream JSON is wrapped in a single-element list;
    this type only locates the acknowledgement, error message and the raw item
    records, leaving the records themselves untouched for the normalizer.
    """

    ack: Optional[str]
    error_message: Optional[str] = None
    total_entries: Optional[int] = None
    raw_items: List[Any] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return (self.ack or "").lower() == "success"

    @classmethod
    def from_payload(cls, payload: Any, operation: str) -> "RawEnvelope":
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Expected a JSON object, got {type(payload).__name__}")
        root = unwrap(payload.get(f"{operation}Response"))
        if not isinstance(root, dict):
            # Requests eBay refuses outright come back as a bare errorMessage.
            error_message = _error_message(payload.get("errorMessage"))
            if error_message is not None:
                return cls(ack="Failure", error_message=error_message)
            raise MalformedResponseError(f"Missing {operation}Response in envelope")

        ack = unwrap(root.get("ack"))

        total_entries = None
        pagination = unwrap(root.get("paginationOutput"))
        if isinstance(pagination, dict):
            try:
                total_entries = int(unwrap(pagination.get("totalEntries")))
            except (TypeError, ValueError):
                total_entries = None

        raw_items: List[Any] = []
        search_result = unwrap(root.get("searchResult"))
        if isinstance(search_result, dict):
            items = search_result.get("item")
            if isinstance(items, list):
                raw_items = items

        return cls(
            ack=ack if isinstance(ack, str) else None,
            error_message=_error_message(root.get("errorMessage")),
            total_entries=total_entries,
            raw_items=raw_items,
        )
