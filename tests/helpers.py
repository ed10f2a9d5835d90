"""Builders for Finding API payloads used across the test suite."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


def raw_item(
    item_id: Optional[str] = "110001",
    title: Optional[str] = "Oak Table",
    price: Optional[str] = "50.0",
    currency: str = "GBP",
    url: Optional[str] = "https://www.ebay.co.uk/itm/110001",
    gallery: Optional[str] = "https://i.ebayimg.com/thumbs/110001.jpg",
    large: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a Finding API item record with single-element-array wrapping."""
    record: Dict[str, Any] = {}
    if item_id is not None:
        record["itemId"] = [item_id]
    if title is not None:
        record["title"] = [title]
    if price is not None:
        record["sellingStatus"] = [{"currentPrice": [{"@currencyId": currency, "__value__": price}]}]
    if url is not None:
        record["viewItemURL"] = [url]
    if gallery is not None:
        record["galleryURL"] = [gallery]
    if large is not None:
        record["pictureURLLarge"] = [large]
    return record


def envelope_payload(items: List[Dict[str, Any]], ack: str = "Success", error: Optional[str] = None) -> Dict[str, Any]:
    response: Dict[str, Any] = {
        "ack": [ack],
        "version": ["1.13.0"],
        "searchResult": [{"@count": str(len(items)), "item": items}],
        "paginationOutput": [{"totalEntries": [str(len(items))]}],
    }
    if error is not None:
        response["errorMessage"] = [{"error": [{"errorId": ["11002"], "message": [error]}]}]
    return {"findItemsIneBayStoresResponse": [response]}


def error_only_payload(message: str) -> Dict[str, Any]:
    """A refusal that eBay sends without the operation response root."""
    return {"errorMessage": [{"error": [{"errorId": ["10001"], "severity": ["Error"], "message": [message]}]}]}
