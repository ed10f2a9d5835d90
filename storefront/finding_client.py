from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

from .config import StoreConfig
from .errors import UpstreamRejectedError, UpstreamUnavailableError
from .models import RawEnvelope, SortOrder

_LOGGER = logging.getLogger(__name__)

ENDPOINT = "https://svcs.ebay.com/services/search/FindingService/v1"
OPERATION_NAME = "findItemsIneBayStores"
SERVICE_VERSION = "1.13.0"

# The Finding API has no title ordering; title sorts are done locally.
_SORT_ORDERS = {
    SortOrder.PRICE_ASC: "PricePlusShippingLowest",
    SortOrder.PRICE_DESC: "PricePlusShippingHighest",
}
DEFAULT_SORT_ORDER = "BestMatch"


def upstream_sort_order(sort_hint: Optional[SortOrder]) -> str:
    return _SORT_ORDERS.get(sort_hint, DEFAULT_SORT_ORDER)


class FindingClient:
    """Issues single ``findItemsIneBayStores`` requests against the eBay Finding API."""

    def __init__(self, config: StoreConfig, *, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def build_params(self, store_id: str, app_credential: str, sort_hint: Optional[SortOrder] = None) -> Dict[str, str]:
        return {
            "OPERATION-NAME": OPERATION_NAME,
            "SERVICE-VERSION": SERVICE_VERSION,
            "SECURITY-APPNAME": app_credential,
            "RESPONSE-DATA-FORMAT": "JSON",
            "storeName": store_id,
            "paginationInput.entriesPerPage": str(self.config.page_size),
            "outputSelector": "PictureURLLarge",
            "sortOrder": upstream_sort_order(sort_hint),
            "GLOBAL-ID": self.config.global_id,
            "siteid": self.config.site_id,
        }

    def _get_json(self, params: Dict[str, str]) -> Any:
        if _LOGGER.isEnabledFor(logging.DEBUG):
            redacted = {**params, "SECURITY-APPNAME": "***"}
            _LOGGER.debug("Requesting %s?%s", ENDPOINT, urlencode(redacted))
        try:
            response = self.session.get(ENDPOINT, params=params, timeout=self.config.timeout_seconds)
        except requests.RequestException as exc:
            raise UpstreamUnavailableError(f"Finding API request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise UpstreamUnavailableError(
                f"Finding API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamUnavailableError(
                "Finding API returned a non-JSON body",
                status_code=response.status_code,
            ) from exc

    def fetch_raw(self, store_id: str, app_credential: str, sort_hint: Optional[SortOrder] = None) -> RawEnvelope:
        """Fetch one page of the store's listings.

        Raises :class:`UpstreamUnavailableError` for transport and HTTP
        failures and :class:`UpstreamRejectedError` when the envelope reports
        a failed acknowledgement. An envelope without the expected response
        structure raises :class:`MalformedResponseError`.
        """
        payload = self._get_json(self.build_params(store_id, app_credential, sort_hint))
        envelope = RawEnvelope.from_payload(payload, OPERATION_NAME)
        if not envelope.succeeded:
            raise UpstreamRejectedError(envelope.ack, envelope.error_message)
        _LOGGER.info(
            "Fetched %d raw items for store %s (total entries: %s)",
            len(envelope.raw_items),
            store_id,
            envelope.total_entries,
        )
        return envelope
