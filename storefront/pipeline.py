from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from . import filters
from .cache import TTLCache
from .config import StoreConfig, load_config
from .errors import MalformedResponseError, UpstreamError
from .finding_client import FindingClient, upstream_sort_order
from .models import Item, QueryParams
from .normalize import normalize

_LOGGER = logging.getLogger(__name__)


class StorefrontPipeline:
    """Serve a store's listings from cache or upstream, filtered and sorted per request."""

    def __init__(
        self,
        config: StoreConfig,
        *,
        client: Optional[Any] = None,
        cache: Optional[TTLCache] = None,
    ) -> None:
        self.config = config
        self.client = client if client is not None else FindingClient(config)
        self.cache = cache if cache is not None else TTLCache(config.cache_ttl_seconds)

    def cache_key(self, query: QueryParams) -> str:
        return "|".join([self.config.store_name, self.config.global_id, upstream_sort_order(query.sort_by)])

    def _load_base_items(self, query: QueryParams) -> List[Item]:
        key = self.cache_key(query)
        cached = self.cache.get(key)
        if cached is not None:
            _LOGGER.debug("Cache hit for %s (%d items)", key, len(cached))
            return cached

        _LOGGER.debug("Cache miss for %s", key)
        envelope = self.client.fetch_raw(self.config.store_name, self.config.app_id, query.sort_by)
        items = normalize(envelope, self.config.currency)
        self.cache.set(key, items, self.config.cache_ttl_seconds)
        return items

    def get_items(self, query: Union[QueryParams, Mapping[str, Any], None] = None) -> List[Item]:
        """Return the store's items for ``query``.

        Raises :class:`~storefront.errors.ConfigurationMissingError` when the
        app id or store name is missing. Upstream failures and malformed
        responses are logged, produce an empty list and are not cached.
        """
        if query is None:
            query = QueryParams()
        elif not isinstance(query, QueryParams):
            query = QueryParams.from_args(query)

        self.config.validate()
        try:
            base_items = self._load_base_items(query)
        except UpstreamError as exc:
            _LOGGER.error(
                "Failed to fetch items for store %s (sort=%s): %s",
                self.config.store_name,
                query.sort_by.value,
                exc,
            )
            return []
        except MalformedResponseError as exc:
            _LOGGER.warning(
                "Malformed Finding API response for store %s (sort=%s): %s",
                self.config.store_name,
                query.sort_by.value,
                exc,
            )
            return []
        return filters.apply(base_items, query)


def create_pipeline(config: Optional[StoreConfig] = None, env_path: str | Path = ".env") -> StorefrontPipeline:
    return StorefrontPipeline(config or load_config(env_path))
