"""Serve an eBay store's listings as a filtered, sorted product grid."""

from .cache import TTLCache
from .config import StoreConfig, load_config
from .errors import (
    ConfigurationMissingError,
    MalformedResponseError,
    UpstreamError,
    UpstreamRejectedError,
    UpstreamUnavailableError,
)
from .models import Item, QueryParams, SortOrder
from .pipeline import StorefrontPipeline, create_pipeline

__all__ = [
    "ConfigurationMissingError",
    "Item",
    "MalformedResponseError",
    "QueryParams",
    "SortOrder",
    "StoreConfig",
    "StorefrontPipeline",
    "TTLCache",
    "UpstreamError",
    "UpstreamRejectedError",
    "UpstreamUnavailableError",
    "create_pipeline",
    "load_config",
]
