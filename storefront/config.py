from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, TypeVar

from .errors import ConfigurationMissingError

_LOGGER = logging.getLogger(__name__)

REQUIRED_ENV_VARS = {
    "EBAY_APP_ID",
    "EBAY_STORE",
}

OPTIONAL_ENV_VARS = {
    "EBAY_GLOBAL_ID",
    "EBAY_SITE_ID",
    "EBAY_CURRENCY",
    "EBAY_PAGE_SIZE",
    "EBAY_TIMEOUT",
    "CACHE_TTL",
}

DEFAULT_GLOBAL_ID = "EBAY-GB"
DEFAULT_SITE_ID = "3"
DEFAULT_CURRENCY = "GBP"
DEFAULT_CACHE_TTL = 900
DEFAULT_PAGE_SIZE = 12
DEFAULT_TIMEOUT = 10.0
MAX_PAGE_SIZE = 50

T = TypeVar("T", int, float)


@dataclass
class StoreConfig:
    """Settings for one eBay store front, loaded once at startup."""

    app_id: str
    store_name: str
    global_id: str = DEFAULT_GLOBAL_ID
    site_id: str = DEFAULT_SITE_ID
    currency: str = DEFAULT_CURRENCY
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL
    page_size: int = DEFAULT_PAGE_SIZE
    timeout_seconds: float = DEFAULT_TIMEOUT

    def missing(self) -> set:
        values = {"EBAY_APP_ID": self.app_id, "EBAY_STORE": self.store_name}
        return {key for key, value in values.items() if not (value or "").strip()}

    def validate(self) -> None:
        missing = self.missing()
        if missing:
            raise ConfigurationMissingError(missing)


def _load_dotenv(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    env: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        env[key.strip()] = value.strip().strip('"').strip("'")
    return env


def _parse_number(env: Dict[str, str], key: str, cast: Callable[[str], T], default: T) -> T:
    raw = env.get(key)
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        _LOGGER.warning("Ignoring invalid %s=%r, using %s", key, raw, default)
        return default
    if not math.isfinite(value) or value <= 0:
        _LOGGER.warning("Ignoring non-finite or non-positive %s=%r, using %s", key, raw, default)
        return default
    return value


def load_config(env_path: str | Path = ".env", environ: Optional[Dict[str, str]] = None) -> StoreConfig:
    """Build a :class:`StoreConfig` from the environment, falling back to a ``.env`` file.

    Missing credentials are not an error here; :meth:`StoreConfig.validate`
    reports them when a fetch is attempted so the web layer can answer with a
    proper error response.
    """
    source = os.environ if environ is None else environ
    env: Dict[str, str] = {key: source.get(key, "") for key in REQUIRED_ENV_VARS | OPTIONAL_ENV_VARS}
    if any(not env.get(key) for key in REQUIRED_ENV_VARS | OPTIONAL_ENV_VARS):
        dotenv_values = _load_dotenv(Path(env_path))
        for key in REQUIRED_ENV_VARS | OPTIONAL_ENV_VARS:
            if not env.get(key) and key in dotenv_values:
                env[key] = dotenv_values[key]

    page_size = _parse_number(env, "EBAY_PAGE_SIZE", int, DEFAULT_PAGE_SIZE)
    if page_size > MAX_PAGE_SIZE:
        _LOGGER.warning("EBAY_PAGE_SIZE=%s exceeds the maximum page size, using %s", page_size, MAX_PAGE_SIZE)
        page_size = MAX_PAGE_SIZE

    config = StoreConfig(
        app_id=env.get("EBAY_APP_ID", "").strip(),
        store_name=env.get("EBAY_STORE", "").strip(),
        global_id=env.get("EBAY_GLOBAL_ID") or DEFAULT_GLOBAL_ID,
        site_id=env.get("EBAY_SITE_ID") or DEFAULT_SITE_ID,
        currency=env.get("EBAY_CURRENCY") or DEFAULT_CURRENCY,
        cache_ttl_seconds=_parse_number(env, "CACHE_TTL", int, DEFAULT_CACHE_TTL),
        page_size=page_size,
        timeout_seconds=_parse_number(env, "EBAY_TIMEOUT", float, DEFAULT_TIMEOUT),
    )
    missing = config.missing()
    if missing:
        _LOGGER.warning("Store configuration incomplete, missing: %s", ", ".join(sorted(missing)))
    return config
