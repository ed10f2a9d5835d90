"""Command line helpers for the storefront project."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, List, Optional, Sequence, TextIO

from .config import load_config
from .errors import ConfigurationMissingError
from .models import Item, QueryParams
from .pipeline import StorefrontPipeline

_LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List the items of an eBay store")
    parser.add_argument(
        "--sort-by",
        default=None,
        help="One of price_asc, price_desc, title_asc (default: best match)",
    )
    parser.add_argument("--min-price", default=None, help="Lower price bound")
    parser.add_argument("--max-price", default=None, help="Upper price bound")
    parser.add_argument("--keywords", default=None, help="Only show items whose title contains this text")
    parser.add_argument("--json", action="store_true", help="Print items as JSON")
    parser.add_argument("--env-file", default=".env", help="Path to a .env file with EBAY_APP_ID and EBAY_STORE")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def format_table(items: Iterable[Item]) -> str:
    lines: List[str] = []
    for item in items:
        price = f"{item.currency} {item.price}" if item.currency else item.price
        lines.append(f"{price:>14}  {item.title}  {item.listing_url}")
    return "\n".join(lines)


def main(argv: Optional[Iterable[str]] = None, pipeline: Optional[StorefrontPipeline] = None, out: Optional[TextIO] = None) -> int:
    args = parse_args(argv)
    out = out or sys.stdout
    setup_logging(args.log_level)

    if pipeline is None:
        pipeline = StorefrontPipeline(load_config(args.env_file))
    query = QueryParams.from_args(
        {
            "sortBy": args.sort_by,
            "minPrice": args.min_price,
            "maxPrice": args.max_price,
            "keywords": args.keywords,
        }
    )
    try:
        items = pipeline.get_items(query)
    except ConfigurationMissingError as exc:
        _LOGGER.error("%s", exc)
        return 1

    if args.json:
        json.dump({"items": [item.to_dict() for item in items]}, out, ensure_ascii=False, indent=2)
        out.write("\n")
    elif items:
        out.write(format_table(items) + "\n")
    else:
        out.write("No items found.\n")
    return 0


__all__ = ["format_table", "main", "parse_args", "setup_logging"]


if __name__ == "__main__":
    sys.exit(main())
