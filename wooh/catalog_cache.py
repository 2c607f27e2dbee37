"""
On-disk snapshot of the product catalog.

The cache file holds the full product list and the time it was captured:

    {"products": [...], "last_update": "2026-01-01T12:00:00+00:00"}

A snapshot older than the allowed age is treated as missing. It is never
updated in place, only replaced by a full re-fetch.
"""

import os
import json
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .errors import DecodeError
from .models import Product


DEFAULT_MAX_AGE = timedelta(hours=24)

_lock = threading.Lock()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(raw) -> datetime:
    if not isinstance(raw, str):
        raise DecodeError(f"Cache timestamp must be a string, got {raw!r}")
    try:
        stamp = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as e:
        raise DecodeError(f"Invalid cache timestamp {raw!r}: {e}") from e
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def load_cache(cache_path: str, max_age: timedelta = DEFAULT_MAX_AGE,
               now: datetime = None) -> Optional[List[Product]]:
    """
    Load the cached catalog if it is fresh enough.

    Args:
        cache_path: Path to the cache file
        max_age: Oldest snapshot that is still usable
        now: Current time (defaults to the system clock)

    Returns:
        List of products, or None if the file is missing or expired

    Raises:
        OSError: If the file exists but cannot be read
        DecodeError: If the file is not a valid cache document
    """
    with _lock:
        try:
            with open(cache_path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Failed to parse cache file {cache_path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("products"), list):
        raise DecodeError(f"Cache file {cache_path} has no product list")

    stamp = _parse_timestamp(data.get("last_update"))
    age = (now or _utcnow()) - stamp
    if age > max_age:
        logging.info(f"Product cache expired ({age} old, max {max_age})")
        return None

    try:
        products = [Product.from_dict(p) for p in data["products"]]
    except ValueError as e:
        raise DecodeError(f"Invalid product in cache file {cache_path}: {e}") from e

    logging.info(f"Returning {len(products)} products from cache...")
    return products


def save_cache(cache_path: str, products: List[Product], now: datetime = None) -> bool:
    """
    Overwrite the cache file with products and a fresh timestamp.

    Failures are logged and swallowed; the caller still has the products in
    memory.

    Returns:
        True if the file was written
    """
    document = {
        "products": [p.to_dict() for p in products],
        "last_update": (now or _utcnow()).isoformat(),
    }
    with _lock:
        try:
            directory = os.path.dirname(cache_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(cache_path, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logging.warning(f"Could not save product cache {cache_path}: {e}")
            return False

    logging.debug(f"Saved {len(products)} products to cache {cache_path}")
    return True
