"""
Full catalog fetch with cache.
"""

import logging
from datetime import timedelta
from typing import Callable, List

from .catalog_cache import DEFAULT_MAX_AGE, load_cache, save_cache
from .config import log_and_status
from .errors import DecodeError, NetworkError, RetriesExhausted
from .models import Product
from .retry import with_retries
from .woo_api import WooClient


def _fetch_page(client: WooClient, page: int, per_page: int, attempts: int) -> List[dict]:
    try:
        return with_retries(
            lambda: client.list_products(page, per_page),
            max_attempts=max(1, attempts),
            retry_on=(NetworkError,),
            label=f"Fetching products page {page}",
        )
    except RetriesExhausted as e:
        raise e.last_error from e


def fetch_all_products(
    client: WooClient,
    cache_path: str,
    max_age: timedelta = DEFAULT_MAX_AGE,
    per_page: int = 100,
    request_attempts: int = 1,
    force_refresh: bool = False,
    status_fn=None
) -> List[Product]:
    """
    Return every product in the store, using the cache when it is fresh.

    Pages are requested from page 1 until a page holds fewer than per_page
    products. When the catalog size is an exact multiple of per_page this
    means one extra request that returns an empty page.

    Args:
        client: Store client
        cache_path: Catalog cache file
        max_age: Oldest usable cache snapshot
        per_page: Page size
        request_attempts: Attempts per page on transport errors
        force_refresh: Skip the cache read (the result is still cached)
        status_fn: Optional status update function

    Returns:
        Products in listing order

    Raises:
        NetworkError, RemoteError, DecodeError: If any page fails; nothing
            is cached or returned in that case
    """
    if not force_refresh:
        try:
            cached = load_cache(cache_path, max_age)
        except (OSError, DecodeError) as e:
            logging.warning(f"Ignoring unreadable product cache {cache_path}: {e}")
            cached = None
        if cached is not None:
            return cached

    log_and_status(status_fn, "Fetching all products from API (paginated)...")
    products: List[Product] = []
    page = 1
    while True:
        batch = _fetch_page(client, page, per_page, request_attempts)
        try:
            products.extend(Product.from_dict(item) for item in batch)
        except ValueError as e:
            raise DecodeError(f"Failed to parse products on page {page}: {e}") from e

        logging.info(f"  Page {page}: {len(batch)} products")
        if len(batch) < per_page:
            break
        page += 1

    log_and_status(status_fn, f"Fetched {len(products)} products in {page} page(s)")
    save_cache(cache_path, products)
    return products


def list_product_meta(products: List[Product], title_key: str, description_key: str,
                      print_fn: Callable[[str], None] = print):
    """Print each product's ID, name and current SEO meta values."""
    for product in products:
        print_fn(f"ID: {product.id}")
        print_fn(f"Name: {product.name}")
        title = product.get_meta(title_key)
        description = product.get_meta(description_key)
        if title is not None:
            print_fn(f"SEO Title: {title}")
        if description is not None:
            print_fn(f"SEO Meta Description: {description}")
        print_fn("")
