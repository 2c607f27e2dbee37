"""
Resumable SEO meta autofill.

For each product in the catalog: skip it if the tracker already has it,
clean its description, generate an SEO title/description (retrying until
the pair fits the length limits), optionally ask the operator, write the two
meta entries to the store and record the product in the tracker. A product
that fails at any step is logged and left for the next run.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from .ai_provider import SeoGenerator, build_seo_generator
from .catalog import fetch_all_products
from .config import cache_max_age, log_and_status
from .confirm import AutoApprove
from .errors import DecodeError, NetworkError, RemoteError, RetriesExhausted, SeoGenerationError
from .models import Product, SeoPair
from .product_utils import build_seo_meta_data, normalize_description
from .retry import with_retries
from .tracker import UpdateTracker
from .woo_api import WooClient


# Per-product outcomes
SKIPPED = "skipped"
EXHAUSTED = "exhausted"
REJECTED = "rejected"
FAILED = "failed"
COMMITTED = "committed"

PushMeta = Callable[[int, SeoPair], None]


@dataclass
class UpdateSummary:
    total: int = 0
    committed: int = 0
    skipped: int = 0
    rejected: int = 0
    exhausted: int = 0
    failed: int = 0

    def record(self, outcome: str):
        setattr(self, outcome, getattr(self, outcome) + 1)


def make_meta_pusher(client: WooClient, title_key: str, description_key: str) -> PushMeta:
    """Return a callable that writes an SeoPair to a product's meta_data."""
    def push(product_id: int, pair: SeoPair):
        meta_data = build_seo_meta_data(pair.title, pair.description, title_key, description_key)
        client.update_product_meta(product_id, meta_data)

    return push


def generate_valid_pair(product: Product, description: str, generate: SeoGenerator,
                        max_attempts: int, max_title: int, max_description: int) -> SeoPair:
    """
    Call generate until it returns a pair within the limits.

    Raises:
        RetriesExhausted: If no attempt produced a valid pair
    """
    return with_retries(
        lambda: generate(product.name, product.short_description, description, product.categories),
        max_attempts=max_attempts,
        is_acceptable=lambda pair: pair.fits(max_title, max_description),
        retry_on=(SeoGenerationError,),
        label=f"Generating meta fields for product ID {product.id}",
    )


def process_product(
    product: Product,
    tracker: UpdateTracker,
    tracker_path: str,
    generate: SeoGenerator,
    push_meta: PushMeta,
    confirmer=None,
    max_attempts: int = 10,
    max_title: int = 60,
    max_description: int = 160
) -> str:
    """
    Run one product through the autofill steps.

    Returns:
        One of SKIPPED, EXHAUSTED, REJECTED, FAILED, COMMITTED
    """
    if tracker.is_marked(product.id):
        logging.info(f"Skipping product ID {product.id} (already updated)")
        return SKIPPED

    logging.info(f"Processing product ID {product.id}: {product.name}")
    description = normalize_description(product.description)

    try:
        pair = generate_valid_pair(product, description, generate, max_attempts, max_title, max_description)
    except RetriesExhausted as e:
        logging.error(f"Failed to generate valid meta fields for product ID {product.id} "
                      f"after {e.attempts} attempts: {e.last_error or 'over length limits'}")
        return EXHAUSTED

    logging.info(f"Generated for product ID {product.id}: title={pair.title!r} description={pair.description!r}")

    if confirmer is not None and not confirmer.approve(product, pair):
        logging.info(f"Product ID {product.id} rejected by operator")
        return REJECTED

    try:
        push_meta(product.id, pair)
    except (NetworkError, RemoteError, DecodeError) as e:
        logging.error(f"Failed to update SEO for product ID {product.id}: {e}")
        return FAILED

    logging.info(f"✅ Successfully updated SEO for product ID {product.id}")
    tracker.mark(product.id)
    tracker.save(tracker_path)
    return COMMITTED


def update_products_seo(
    products: List[Product],
    tracker: UpdateTracker,
    tracker_path: str,
    generate: SeoGenerator,
    push_meta: PushMeta,
    confirmer=None,
    max_attempts: int = 10,
    max_title: int = 60,
    max_description: int = 160,
    status_fn=None
) -> UpdateSummary:
    """
    Autofill SEO meta for products in catalog order.

    No single product failure stops the loop.

    Returns:
        UpdateSummary with per-outcome counts
    """
    if confirmer is None:
        confirmer = AutoApprove()

    summary = UpdateSummary(total=len(products))
    log_and_status(status_fn, f"Products To Be Processed: {len(products)}")

    for i, product in enumerate(products, 1):
        logging.debug(f"Product {i}/{len(products)}")
        outcome = process_product(
            product, tracker, tracker_path, generate, push_meta, confirmer,
            max_attempts, max_title, max_description,
        )
        summary.record(outcome)

    log_and_status(
        status_fn,
        f"SEO update finished: {summary.committed} updated, {summary.skipped} already done, "
        f"{summary.rejected} rejected, {summary.exhausted} out of retries, {summary.failed} failed"
    )
    return summary


def run_seo_update(
    cfg: Dict,
    client: WooClient,
    cache_path: str,
    tracker_path: str,
    restart: bool = False,
    confirmer=None,
    generate: SeoGenerator = None,
    force_refresh: bool = False,
    status_fn=None
) -> UpdateSummary:
    """
    Load the tracker, fetch the catalog and autofill every product.

    Args:
        cfg: Configuration dictionary
        client: Store client
        cache_path: Catalog cache file
        tracker_path: Tracker file
        restart: Start with an empty tracker instead of the saved one
        confirmer: Object with approve(product, pair); None approves all
        generate: SEO generator (default: configured AI provider)
        force_refresh: Bypass the catalog cache
        status_fn: Optional status update function

    Raises:
        DecodeError: If the saved tracker is corrupt
        ValueError: If the AI provider is not configured
        NetworkError, RemoteError: If the catalog cannot be fetched
    """
    log_and_status(status_fn, "Starting SEO update...")
    if restart:
        log_and_status(status_fn, "Starting Fresh Tracker...")
        tracker = UpdateTracker.reset()
    else:
        tracker = UpdateTracker.load(tracker_path)

    if generate is None:
        generate = build_seo_generator(cfg)

    products = fetch_all_products(
        client,
        cache_path,
        max_age=cache_max_age(cfg),
        per_page=int(cfg.get("PER_PAGE", 100)),
        request_attempts=int(cfg.get("REQUEST_ATTEMPTS", 1)),
        force_refresh=force_refresh,
        status_fn=status_fn,
    )

    push_meta = make_meta_pusher(
        client,
        cfg.get("SEO_TITLE_KEY", "_yoast_wpseo_title"),
        cfg.get("SEO_DESCRIPTION_KEY", "_yoast_wpseo_metadesc"),
    )

    return update_products_seo(
        products,
        tracker,
        tracker_path,
        generate,
        push_meta,
        confirmer=confirmer,
        max_attempts=int(cfg.get("MAX_GENERATION_ATTEMPTS", 10)),
        max_title=int(cfg.get("MAX_TITLE_LENGTH", 60)),
        max_description=int(cfg.get("MAX_DESCRIPTION_LENGTH", 160)),
        status_fn=status_fn,
    )
