#!/usr/bin/env python3
"""
wooh - CLI Entry Point

Command-line interface for WooCommerce helpers:
- turn a directory of images into WooCommerce products
- autofill SEO meta titles/descriptions with an AI provider
- list the current SEO meta of every product
"""

import argparse
import logging
import os
import sys

from wooh.catalog import fetch_all_products, list_product_meta
from wooh.config import (
    CONFIG_FILE,
    SCRIPT_VERSION,
    apply_env_overrides,
    cache_max_age,
    load_config,
    resolve_state_paths,
    setup_logging,
)
from wooh.confirm import ConsoleConfirmer
from wooh.errors import ConfigError, WoohError
from wooh.models import ProductTemplate
from wooh.seo_updater import run_seo_update
from wooh.uploader import IMAGE_EXTENSIONS, upload_directory
from wooh.woo_api import WooClient


def print_status(message):
    """Print status message to stdout."""
    print(f"[STATUS] {message}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wooh",
        description="Tool that helps turn images into WooCommerce products and fill in SEO meta",
        epilog=f"Version {SCRIPT_VERSION}"
    )
    parser.add_argument(
        "-c", "--config",
        default=CONFIG_FILE,
        help=f"Custom config path (default: {CONFIG_FILE}, created if missing)"
    )
    parser.add_argument(
        "-i", "--images-path",
        help="Directory of images to upload as new products"
    )
    parser.add_argument(
        "-a", "--autofill",
        action="store_true",
        help="Yoast SEO meta data autofill"
    )
    parser.add_argument(
        "-r", "--reset-autofill",
        action="store_true",
        help="Ignore the saved tracker and process every product again"
    )
    parser.add_argument(
        "-p", "--prompt",
        action="store_true",
        help="Prompt for confirmation for each product"
    )
    parser.add_argument(
        "-l", "--list-product-meta",
        action="store_true",
        help="List product SEO meta"
    )
    parser.add_argument(
        "--refresh-cache",
        action="store_true",
        help="Re-fetch the product catalog even if the cache is fresh"
    )
    parser.add_argument(
        "--log-file",
        help="Path to log file (default: LOG_FILE from config)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=SCRIPT_VERSION
    )
    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.images_path or args.autofill or args.list_product_meta):
        parser.print_help()
        return 0

    config_path = os.path.abspath(args.config)
    try:
        config = apply_env_overrides(load_config(config_path))
    except ConfigError as e:
        print(f"Error loading config file '{config_path}': {e}", file=sys.stderr)
        return 1

    log_file = args.log_file or config.get("LOG_FILE") or "wooh.log"
    setup_logging(log_file, logging.DEBUG if args.verbose else logging.INFO)
    logging.info(f"wooh {SCRIPT_VERSION} using config {config_path}")

    cache_path, tracker_path = resolve_state_paths(config)

    try:
        client = WooClient.from_config(config)

        if args.images_path:
            images_path = os.path.abspath(args.images_path)
            if os.path.isdir(images_path):
                template = ProductTemplate.from_config(config.get("PRODUCT_META", {}))
                upload_directory(
                    client,
                    images_path,
                    template,
                    extensions=config.get("IMAGE_EXTENSIONS") or IMAGE_EXTENSIONS,
                    status_fn=print_status
                )
            else:
                logging.warning(f"Images path is not a directory, skipping upload: {images_path}")

        if args.autofill:
            run_seo_update(
                config,
                client,
                cache_path,
                tracker_path,
                restart=args.reset_autofill,
                confirmer=ConsoleConfirmer() if args.prompt else None,
                force_refresh=args.refresh_cache,
                status_fn=print_status
            )

        if args.list_product_meta:
            products = fetch_all_products(
                client,
                cache_path,
                max_age=cache_max_age(config),
                per_page=int(config.get("PER_PAGE", 100)),
                request_attempts=int(config.get("REQUEST_ATTEMPTS", 1)),
                force_refresh=args.refresh_cache and not args.autofill,
                status_fn=print_status
            )
            logging.info(f"Fetched {len(products)} products")
            list_product_meta(
                products,
                config.get("SEO_TITLE_KEY", "_yoast_wpseo_title"),
                config.get("SEO_DESCRIPTION_KEY", "_yoast_wpseo_metadesc")
            )
    except (WoohError, ValueError, OSError) as e:
        logging.error(f"❌ {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
