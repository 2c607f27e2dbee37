"""
WooCommerce Helper Package

This package contains the core functionality for the wooh command-line tool.

Modules:
- config: Configuration file loading and logging setup
- woo_api: WooCommerce / WordPress REST client
- catalog: Paginated catalog fetch backed by the on-disk cache
- ai_provider: Routes SEO generation to OpenAI or Claude
- seo_updater: Resumable SEO meta autofill loop
- uploader: Image directory to WooCommerce product upload
"""

__version__ = "1.0.0"

__all__ = [
    "config",
    "woo_api",
    "catalog",
    "ai_provider",
    "seo_updater",
    "uploader",
]
