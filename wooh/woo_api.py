"""
WooCommerce and WordPress REST client.

WooCommerce endpoints authenticate with the consumer key/secret as query
parameters; the WordPress media endpoint uses HTTP basic auth with an
application password.
"""

import os
import logging
from typing import Dict, List

import requests

from .errors import ConfigError, DecodeError, NetworkError, RemoteError


PRODUCTS_PATH = "/wp-json/wc/v3/products"
MEDIA_PATH = "/wp-json/wp/v2/media"


def normalize_site_url(site: str) -> str:
    """Base URL for the store; bare domains get https://."""
    site = (site or "").strip().rstrip("/")
    if not site:
        raise ConfigError("SITE is not configured")
    if not site.startswith(("http://", "https://")):
        site = f"https://{site}"
    return site


class WooClient:
    """Thin wrapper around a requests.Session for the store's REST API."""

    def __init__(self, site: str, consumer_key: str, consumer_secret: str,
                 wp_user: str = "", wp_key: str = "", timeout: float = 60,
                 session: requests.Session = None):
        self.base_url = normalize_site_url(site)
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.wp_user = wp_user
        self.wp_key = wp_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, cfg: Dict, session: requests.Session = None) -> "WooClient":
        return cls(
            site=cfg.get("SITE", ""),
            consumer_key=cfg.get("CONSUMER_KEY", ""),
            consumer_secret=cfg.get("CONSUMER_SECRET", ""),
            wp_user=cfg.get("WP_USER", ""),
            wp_key=cfg.get("WP_KEY", ""),
            timeout=cfg.get("REQUEST_TIMEOUT", 60),
            session=session,
        )

    @property
    def products_url(self) -> str:
        return f"{self.base_url}{PRODUCTS_PATH}"

    @property
    def media_url(self) -> str:
        return f"{self.base_url}{MEDIA_PATH}"

    def _woo_auth(self) -> Dict:
        return {"consumer_key": self.consumer_key, "consumer_secret": self.consumer_secret}

    def _request(self, method: str, url: str, context: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{context}: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise RemoteError(resp.status_code, resp.text, context)
        return resp

    @staticmethod
    def _json(resp: requests.Response, context: str):
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"{context}: response is not JSON: {e}") from e

    @staticmethod
    def _json_or_empty(resp: requests.Response, context: str) -> Dict:
        # Any 2xx means the write was applied, even if the body is not JSON
        try:
            data = resp.json()
        except ValueError:
            logging.warning(f"{context}: succeeded with a non-JSON response body")
            return {}
        return data if isinstance(data, dict) else {}

    def list_products(self, page: int, per_page: int = 100) -> List[Dict]:
        """One page of the product listing, as raw dicts."""
        context = f"Fetching products page {page}"
        params = dict(self._woo_auth(), page=page, per_page=per_page)
        resp = self._request(
            "GET", self.products_url, context,
            params=params, headers={"Accept": "application/json"},
        )
        data = self._json(resp, context)
        if not isinstance(data, list):
            raise DecodeError(f"{context}: expected a JSON array, got {type(data).__name__}")
        return data

    def update_product_meta(self, product_id: int, meta_data: List[Dict]) -> Dict:
        """PUT ``{"meta_data": [...]}`` to one product."""
        context = f"Updating product {product_id}"
        resp = self._request(
            "PUT", f"{self.products_url}/{product_id}", context,
            params=self._woo_auth(), json={"meta_data": meta_data},
        )
        return self._json_or_empty(resp, context)

    def create_product(self, body: Dict) -> Dict:
        context = f"Creating product {body.get('name', '')!r}"
        resp = self._request(
            "POST", self.products_url, context,
            params=self._woo_auth(), json=body,
        )
        return self._json_or_empty(resp, context)

    def upload_media(self, file_path: str, title: str, caption: str = "") -> Dict:
        """
        Upload a file to the WordPress media library.

        Returns:
            Dict with the media ``id`` and ``source_url``

        Raises:
            NetworkError, RemoteError: If the upload fails
            DecodeError: If the response has no id or source_url
        """
        context = f"Uploading {os.path.basename(file_path)}"
        with open(file_path, "rb") as fh:
            resp = self._request(
                "POST", self.media_url, context,
                auth=(self.wp_user, self.wp_key),
                files={"file": (os.path.basename(file_path), fh)},
                data={"title": title, "caption": caption},
            )
        result = self._json(resp, context)

        media_id = result.get("id") if isinstance(result, dict) else None
        source_url = result.get("source_url") if isinstance(result, dict) else None
        if isinstance(media_id, bool) or not isinstance(media_id, (int, float)) or not isinstance(source_url, str):
            raise DecodeError(f"{context}: media response missing id/source_url")

        logging.debug(f"Uploaded media {int(media_id)}: {source_url}")
        return {"id": int(media_id), "source_url": source_url}
