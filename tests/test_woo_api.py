"""
Tests for wooh/woo_api.py

HTTP is faked with a mock requests.Session.
"""

import pytest
import requests
from unittest.mock import ANY, Mock

from wooh.errors import ConfigError, DecodeError, NetworkError, RemoteError
from wooh.models import SeoPair
from wooh.seo_updater import COMMITTED, make_meta_pusher, process_product
from wooh.tracker import UpdateTracker
from wooh.woo_api import WooClient, normalize_site_url


class TestNormalizeSiteUrl:
    """Test base URL handling."""

    def test_bare_domain_gets_https(self):
        assert normalize_site_url("shop.example") == "https://shop.example"

    def test_scheme_and_trailing_slash(self):
        assert normalize_site_url("http://shop.example/") == "http://shop.example"

    def test_empty_site_rejected(self):
        with pytest.raises(ConfigError):
            normalize_site_url("  ")


class TestFromConfig:
    """Test WooClient.from_config."""

    def test_reads_store_settings(self, mock_session):
        cfg = {
            "SITE": "shop.example",
            "CONSUMER_KEY": "ck",
            "CONSUMER_SECRET": "cs",
            "WP_USER": "admin",
            "WP_KEY": "pw",
            "REQUEST_TIMEOUT": 5
        }

        client = WooClient.from_config(cfg, session=mock_session)

        assert client.products_url == "https://shop.example/wp-json/wc/v3/products"
        assert client.media_url == "https://shop.example/wp-json/wp/v2/media"
        assert client.timeout == 5


class TestListProducts:
    """Test the paginated listing request."""

    def test_request_parameters(self, woo_client, mock_session, response_factory):
        """Test page, per_page and key/secret are sent as query parameters."""
        mock_session.request.return_value = response_factory(200, [{"id": 1}])

        result = woo_client.list_products(2, 50)

        assert result == [{"id": 1}]
        mock_session.request.assert_called_once_with(
            "GET",
            "https://shop.example/wp-json/wc/v3/products",
            params={"consumer_key": "ck_test", "consumer_secret": "cs_test", "page": 2, "per_page": 50},
            headers={"Accept": "application/json"},
            timeout=60,
        )

    def test_transport_error(self, woo_client, mock_session):
        """Test requests exceptions become NetworkError."""
        mock_session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(NetworkError) as excinfo:
            woo_client.list_products(3)

        assert "page 3" in str(excinfo.value)

    def test_error_status(self, woo_client, mock_session, response_factory):
        """Test non-2xx responses become RemoteError with status and body."""
        mock_session.request.return_value = response_factory(401, text='{"code":"woocommerce_rest_cannot_view"}')

        with pytest.raises(RemoteError) as excinfo:
            woo_client.list_products(1)

        assert excinfo.value.status == 401
        assert "cannot_view" in excinfo.value.body

    def test_non_json_body(self, woo_client, mock_session, response_factory):
        """Test a non-JSON 200 response raises DecodeError."""
        mock_session.request.return_value = response_factory(200, text="<html>maintenance</html>")

        with pytest.raises(DecodeError):
            woo_client.list_products(1)

    def test_non_list_body(self, woo_client, mock_session, response_factory):
        """Test a JSON object instead of an array raises DecodeError."""
        mock_session.request.return_value = response_factory(200, {"id": 1})

        with pytest.raises(DecodeError):
            woo_client.list_products(1)


class TestUpdateProductMeta:
    """Test the meta_data update request."""

    def test_put_body(self, woo_client, mock_session, response_factory):
        """Test the PUT carries only meta_data."""
        mock_session.request.return_value = response_factory(200, {"id": 12})
        meta = [{"key": "_yoast_wpseo_title", "value": "T"}, {"key": "_yoast_wpseo_metadesc", "value": "D"}]

        woo_client.update_product_meta(12, meta)

        mock_session.request.assert_called_once_with(
            "PUT",
            "https://shop.example/wp-json/wc/v3/products/12",
            params={"consumer_key": "ck_test", "consumer_secret": "cs_test"},
            json={"meta_data": meta},
            timeout=60,
        )

    def test_error_status(self, woo_client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(500, text="oops")

        with pytest.raises(RemoteError) as excinfo:
            woo_client.update_product_meta(12, [])

        assert "product 12" in str(excinfo.value)

    def test_success_with_non_json_body(self, woo_client, mock_session, response_factory, caplog):
        """Test a 2xx response with a PHP notice instead of JSON still counts as applied."""
        mock_session.request.return_value = response_factory(
            200, text="<br/><b>Notice</b>: Undefined index in functions.php"
        )

        assert woo_client.update_product_meta(12, []) == {}
        assert "non-JSON response body" in caplog.text

    def test_pushed_meta_is_tracked_despite_non_json_body(self, woo_client, mock_session,
                                                         response_factory, sample_products, tmp_path):
        """Test the autofill commits a product whose update answered 200 with a non-JSON body."""
        mock_session.request.return_value = response_factory(200, text="<br/><b>Notice</b>...")
        tracker = UpdateTracker()
        push_meta = make_meta_pusher(woo_client, "_yoast_wpseo_title", "_yoast_wpseo_metadesc")

        outcome = process_product(sample_products[1], tracker, str(tmp_path / "tracker.json"),
                                  Mock(return_value=SeoPair("T", "D")), push_meta)

        assert outcome == COMMITTED
        assert tracker.is_marked(2)
        assert mock_session.request.call_count == 1


class TestCreateProduct:
    """Test product creation."""

    def test_post_body(self, woo_client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(201, {"id": 99, "name": "oak"})
        body = {"name": "oak", "type": "simple"}

        assert woo_client.create_product(body) == {"id": 99, "name": "oak"}
        mock_session.request.assert_called_once_with(
            "POST",
            "https://shop.example/wp-json/wc/v3/products",
            params={"consumer_key": "ck_test", "consumer_secret": "cs_test"},
            json=body,
            timeout=60,
        )

    def test_success_with_non_json_body(self, woo_client, mock_session, response_factory):
        """Test a created product answering with a non-JSON body is not an error."""
        mock_session.request.return_value = response_factory(201, text="Deprecated: ... {\"id\": 99}")

        assert woo_client.create_product({"name": "oak"}) == {}


class TestUploadMedia:
    """Test WordPress media upload."""

    def test_multipart_with_basic_auth(self, woo_client, mock_session, response_factory, tmp_path):
        """Test the file, title and caption are sent with basic auth."""
        image = tmp_path / "oak.jpg"
        image.write_bytes(b"jpeg")
        mock_session.request.return_value = response_factory(
            201, {"id": 55, "source_url": "https://shop.example/uploads/oak.jpg"}
        )

        result = woo_client.upload_media(str(image), title="oak", caption="Product description")

        assert result == {"id": 55, "source_url": "https://shop.example/uploads/oak.jpg"}
        mock_session.request.assert_called_once_with(
            "POST",
            "https://shop.example/wp-json/wp/v2/media",
            auth=("admin", "app pass word"),
            files={"file": ("oak.jpg", ANY)},
            data={"title": "oak", "caption": "Product description"},
            timeout=60,
        )

    def test_float_id_is_converted(self, woo_client, mock_session, response_factory, tmp_path):
        image = tmp_path / "oak.jpg"
        image.write_bytes(b"jpeg")
        mock_session.request.return_value = response_factory(201, {"id": 55.0, "source_url": "u"})

        assert woo_client.upload_media(str(image), "oak")["id"] == 55

    def test_missing_fields(self, woo_client, mock_session, response_factory, tmp_path):
        """Test a response without id/source_url raises DecodeError."""
        image = tmp_path / "oak.jpg"
        image.write_bytes(b"jpeg")
        mock_session.request.return_value = response_factory(201, {"id": 55})

        with pytest.raises(DecodeError):
            woo_client.upload_media(str(image), "oak")

    def test_missing_file(self, woo_client, tmp_path):
        """Test a missing image raises OSError before any request."""
        with pytest.raises(OSError):
            woo_client.upload_media(str(tmp_path / "gone.jpg"), "gone")
