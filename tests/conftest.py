"""
Pytest configuration and shared fixtures for wooh tests.
"""

import pytest
import json
import tempfile
from pathlib import Path
from unittest.mock import Mock

import requests


# ============================================================================
# SAMPLE DATA FIXTURES
# ============================================================================

@pytest.fixture
def sample_product_payloads():
    """Sample WooCommerce REST product payloads."""
    return [
        {
            "id": 1,
            "name": "Oak Rigid Vinyl Plank",
            "sku": "RVP-OAK",
            "short_description": "<p>Waterproof plank with SPC core</p>",
            "description": "<h4>Features</h4><p>Built-in acoustic underlay.</p>"
                           "<p><img src=\"https://shop.example/oak.jpg\" alt=\"oak\"></p>",
            "categories": [{"id": 15, "name": "Flooring", "slug": "flooring"}],
            "meta_data": [{"id": 901, "key": "_yoast_wpseo_title", "value": "Old title"}]
        },
        {
            "id": 2,
            "name": "Grey Stone LVT",
            "short_description": "Luxury vinyl tile",
            "description": "<p>Stone look tile.</p>",
            "categories": [{"id": 16, "name": "Tiles", "slug": "tiles"}],
            "meta_data": []
        },
        {
            "id": 3,
            "name": "Walnut Herringbone",
            "short_description": "",
            "description": "",
            "categories": [],
            "meta_data": [{"id": 902, "key": "color", "value": {"hex": "#5c4033"}}]
        }
    ]


@pytest.fixture
def sample_products(sample_product_payloads):
    """Sample payloads as Product records."""
    from wooh.models import Product
    return [Product.from_dict(p) for p in sample_product_payloads]


@pytest.fixture
def sample_seo_reply():
    """Sample AI reply with a valid SEO pair."""
    return {
        "meta_title": "Oak RVP Flooring with SPC Core | Quiet",
        "meta_description": "Rigid vinyl plank with SPC core and acoustic underlay for quiet, stable floors."
    }


# ============================================================================
# TEMPORARY FILE FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_file(temp_dir):
    """Create a temporary config.json file."""
    config_path = temp_dir / "config.json"
    config_data = {
        "SITE": "shop.example",
        "WP_USER": "admin",
        "WP_KEY": "app pass word",
        "CONSUMER_KEY": "ck_test",
        "CONSUMER_SECRET": "cs_test",
        "AI_PROVIDER": "openai",
        "OPENAI_API_KEY": "test_openai_key_67890",
        "OPENAI_MODEL": "gpt-4o",
        "LOG_FILE": str(temp_dir / "test.log")
    }
    with open(config_path, 'w') as f:
        json.dump(config_data, f, indent=4)
    return config_path


@pytest.fixture
def image_dir(temp_dir):
    """Directory with a mix of image and non-image entries."""
    images = temp_dir / "images"
    images.mkdir()
    for name in ["b-walnut.png", "a-oak.jpg", "notes.txt", "c-ash.JPG", "d-elm.gif"]:
        (images / name).write_bytes(b"fake image bytes")
    (images / "nested.jpg").mkdir()
    return images


# ============================================================================
# MOCK API FIXTURES
# ============================================================================

def make_response(status_code=200, payload=None, text=None):
    """Build a mock requests.Response."""
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.text = text if text is not None else json.dumps(payload)
    if payload is None and text is not None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def response_factory():
    """Factory for mock HTTP responses."""
    return make_response


@pytest.fixture
def mock_session():
    """Mock requests.Session whose request() the test configures."""
    return Mock(spec=requests.Session)


@pytest.fixture
def woo_client(mock_session):
    """WooClient wired to the mock session."""
    from wooh.woo_api import WooClient
    return WooClient(
        site="shop.example",
        consumer_key="ck_test",
        consumer_secret="cs_test",
        wp_user="admin",
        wp_key="app pass word",
        session=mock_session
    )


@pytest.fixture
def mock_openai_response(sample_seo_reply):
    """Mock OpenAI chat completion response."""
    class MockResponse:
        def __init__(self):
            self.id = "chatcmpl-test123"
            self.model = "gpt-4o"
            self.choices = [
                type('obj', (object,), {
                    'message': type('obj', (object,), {
                        'content': json.dumps(sample_seo_reply)
                    }),
                    'finish_reason': 'stop'
                })
            ]
            self.usage = type('obj', (object,), {
                'prompt_tokens': 500,
                'completion_tokens': 60,
                'total_tokens': 560
            })

    return MockResponse()


@pytest.fixture
def mock_claude_response(sample_seo_reply):
    """Mock Claude API response."""
    class MockResponse:
        def __init__(self):
            self.id = "msg_test123"
            self.model = "claude-sonnet-4-5-20250929"
            self.content = [
                type('obj', (object,), {
                    'type': 'text',
                    'text': json.dumps(sample_seo_reply)
                })
            ]
            self.usage = type('obj', (object,), {
                'input_tokens': 500,
                'output_tokens': 60
            })
            self.stop_reason = 'end_turn'

    return MockResponse()


# ============================================================================
# UTILITY FIXTURES
# ============================================================================

@pytest.fixture
def mock_status_fn():
    """Mock status function that collects status messages."""
    messages = []

    def status_fn(msg):
        messages.append(msg)

    status_fn.messages = messages
    return status_fn
