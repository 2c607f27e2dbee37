"""
Configuration and logging management for wooh.
"""

import os
import sys
import json
import logging
from datetime import timedelta
from typing import Dict, Tuple

from . import __version__
from .errors import ConfigError

# Version
SCRIPT_VERSION = f"{__version__} - WooCommerce Helper"

# File paths
CONFIG_FILE = "config.json"

# Environment variables consulted when the matching config value is empty
ENV_OVERRIDES = {
    "OPENAI_API_KEY": "OPENAI_API_KEY",
    "CLAUDE_API_KEY": "CLAUDE_API_KEY",
    "CONSUMER_KEY": "WC_CONSUMER_KEY",
    "CONSUMER_SECRET": "WC_CONSUMER_SECRET",
    "WP_KEY": "WP_KEY",
}


def default_config() -> Dict:
    """Return a fresh copy of the default configuration."""
    return {
        "_STORE_SETTINGS": "WooCommerce REST keys and WordPress application password.",
        "SITE": "domain.com",
        "WP_USER": "user",
        "WP_KEY": "",
        "CONSUMER_KEY": "woo_consumer_key",
        "CONSUMER_SECRET": "woo_consumer_secret",
        "_AI_SETTINGS": "AI settings for SEO meta generation.",
        "AI_PROVIDER": "openai",
        "OPENAI_API_KEY": "",
        "OPENAI_MODEL": "gpt-4o",
        "OPENAI_TEMPERATURE": 0.7,
        "CLAUDE_API_KEY": "",
        "CLAUDE_MODEL": "claude-sonnet-4-5-20250929",
        "SEO_CONTEXT": "",
        "_SEO_SETTINGS": "Meta keys written back to each product and their length limits.",
        "SEO_TITLE_KEY": "_yoast_wpseo_title",
        "SEO_DESCRIPTION_KEY": "_yoast_wpseo_metadesc",
        "MAX_TITLE_LENGTH": 60,
        "MAX_DESCRIPTION_LENGTH": 160,
        "MAX_GENERATION_ATTEMPTS": 10,
        "_STATE_SETTINGS": "Local cache and tracker files, relative to the working directory.",
        "OUTPUT_DIR": ".wooh-output",
        "CACHE_FILENAME": "products-cache.json",
        "TRACKER_FILENAME": "tracker-state.json",
        "CACHE_MAX_AGE_HOURS": 24,
        "_HTTP_SETTINGS": "Catalog paging and request behaviour.",
        "PER_PAGE": 100,
        "REQUEST_TIMEOUT": 60,
        "REQUEST_ATTEMPTS": 1,
        "_UPLOAD_SETTINGS": "Image upload and the default product template.",
        "IMAGE_EXTENSIONS": [".jpg", ".jpeg", ".png", ".gif"],
        "PRODUCT_META": {
            "type": "simple",
            "regular_price": "0.00",
            "description": "Product description",
            "short_description": "Short Product Description",
            "categories": [1]
        },
        "LOG_FILE": "wooh.log",
    }


def load_config(config_path: str = None) -> Dict:
    """
    Load configuration from config_path or create it with defaults.

    A missing file is created from the defaults. Missing keys in an existing
    file are filled from the defaults.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed, or if
            the defaults cannot be written
    """
    if config_path is None:
        config_path = CONFIG_FILE
    default = default_config()

    if not os.path.exists(config_path):
        try:
            with open(config_path, "w", encoding="utf-8") as f:
                json.dump(default, f, indent=4)
        except IOError as e:
            raise ConfigError(f"Failed to write {config_path}: {e}") from e
        print(f"Config file created at {config_path}")
        return default

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded_config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}") from e
    except IOError as e:
        raise ConfigError(f"Failed to read {config_path}: {e}") from e

    if not isinstance(loaded_config, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    # Ensure all required fields exist
    for key in default:
        if key not in loaded_config:
            loaded_config[key] = default[key]

    return loaded_config


def apply_env_overrides(config: Dict, environ: Dict = None) -> Dict:
    """Fill empty secret values from the environment. Mutates and returns config."""
    if environ is None:
        environ = os.environ
    for key, env_name in ENV_OVERRIDES.items():
        if not str(config.get(key) or "").strip() and environ.get(env_name):
            config[key] = environ[env_name]
    return config


def resolve_state_paths(config: Dict, base_dir: str = None) -> Tuple[str, str]:
    """
    Resolve the catalog cache and tracker file paths.

    Args:
        config: Configuration dictionary
        base_dir: Directory OUTPUT_DIR is relative to (default: cwd)

    Returns:
        (cache_path, tracker_path), both absolute
    """
    if base_dir is None:
        base_dir = os.getcwd()
    output_dir = os.path.abspath(os.path.join(base_dir, config.get("OUTPUT_DIR", ".wooh-output")))
    cache_path = os.path.join(output_dir, config.get("CACHE_FILENAME", "products-cache.json"))
    tracker_path = os.path.join(output_dir, config.get("TRACKER_FILENAME", "tracker-state.json"))
    return cache_path, tracker_path


def cache_max_age(config: Dict) -> timedelta:
    return timedelta(hours=float(config.get("CACHE_MAX_AGE_HOURS", 24)))


def setup_logging(log_path: str, level: int = logging.INFO):
    """
    Configure logging to file and console.

    Args:
        log_path: Path to log file
        level: Console logging level (typically INFO)
    """
    try:
        for h in logging.root.handlers[:]:
            logging.root.removeHandler(h)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
        )

        logging.root.setLevel(logging.DEBUG)
        logging.root.addHandler(file_handler)
        logging.root.addHandler(console_handler)

        install_global_exception_logging()
    except Exception as e:
        print(f"Failed to setup logging: {e}", file=sys.stderr)
        raise


def install_global_exception_logging():
    """Log all unhandled exceptions to the log file."""
    def _log_excepthook(exctype, value, tb):
        logging.critical(
            "Unhandled exception",
            exc_info=(exctype, value, tb)
        )
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = _log_excepthook


def log_and_status(status_fn, msg: str, level: str = "info", ui_msg: str = None):
    """
    Log a message to log file and console, then pass it to status_fn.

    Args:
        status_fn: Function that shows progress to the operator (can be None)
        msg: Detailed message for log file and console
        level: Log level - "info", "warning", or "error"
        ui_msg: Optional shorter message for status_fn
    """
    if ui_msg is None:
        ui_msg = msg

    # Always log to file/console first
    if level == "error":
        logging.error(msg)
    elif level == "warning":
        logging.warning(msg)
    else:
        logging.info(msg)

    if status_fn is not None:
        try:
            status_fn(ui_msg)
        except Exception as e:
            logging.warning(f"status_fn raised while logging message: {e}", exc_info=True)
            print(f"[STATUS] {ui_msg}")
