"""
AI Provider abstraction layer - supports both OpenAI and Claude APIs.
Routes SEO generation requests to the provider selected in the configuration.
"""

import logging
from typing import Callable, Dict, List, Tuple

from . import claude_api
from . import openai_api
from .models import Category, SeoPair
from .product_utils import format_categories
from .seo_prompt import build_seo_prompt, check_seo_limits


SeoGenerator = Callable[[str, str, str, List[Category]], SeoPair]

PROVIDERS = {
    "openai": ("OpenAI", "OPENAI_API_KEY", "OPENAI_MODEL", "gpt-4o"),
    "claude": ("Claude", "CLAUDE_API_KEY", "CLAUDE_MODEL", "claude-sonnet-4-5-20250929"),
}


def get_provider_settings(cfg: Dict) -> Tuple[str, str, str]:
    """
    Resolve the configured provider, its API key and model.

    Returns:
        (provider, api_key, model)

    Raises:
        ValueError: If the provider is unknown or its API key is missing
    """
    provider = str(cfg.get("AI_PROVIDER", "openai")).lower()
    if provider not in PROVIDERS:
        error_msg = f"Unknown AI provider: {provider}. Must be 'openai' or 'claude'."
        logging.error(error_msg)
        raise ValueError(error_msg)

    provider_name, key_field, model_field, default_model = PROVIDERS[provider]
    api_key = str(cfg.get(key_field) or "").strip()
    model = cfg.get(model_field) or default_model

    if not api_key:
        error_msg = f"{provider_name} API key not configured. Set {key_field} in config.json or the environment."
        logging.error(error_msg)
        raise ValueError(error_msg)

    return provider, api_key, model


def generate_seo(
    cfg: Dict,
    product_name: str,
    short_description: str,
    description: str,
    categories: List[Category]
) -> SeoPair:
    """
    Generate an SEO title/description pair for one product.

    Makes exactly one API call; retrying is up to the caller.

    Args:
        cfg: Configuration dictionary (provider, API keys, models, limits)
        product_name: Product name
        short_description: Short description
        description: Cleaned full description
        categories: Product categories

    Returns:
        SeoPair within the configured length limits

    Raises:
        ValueError: If the provider is not configured
        GenerationError, EmptyResponseError, MalformedReplyError: If the call
            or its reply fails
        ConstraintViolation: If the reply is over the length limits
    """
    provider, api_key, model = get_provider_settings(cfg)
    max_title = int(cfg.get("MAX_TITLE_LENGTH", 60))
    max_description = int(cfg.get("MAX_DESCRIPTION_LENGTH", 160))
    temperature = float(cfg.get("OPENAI_TEMPERATURE", 0.7))

    prompt = build_seo_prompt(
        product_name,
        short_description,
        description,
        format_categories(categories),
        max_title=max_title,
        max_description=max_description,
        context=cfg.get("SEO_CONTEXT", ""),
    )

    if provider == "openai":
        pair = openai_api.generate_seo_with_openai(prompt, api_key, model, temperature)
    else:
        pair = claude_api.generate_seo_with_claude(prompt, api_key, model, temperature)

    return check_seo_limits(pair, max_title, max_description)


def build_seo_generator(cfg: Dict) -> SeoGenerator:
    """
    Validate the provider settings once and return a generator callable.

    Raises:
        ValueError: If the provider is not configured
    """
    provider, _, model = get_provider_settings(cfg)
    logging.info(f"🤖 Using {PROVIDERS[provider][0]} ({model}) for SEO generation")

    def generate(product_name, short_description, description, categories):
        return generate_seo(cfg, product_name, short_description, description, categories)

    return generate
