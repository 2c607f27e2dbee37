"""
SEO prompt construction and reply validation, shared by the AI backends.
"""

import json
import logging

from .errors import ConstraintViolation, MalformedReplyError
from .models import SeoPair


MAX_TITLE_LENGTH = 60
MAX_DESCRIPTION_LENGTH = 160


def build_seo_prompt(product_name: str, short_description: str, description: str,
                     categories: str, max_title: int = MAX_TITLE_LENGTH,
                     max_description: int = MAX_DESCRIPTION_LENGTH,
                     context: str = "") -> str:
    """
    Build the SEO meta title/description prompt for one product.

    Args:
        product_name: Product name
        short_description: Short description (may contain HTML)
        description: Cleaned full description
        categories: Comma separated category names
        max_title: Title length limit in characters
        max_description: Description length limit in characters
        context: Optional store-specific guidance

    Returns:
        Prompt text
    """
    context_block = f"\nStore-specific guidance:\n{context.strip()}\n" if context and context.strip() else ""

    return f"""You are an experienced SEO specialist and copywriter for an online store.

I will provide:
- A product's name
- A short description
- A detailed description (in Markdown)
- A list of categories
{context_block}
Your task is to:
1. Understand the key product attributes and what sets the product apart.

2. Create an SEO-friendly **meta title** (up to **{max_title} characters**) that:
   - Clearly identifies the product type.
   - Highlights its unique benefits or specifications.
   - Is concise, compelling, and within the {max_title}-character limit.

3. Generate an SEO-friendly **meta description** (up to **{max_description} characters**) that:
   - Clearly explains the product and its use cases.
   - Summarizes its unique features and benefits.
   - Is concise, natural, and strictly under {max_description} characters.

4. Output your response as **valid JSON**, formatted like this:

{{
  "meta_title": "Your meta title here",
  "meta_description": "Your meta description here"
}}

Important:
- The **meta title** must be {max_title} characters or fewer.
- The **meta description** must be {max_description} characters or fewer.
- Use natural, human-readable language.
- Do not include anything except the JSON object in your response.
- Ensure the JSON is valid and properly escaped.

Here is the product information:

- Product Name: {product_name}
- Short Description: {short_description}
- Full Description: {description}
- Categories: {categories}
"""


def parse_seo_reply(text: str) -> SeoPair:
    """
    Parse the model reply into an SeoPair.

    Raises:
        MalformedReplyError: If the reply is not a JSON object with string
            meta_title and meta_description fields
    """
    text = (text or "").strip()

    # Remove markdown code blocks if present
    if text.startswith("```"):
        logging.debug("Removing markdown code block wrapper from SEO response")
        lines = text.split("\n")
        if lines[-1].strip().startswith("```"):
            lines = lines[:-1]
        text = "\n".join(lines[1:]).strip()

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedReplyError(f"Failed to parse JSON: {e}; raw content: {text[:200]}") from e

    if not isinstance(parsed, dict):
        raise MalformedReplyError(f"Expected a JSON object, got {type(parsed).__name__}")

    for key in ("meta_title", "meta_description"):
        if not isinstance(parsed.get(key), str):
            raise MalformedReplyError(f'JSON response did not include "{key}"')

    return SeoPair(title=parsed["meta_title"].strip(), description=parsed["meta_description"].strip())


def check_seo_limits(pair: SeoPair, max_title: int = MAX_TITLE_LENGTH,
                     max_description: int = MAX_DESCRIPTION_LENGTH) -> SeoPair:
    """
    Return pair unchanged if it is within the limits.

    Raises:
        ConstraintViolation: If either field is too long
    """
    if not pair.fits(max_title, max_description):
        raise ConstraintViolation(len(pair.title), len(pair.description), max_title, max_description)
    return pair
