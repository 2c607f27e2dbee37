"""
Claude API integration for SEO meta generation.
"""

import logging

import anthropic

from .errors import EmptyResponseError, GenerationError
from .models import SeoPair
from .seo_prompt import parse_seo_reply


def generate_seo_with_claude(prompt: str, api_key: str,
                             model: str = "claude-sonnet-4-5-20250929",
                             temperature: float = 0.7,
                             max_tokens: int = 1024) -> SeoPair:
    """
    Send the SEO prompt as a single user message and parse the reply.

    Raises:
        GenerationError: If the API call fails
        EmptyResponseError: If the response has no text block
        MalformedReplyError: If the reply is not the expected JSON
    """
    client = anthropic.Anthropic(api_key=api_key)

    logging.debug(f"Sending SEO request to Claude ({model}), prompt length {len(prompt)}")
    try:
        response = client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{
                "role": "user",
                "content": prompt
            }]
        )
    except anthropic.AnthropicError as e:
        raise GenerationError(f"Claude API call failed: {e}") from e

    text_block = next((b for b in response.content or [] if getattr(b, "type", None) == "text"), None)
    if text_block is None:
        raise EmptyResponseError("No text content returned by Claude API")

    logging.debug(
        f"Token usage - Input: {response.usage.input_tokens}, Output: {response.usage.output_tokens}"
    )
    return parse_seo_reply(text_block.text)
