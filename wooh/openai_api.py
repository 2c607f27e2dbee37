"""
OpenAI integration for SEO meta generation.
"""

import logging

import openai
from openai import OpenAI

from .errors import EmptyResponseError, GenerationError
from .models import SeoPair
from .seo_prompt import parse_seo_reply


def generate_seo_with_openai(prompt: str, api_key: str, model: str = "gpt-4o",
                             temperature: float = 0.7) -> SeoPair:
    """
    Send the SEO prompt as a single chat message and parse the reply.

    Args:
        prompt: Prompt from build_seo_prompt
        api_key: OpenAI API key
        model: Chat model ID
        temperature: Sampling temperature

    Returns:
        Parsed SeoPair (length limits are not checked here)

    Raises:
        GenerationError: If the API call fails
        EmptyResponseError: If no choices are returned
        MalformedReplyError: If the reply is not the expected JSON
    """
    client = OpenAI(api_key=api_key)

    logging.debug(f"Sending SEO request to OpenAI ({model}), prompt length {len(prompt)}")
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
    except openai.OpenAIError as e:
        raise GenerationError(f"Failed to get chat completion: {e}") from e

    if not response.choices:
        raise EmptyResponseError("No choices returned by OpenAI API")

    usage = getattr(response, "usage", None)
    if usage is not None:
        logging.debug(f"Token usage - Prompt: {usage.prompt_tokens}, Completion: {usage.completion_tokens}")

    return parse_seo_reply(response.choices[0].message.content)
