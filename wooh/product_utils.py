"""
Product text utilities: HTML description cleanup and meta helpers.

The cleaned text is what gets embedded in the SEO prompt, so it keeps the
document structure (headings, lists) but drops images and blank lines.
"""

import logging
import re
from typing import Dict, List

from markdownify import markdownify

from .models import Category


HTML_TAG_RE = re.compile(r"<\s*/?\s*[a-zA-Z!][^>]*>")
# h4 at line start, optionally after list bullets or blockquote markers
H4_RE = re.compile(r"^((?:[ \t]*(?:[-*+]|\d+[.)]|>)[ \t]*)*)####(?=\s|$)", re.MULTILINE)
IMAGE_RE = re.compile(r"!\[.*?\]\(.*?\)")
BLANK_LINES_RE = re.compile(r"\n{2,}")


def has_html_markup(text: str) -> bool:
    return bool(HTML_TAG_RE.search(text or ""))


def html_to_markdown(html: str) -> str:
    """
    Convert HTML to Markdown, falling back to a crude tag strip.

    Args:
        html: HTML fragment (may be malformed)

    Returns:
        Markdown text
    """
    if not html:
        return ""
    try:
        return markdownify(
            html,
            heading_style="ATX",
            escape_asterisks=False,
            escape_underscores=False,
        )
    except Exception as e:
        logging.warning(f"HTML to Markdown conversion failed, stripping tags instead: {e}")
        text = re.sub(r"<\s*br\s*/?>", "\n", html, flags=re.I)
        text = re.sub(r"</\s*(p|div|h[1-6]|li)\s*>", "\n", text, flags=re.I)
        return HTML_TAG_RE.sub("", text)


def normalize_description(html: str) -> str:
    """
    Turn a product description into plain Markdown-like text for prompting.

    h4 headings become h2, inline images are removed, runs of newlines are
    collapsed to one and the result is trimmed. Input without HTML tags is
    not converted again, so normalizing twice gives the same text.

    Args:
        html: Product description HTML

    Returns:
        Cleaned text
    """
    if has_html_markup(html):
        text = html_to_markdown(html)
    else:
        text = html or ""

    text = H4_RE.sub(r"\1##", text)
    text = IMAGE_RE.sub("", text)
    text = BLANK_LINES_RE.sub("\n", text)
    return text.strip()


def format_categories(categories: List[Category]) -> str:
    """Comma separated category names for the prompt."""
    names = [c.name or c.slug or str(c.id) for c in categories]
    return ", ".join(names) if names else "Uncategorized"


def build_seo_meta_data(title: str, description: str, title_key: str,
                        description_key: str) -> List[Dict]:
    """The two ``meta_data`` entries written back to a product."""
    return [
        {"key": title_key, "value": title},
        {"key": description_key, "value": description},
    ]
