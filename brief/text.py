"""Plain-text normalization of fetched HTML for summarization input."""

import re

from bs4 import BeautifulSoup

# Bounds prompt size and cost
MAX_TEXT_CHARS = 10000

# Less text than this means the page was JS-rendered or a stub
MIN_TEXT_CHARS = 200


def normalize_text(html: str) -> str:
    """Strip scripts, styles and tags, collapse whitespace, truncate."""
    if not html:
        return ''

    soup = BeautifulSoup(html, 'html.parser')

    # Remove script/style blocks including their content
    for element in soup.find_all(['script', 'style', 'noscript']):
        element.decompose()

    text = soup.get_text(separator=' ')
    text = re.sub(r'\s+', ' ', text).strip()
    return text[:MAX_TEXT_CHARS]


def has_usable_text(text: str) -> bool:
    return bool(text) and len(text) >= MIN_TEXT_CHARS
