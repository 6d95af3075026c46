"""
Title processing utilities for Brief.

Titles reach us from three places: the sharing client, the page's own meta
tags, and the hostname fallback. All of them go through the same cleanup:
1. HTML entities decoded (twice, for double-encoded publishers)
2. One known publisher suffix stripped
3. Whitespace collapsed
"""

import html
import re
from typing import Optional
from urllib.parse import urlparse

# Outlets that append their own name to every <title>
PUBLISHER_NAMES = [
    'The New York Times',
    'The Washington Post',
    'Washington Post',
    'BBC News',
    'Reuters',
    'CNN',
    'WSJ',
    'AP News',
    'The Guardian',
    'Bloomberg',
    'TechCrunch',
    'Ars Technica',
]

SUFFIX_SEPARATORS = [' - ', ' – ', ' — ', ' | ']

# Exact suffixes, checked in order; the first match wins
PUBLISHER_SUFFIXES = [
    f"{separator}{name}"
    for name in PUBLISHER_NAMES
    for separator in SUFFIX_SEPARATORS
]

# Titles served by interstitials and JS-only shells, never the real headline
PLACEHOLDER_TITLES = [
    'javascript is not available',
    'just a moment',
    'loading...',
    'redirecting',
    'access denied',
]

SITE_NAMES = {
    'nytimes.com': 'New York Times',
    'washingtonpost.com': 'Washington Post',
    'cnn.com': 'CNN',
    'bbc.com': 'BBC',
    'bbc.co.uk': 'BBC',
    'reuters.com': 'Reuters',
    'techcrunch.com': 'TechCrunch',
    'arstechnica.com': 'Ars Technica',
    'x.com': 'X',
    'twitter.com': 'X',
}


def decode_entities(text: Optional[str]) -> Optional[str]:
    """
    Decode HTML entities, running the decoder twice.

    Some publishers encode entities twice, so a single pass leaves a literal
    entity behind.

    Examples:
        >>> decode_entities("It&amp;#39;s")
        "It's"

        >>> decode_entities("Fish &amp; Chips")
        'Fish & Chips'
    """
    if not text:
        return text
    decoded = text
    for _ in range(2):
        decoded = html.unescape(decoded)
    return decoded.replace('\xa0', ' ')


def strip_publisher_suffix(title: str) -> str:
    """
    Remove one known publisher suffix from the end of a title.

    Matching is exact and applied once; the first matching suffix wins.

    Examples:
        >>> strip_publisher_suffix("Headline - The New York Times")
        'Headline'

        >>> strip_publisher_suffix("Headline")
        'Headline'
    """
    if not title:
        return title
    for suffix in PUBLISHER_SUFFIXES:
        if title.endswith(suffix) and len(title) > len(suffix):
            return title[:-len(suffix)].rstrip()
    return title


def clean_title(title: Optional[str]) -> Optional[str]:
    """
    Full cleanup for any incoming title.

    Returns None when nothing usable is left.
    """
    if not title:
        return None

    title = decode_entities(title)

    # Normalize whitespace (titles sometimes span lines in <title>)
    title = ' '.join(title.split())
    title = strip_publisher_suffix(title)

    return title or None


def is_placeholder_title(title: Optional[str]) -> bool:
    """True if the title belongs to a bot-check or JS-required shell page."""
    if not title:
        return True
    lower_title = title.lower()
    return any(placeholder in lower_title for placeholder in PLACEHOLDER_TITLES)


def hostname_title(url: str) -> str:
    """Hostname with a leading 'www.' removed, used when no title is found."""
    host = urlparse(url).hostname or url
    return re.sub(r'^www\.', '', host)


def website_name(site: Optional[str]) -> str:
    """
    Human-friendly publication name for the email subject.

    Examples:
        >>> website_name("www.nytimes.com")
        'New York Times'

        >>> website_name("example.com")
        'Example'
    """
    if not site:
        return 'Unknown'

    site = site.strip()
    # Clients sometimes send a full URL as the site hint
    if '://' in site:
        site = urlparse(site).hostname or site
    host = re.sub(r'^www\.', '', site.lower())

    if host in SITE_NAMES:
        return SITE_NAMES[host]

    # Not a hostname, so the client already sent a display name
    if '.' not in host:
        return site

    first_label = host.split('.')[0]
    return re.sub(r'\b\w', lambda m: m.group().upper(), first_label)
