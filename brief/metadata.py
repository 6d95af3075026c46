"""
Metadata extraction for captured pages.

Title, author and publish date come from ordered lists of tag lookups; the
first lookup that yields a value wins for each field. Posts on X/Twitter
skip the page entirely and go through the platform's oEmbed endpoint.
"""

import re
from datetime import datetime
from typing import Callable, List, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from .config import Settings
from .models import ArticleMetadata, SocialPost
from .title_utils import clean_title, decode_entities, hostname_title, is_placeholder_title

SOCIAL_HOSTS = ['x.com', 'www.x.com', 'twitter.com', 'www.twitter.com']
OEMBED_ENDPOINT = 'https://publish.twitter.com/oembed'

AUTHOR_CLASS = re.compile(r'author', re.I)
DATE_CLASS = re.compile(r'date', re.I)

# Class-matched containers longer than this are page sections, not bylines
MAX_FIELD_LENGTH = 120


def _meta_content(soup: BeautifulSoup, **attrs) -> Optional[str]:
    tag = soup.find('meta', attrs=attrs)
    if tag and tag.get('content'):
        return tag['content'].strip() or None
    return None


def _tag_text(soup: BeautifulSoup, names: List[str], class_pattern) -> Optional[str]:
    tag = soup.find(names, attrs={'class': class_pattern})
    if tag:
        return tag.get_text(' ', strip=True) or None
    return None


def _first_match(soup: BeautifulSoup, lookups: List[Callable[[BeautifulSoup], Optional[str]]],
                 accept: Callable[[str], bool] = bool) -> Optional[str]:
    for lookup in lookups:
        value = lookup(soup)
        if value and accept(value):
            return value
    return None


def _time_datetime(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find('time', attrs={'datetime': True})
    if tag:
        return tag['datetime'].strip() or None
    return None


def _is_short_field(value: str) -> bool:
    return len(value) <= MAX_FIELD_LENGTH


TITLE_LOOKUPS = [
    lambda soup: _meta_content(soup, property='og:title'),
    lambda soup: _meta_content(soup, name='twitter:title'),
    lambda soup: soup.title.get_text(strip=True) if soup.title else None,
]

AUTHOR_LOOKUPS = [
    lambda soup: _meta_content(soup, name='author'),
    lambda soup: _meta_content(soup, property='article:author'),
    lambda soup: _tag_text(soup, ['span', 'div', 'p'], AUTHOR_CLASS),
]

DATE_LOOKUPS = [
    lambda soup: _meta_content(soup, property='article:published_time'),
    lambda soup: _meta_content(soup, name='publication-date'),
    lambda soup: _time_datetime(soup),
    lambda soup: _tag_text(soup, ['span', 'div'], DATE_CLASS),
]


def format_date(date_str: Optional[str]) -> Optional[str]:
    """
    Render an ISO date as 'Month D, YYYY'; anything else is returned as-is.

    Examples:
        >>> format_date("2024-12-15T10:00:00Z")
        'December 15, 2024'

        >>> format_date("Last Tuesday")
        'Last Tuesday'
    """
    if not date_str:
        return None
    date_str = date_str.strip()
    try:
        parsed = datetime.fromisoformat(date_str.replace('Z', '+00:00'))
    except ValueError:
        return date_str
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def clean_author(author: Optional[str]) -> Optional[str]:
    if not author:
        return None
    author = decode_entities(author)
    author = re.sub(r'^by\s+', '', author, flags=re.I).strip()
    return author or None


def extract_metadata(url: str, html: Optional[str]) -> ArticleMetadata:
    """
    Extract title, author and published date from fetched HTML.

    With no HTML (all fetch strategies failed) the title falls back to the
    hostname and the other fields stay empty.
    """
    fallback_title = hostname_title(url)
    if not html:
        return ArticleMetadata(title=fallback_title)

    soup = BeautifulSoup(html, 'html.parser')

    title = _first_match(soup, TITLE_LOOKUPS, accept=lambda value: not is_placeholder_title(value))
    author = _first_match(soup, AUTHOR_LOOKUPS, accept=_is_short_field)
    published = _first_match(soup, DATE_LOOKUPS, accept=_is_short_field)

    return ArticleMetadata(
        title=clean_title(title) or fallback_title,
        author=clean_author(author),
        published_date=format_date(published),
    )


def is_social_url(url: str) -> bool:
    """True for X/Twitter post URLs, which get the oEmbed treatment."""
    host = (urlparse(url).hostname or '').lower()
    return host in SOCIAL_HOSTS


def parse_oembed_html(embed_html: str) -> str:
    """Pull the post text out of the oEmbed blockquote, keeping line breaks."""
    if not embed_html:
        return ''
    soup = BeautifulSoup(embed_html, 'html.parser')
    paragraph = soup.find('p')
    if not paragraph:
        return ''

    for br in paragraph.find_all('br'):
        br.replace_with('\n')

    lines = [line.strip() for line in paragraph.get_text().split('\n')]
    return '\n'.join(line for line in lines if line)


def fetch_social_post(url: str, settings: Settings) -> Optional[SocialPost]:
    """Fetch a post via the platform's public oEmbed endpoint."""
    try:
        response = requests.get(
            OEMBED_ENDPOINT,
            params={'url': url, 'omit_script': 'true'},
            timeout=settings.oembed_timeout
        )
        if not response.ok:
            print(f"oEmbed failed ({response.status_code}) for: {url}")
            return None
        data = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        print(f"Error fetching post via oEmbed: {e}")
        return None

    author_url = data.get('author_url') or ''
    return SocialPost(
        text=parse_oembed_html(data.get('html', '')),
        author_name=data.get('author_name') or None,
        author_handle=author_url.rstrip('/').split('/')[-1] or None,
    )


def social_post_title(url: str, post: Optional[SocialPost]) -> str:
    """'Post by NAME on X', falling back to the @handle in the URL path."""
    if post and post.author_name:
        return f"Post by {post.author_name} on X"

    path_parts = [part for part in urlparse(url).path.split('/') if part]
    if path_parts:
        return f"Post by @{path_parts[0]} on X"
    return 'Post on X'
