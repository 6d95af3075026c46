"""
Source fetcher with layered fallbacks for paywalled and bot-blocked pages.

Strategies run in a fixed order and each is attempted exactly once:
1. Direct fetch with a browser user-agent
2. Archive mirror snapshot (one redirect followed)
3. Paywall-bypass relay
4. Direct fetch again with a search-crawler identity

The first strategy returning HTML wins. Network errors count as an ordinary
strategy failure; exhausting all four puts the pipeline in degraded mode.
"""

from typing import Callable, List, Optional, Tuple
from urllib.parse import quote, urljoin

import requests

from .config import Settings
from .models import FetchResult, FetchStrategy

BROWSER_USER_AGENT = 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
CRAWLER_USER_AGENT = 'Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)'

BROWSER_HEADERS = {
    'User-Agent': BROWSER_USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
}

CRAWLER_HEADERS = {
    'User-Agent': CRAWLER_USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
    'Cache-Control': 'no-cache',
}

# Case-insensitive substrings that mark a paywall or block page
PAYWALL_INDICATORS = [
    'paywall',
    'subscribe',
    'subscription required',
    'premium content',
    'sign in',
    'login required',
    'access denied',
    'error 520',
    'cloudflare',
    'blocked',
    'forbidden',
    'subscriber exclusive',
    'become a subscriber',
    'this article is for subscribers',
]

# The bypass relay serves these on its own error/placeholder pages
PROXY_ERROR_MARKERS = [
    '12ft has been disabled',
    'not available',
]

REDIRECT_STATUSES = (301, 302, 303, 307, 308)

# Relay and crawler responses shorter than this are error stubs
MIN_BODY_LENGTH = 1000


def has_paywall_indicators(html: str) -> bool:
    """True if the page body looks like a paywall, login wall or block page."""
    if not html:
        return False
    lower_html = html.lower()
    return any(indicator in lower_html for indicator in PAYWALL_INDICATORS)


def fetch_direct(url: str, settings: Settings) -> Optional[str]:
    response = requests.get(url, headers=BROWSER_HEADERS, timeout=settings.fetch_timeout, allow_redirects=True)
    if not response.ok:
        print(f"Direct fetch failed ({response.status_code}): {url}")
        return None

    html = response.text
    if has_paywall_indicators(html):
        print(f"Paywall detected in direct fetch: {url}")
        return None
    return html


def fetch_archive_mirror(url: str, settings: Settings) -> Optional[str]:
    archive_url = f"{settings.archive_base_url}/newest/{quote(url, safe='')}"
    headers = {'User-Agent': BROWSER_USER_AGENT}

    response = requests.get(archive_url, headers=headers, timeout=settings.fetch_timeout, allow_redirects=False)
    location = response.headers.get('Location')
    if response.status_code not in REDIRECT_STATUSES or not location:
        print(f"Archive mirror has no snapshot ({response.status_code}): {url}")
        return None

    # Relative redirects resolve against the archive host
    snapshot_url = urljoin(archive_url, location)
    snapshot = requests.get(snapshot_url, headers=headers, timeout=settings.fetch_timeout)
    if not snapshot.ok:
        print(f"Archive snapshot fetch failed ({snapshot.status_code}): {snapshot_url}")
        return None
    return snapshot.text


def fetch_bypass_proxy(url: str, settings: Settings) -> Optional[str]:
    proxy_url = f"{settings.bypass_proxy_base_url}/{url}"
    response = requests.get(proxy_url, headers={'User-Agent': BROWSER_USER_AGENT}, timeout=settings.fetch_timeout)
    if not response.ok:
        print(f"Bypass proxy failed ({response.status_code}): {url}")
        return None

    html = response.text
    lower_html = html.lower()
    if any(marker in lower_html for marker in PROXY_ERROR_MARKERS) or len(html) < MIN_BODY_LENGTH:
        print(f"Bypass proxy returned its error page: {url}")
        return None
    return html


def fetch_alternate_agent(url: str, settings: Settings) -> Optional[str]:
    response = requests.get(url, headers=CRAWLER_HEADERS, timeout=settings.fetch_timeout, allow_redirects=True)
    if not response.ok:
        print(f"Crawler fetch failed ({response.status_code}): {url}")
        return None

    html = response.text
    if has_paywall_indicators(html) or len(html) < MIN_BODY_LENGTH:
        print(f"Crawler fetch still blocked: {url}")
        return None
    return html


FETCH_STRATEGIES: List[Tuple[FetchStrategy, Callable[[str, Settings], Optional[str]]]] = [
    (FetchStrategy.DIRECT, fetch_direct),
    (FetchStrategy.ARCHIVE_MIRROR, fetch_archive_mirror),
    (FetchStrategy.BYPASS_PROXY, fetch_bypass_proxy),
    (FetchStrategy.ALTERNATE_AGENT, fetch_alternate_agent),
]


def fetch_article(url: str, settings: Settings, strategies=None) -> FetchResult:
    """Run the fetch strategies in order and return the first success."""
    for strategy, fetch in strategies or FETCH_STRATEGIES:
        try:
            html = fetch(url, settings)
        except requests.exceptions.Timeout:
            print(f"{strategy.value} fetch timed out: {url}")
            continue
        except requests.exceptions.RequestException as e:
            print(f"{strategy.value} fetch error: {e}")
            continue

        if html:
            print(f"Fetched {url} via {strategy.value} ({len(html)} chars)")
            return FetchResult(html=html, succeeded=True, strategy=strategy)

    print(f"All fetch strategies failed for {url}")
    return FetchResult(html='', succeeded=False, strategy=FetchStrategy.NONE)
