"""
Integration tests for the fetch strategy chain with mocked HTTP responses.

Uses the `responses` library to mock requests.
"""

import re

import requests
import responses

from brief.fetcher import (
    CRAWLER_USER_AGENT,
    fetch_archive_mirror,
    fetch_article,
    fetch_bypass_proxy,
    has_paywall_indicators,
)
from brief.models import FetchStrategy

ARTICLE_URL = "https://example.com/article"
ARCHIVE_PATTERN = re.compile(r'https://archive\.today/newest/.*')
PROXY_PATTERN = re.compile(r'https://12ft\.io/.*')
LONG_PAGE = "<html><body><p>" + ("Plenty of readable article text. " * 60) + "</p></body></html>"


class TestHasPaywallIndicators:
    """Tests for has_paywall_indicators()"""

    def test_detects_subscribe(self, paywalled_html):
        assert has_paywall_indicators(paywalled_html) is True

    def test_case_insensitive(self):
        assert has_paywall_indicators("<p>ACCESS DENIED</p>") is True

    def test_clean_page(self, sample_article_html):
        assert has_paywall_indicators(sample_article_html) is False

    def test_empty(self):
        assert has_paywall_indicators("") is False


class TestFetchArticle:
    """Tests for fetch_article() strategy ordering."""

    @responses.activate
    def test_direct_success(self, settings, sample_article_html):
        responses.add(responses.GET, ARTICLE_URL, body=sample_article_html, status=200)

        result = fetch_article(ARTICLE_URL, settings)

        assert result.succeeded is True
        assert result.strategy == FetchStrategy.DIRECT
        assert result.html == sample_article_html
        assert len(responses.calls) == 1

    @responses.activate
    def test_paywall_falls_through_to_archive(self, settings, paywalled_html):
        responses.add(responses.GET, ARTICLE_URL, body=paywalled_html, status=200)
        responses.add(responses.GET, ARCHIVE_PATTERN, status=302,
                      headers={'Location': 'https://archive.ph/abc123'})
        responses.add(responses.GET, 'https://archive.ph/abc123', body=LONG_PAGE, status=200)

        result = fetch_article(ARTICLE_URL, settings)

        assert result.succeeded is True
        assert result.strategy == FetchStrategy.ARCHIVE_MIRROR
        assert result.html == LONG_PAGE
        assert responses.calls[0].request.url == ARTICLE_URL
        assert responses.calls[1].request.url.startswith('https://archive.today/newest/')
        assert responses.calls[2].request.url == 'https://archive.ph/abc123'

    @responses.activate
    def test_proxy_used_when_archive_has_no_snapshot(self, settings):
        responses.add(responses.GET, ARTICLE_URL, status=403)
        responses.add(responses.GET, ARCHIVE_PATTERN, status=404)
        responses.add(responses.GET, PROXY_PATTERN, body=LONG_PAGE, status=200)

        result = fetch_article(ARTICLE_URL, settings)

        assert result.strategy == FetchStrategy.BYPASS_PROXY
        assert responses.calls[2].request.url == f"https://12ft.io/{ARTICLE_URL}"

    @responses.activate
    def test_crawler_identity_is_last_resort(self, settings):
        responses.add(responses.GET, ARTICLE_URL, status=403)
        responses.add(responses.GET, ARCHIVE_PATTERN, status=404)
        responses.add(responses.GET, PROXY_PATTERN, body="12ft has been disabled for this site", status=200)
        responses.add(responses.GET, ARTICLE_URL, body=LONG_PAGE, status=200)

        result = fetch_article(ARTICLE_URL, settings)

        assert result.succeeded is True
        assert result.strategy == FetchStrategy.ALTERNATE_AGENT
        assert len(responses.calls) == 4
        assert responses.calls[3].request.headers['User-Agent'] == CRAWLER_USER_AGENT

    @responses.activate
    def test_all_strategies_fail(self, settings, paywalled_html):
        responses.add(responses.GET, ARTICLE_URL, body=paywalled_html, status=200)
        responses.add(responses.GET, ARCHIVE_PATTERN, status=404)
        responses.add(responses.GET, PROXY_PATTERN, status=500)

        result = fetch_article(ARTICLE_URL, settings)

        assert result.succeeded is False
        assert result.strategy == FetchStrategy.NONE
        assert result.html == ''
        # each strategy attempted exactly once
        assert len(responses.calls) == 4

    @responses.activate
    def test_network_errors_count_as_strategy_failure(self, settings):
        responses.add(responses.GET, ARTICLE_URL, body=requests.exceptions.ConnectionError('refused'))
        responses.add(responses.GET, ARCHIVE_PATTERN, body=requests.exceptions.Timeout('slow'))
        responses.add(responses.GET, PROXY_PATTERN, body=LONG_PAGE, status=200)

        result = fetch_article(ARTICLE_URL, settings)

        assert result.strategy == FetchStrategy.BYPASS_PROXY

    def test_custom_strategy_list(self, settings):
        calls = []

        def first(url, settings):
            calls.append('first')
            return None

        def second(url, settings):
            calls.append('second')
            return '<html>ok</html>'

        result = fetch_article(ARTICLE_URL, settings, strategies=[
            (FetchStrategy.DIRECT, first),
            (FetchStrategy.ALTERNATE_AGENT, second),
        ])

        assert calls == ['first', 'second']
        assert result.strategy == FetchStrategy.ALTERNATE_AGENT


class TestFetchArchiveMirror:
    """Tests for fetch_archive_mirror()"""

    @responses.activate
    def test_url_is_percent_encoded(self, settings):
        responses.add(responses.GET, ARCHIVE_PATTERN, status=404)

        assert fetch_archive_mirror("https://example.com/a?b=1", settings) is None
        assert 'https%3A%2F%2Fexample.com%2Fa%3Fb%3D1' in responses.calls[0].request.url

    @responses.activate
    def test_relative_redirect_resolved_against_archive(self, settings):
        responses.add(responses.GET, ARCHIVE_PATTERN, status=302, headers={'Location': '/abc123'})
        responses.add(responses.GET, 'https://archive.today/abc123', body=LONG_PAGE, status=200)

        assert fetch_archive_mirror(ARTICLE_URL, settings) == LONG_PAGE
        assert responses.calls[1].request.url == 'https://archive.today/abc123'

    @responses.activate
    def test_redirect_without_location(self, settings):
        responses.add(responses.GET, ARCHIVE_PATTERN, status=302)
        assert fetch_archive_mirror(ARTICLE_URL, settings) is None


class TestFetchBypassProxy:
    """Tests for fetch_bypass_proxy()"""

    @responses.activate
    def test_short_body_rejected(self, settings):
        responses.add(responses.GET, PROXY_PATTERN, body="<html>tiny</html>", status=200)
        assert fetch_bypass_proxy(ARTICLE_URL, settings) is None

    @responses.activate
    def test_not_available_marker_rejected(self, settings):
        body = "<html>This page is not available" + (" padding" * 200) + "</html>"
        responses.add(responses.GET, PROXY_PATTERN, body=body, status=200)
        assert fetch_bypass_proxy(ARTICLE_URL, settings) is None
