"""
Shared pytest fixtures for Brief Mailer tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path

from brief.config import Settings
from brief.models import DeliveryError
from brief.providers import EmailProvider, TextGenerationProvider

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module (its directory name has a hyphen)
_brief_mailer_module = _load_module_from_path(
    'brief_mailer_main',
    PROJECT_ROOT / 'brief-mailer' / 'main.py'
)


# ============================================================================
# Fakes
# ============================================================================

class FakeTextProvider(TextGenerationProvider):
    """Records prompts; returns canned output or raises."""

    def __init__(self, output="Topic – First point\nTopic – Second point\nTopic – Third point", error=None):
        self.output = output
        self.error = error
        self.calls = []

    def generate(self, prompt, max_output_tokens):
        self.calls.append({'prompt': prompt, 'max_output_tokens': max_output_tokens})
        if self.error:
            raise self.error
        return self.output


class FakeEmailProvider(EmailProvider):
    """Records sent emails; optionally rejects them."""

    def __init__(self, error_message=None):
        self.error_message = error_message
        self.sent = []

    def send(self, email):
        self.sent.append(email)
        if self.error_message:
            raise DeliveryError(self.error_message, status_code=422)
        return 'email_123'


# ============================================================================
# Cloud Function Fixtures
# ============================================================================

@pytest.fixture
def brief_mailer_module():
    """The loaded brief-mailer main module."""
    return _brief_mailer_module


@pytest.fixture
def handle_request():
    """Returns handle_request function from brief-mailer."""
    return _brief_mailer_module.handle_request


@pytest.fixture
def send_brief():
    """Returns main entry point from brief-mailer."""
    return _brief_mailer_module.send_brief


@pytest.fixture
def settings():
    """Settings with test credentials and default endpoints."""
    return Settings(
        gemini_api_key='test-gemini-key',
        resend_api_key='test-resend-key',
        from_address='Brief <brief@test.example>',
    )


@pytest.fixture
def text_provider():
    return FakeTextProvider()


@pytest.fixture
def email_provider():
    return FakeEmailProvider()


@pytest.fixture
def fake_text_provider_class():
    return FakeTextProvider


@pytest.fixture
def fake_email_provider_class():
    return FakeEmailProvider


# ============================================================================
# Sample pages
# ============================================================================

ARTICLE_BODY = (
    "The city council voted on Tuesday to approve a new transit plan that adds three bus lines "
    "and extends light rail service to the airport. Officials said construction would begin next "
    "spring and finish within four years. Opponents argued the budget estimate was too optimistic "
    "and asked for an independent review before any contracts are signed."
)


@pytest.fixture
def article_body():
    return ARTICLE_BODY


@pytest.fixture
def sample_article_html():
    """Raw HTML of a sample news article."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>Council Approves Transit Plan - The New York Times</title>
        <meta property="og:title" content="Council Approves Transit Plan">
        <meta name="author" content="Jane Reporter">
        <meta property="article:published_time" content="2024-12-15T10:00:00Z">
        <script>var tracking = "should not appear";</script>
        <style>body {{ color: red; }}</style>
    </head>
    <body>
        <article>
            <h1>Council Approves Transit Plan</h1>
            <p>{ARTICLE_BODY}</p>
            <p>{ARTICLE_BODY}</p>
            <p>{ARTICLE_BODY}</p>
        </article>
    </body>
    </html>
    """


@pytest.fixture
def paywalled_html():
    """A page that trips the paywall heuristic."""
    return """
    <html><head><title>Big Story</title></head>
    <body><p>To continue reading, please subscribe.</p></body></html>
    """


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest
