"""
Brief Mailer Cloud Function

Receives a captured link from the share-sheet and browser clients and emails
it to the user.

Responsibilities:
- Validate the capture (url + email required)
- Fetch the page, falling back through archive/proxy/crawler strategies
- Extract title, author and publish date
- Generate an AI bullet summary (optional, non-fatal)
- Compose the HTML email and send it via Resend

Does NOT:
- Store anything between requests
- Retry failed sends (the client shows a retry action)
- Authenticate callers
"""

import functions_framework
import json
import os
import sys
import traceback

# Add the brief package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from brief.config import load_settings
from brief.models import DeliveryError, InvalidInput
from brief.pipeline import run_capture
from brief.providers import GeminiProvider, ResendProvider
from brief.validation import validate_capture

# Configuration, read once per instance
SETTINGS = load_settings()

CORS_PREFLIGHT_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': '*',
    'Access-Control-Allow-Headers': '*',
    'Access-Control-Max-Age': '3600'
}

RESPONSE_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Content-Type': 'application/json'
}


def build_providers(settings):
    """Text generation (None without a key) and email providers."""
    text_provider = None
    if settings.gemini_api_key:
        text_provider = GeminiProvider(settings.gemini_api_key, settings.gemini_model)

    email_provider = ResendProvider(
        settings.resend_api_key,
        settings.from_address,
        timeout=settings.email_timeout
    )
    return text_provider, email_provider


# Providers are built once per instance, like SETTINGS
TEXT_PROVIDER, EMAIL_PROVIDER = build_providers(SETTINGS)


def handle_request(request, settings, text_provider, email_provider):
    """Process one HTTP request. Returns a (body, status, headers) tuple."""
    if request.method == 'OPTIONS':
        return ('', 204, CORS_PREFLIGHT_HEADERS)

    headers = dict(RESPONSE_HEADERS)

    if request.method != 'POST':
        return (json.dumps({'error': 'Method not allowed'}), 405, headers)

    try:
        request_json = request.get_json(silent=True)
        capture = validate_capture(request_json)

        print(f"Capture received: {capture.url} (summary={capture.summary_enabled}, "
              f"length={capture.summary_length.value})")

        run_capture(capture, settings, text_provider, email_provider)

        return (json.dumps({'success': True}), 200, headers)

    except InvalidInput as e:
        print(f"Invalid capture: {e.message}")
        return (json.dumps({'error': e.message}), 400, headers)

    except DeliveryError as e:
        print(f"Delivery failed: {e.message}")
        return (json.dumps({'error': e.message}), 500, headers)

    except Exception as e:
        error_trace = traceback.format_exc()
        print(f"Error: {str(e)}\n{error_trace}")
        return (json.dumps({'error': str(e)}), 500, headers)


@functions_framework.http
def send_brief(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "url": "https://example.com/article",
        "email": "me@example.com",
        "title": "Optional title from the share sheet",
        "site": "example.com",
        "context": "Optional note",
        "aiSummary": true,
        "summaryLength": "short"
    }
    """
    return handle_request(request, SETTINGS, TEXT_PROVIDER, EMAIL_PROVIDER)
