"""Input validation for capture requests."""

import re
from urllib.parse import urlparse

from .models import CaptureRequest, InvalidInput, SummaryLength
from .title_utils import clean_title

# Pragmatic local@domain.tld check, not full RFC 5322
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

FALSE_STRINGS = {'false', '0', 'no', 'off'}
DETAILED_LENGTHS = {'long', 'detailed'}


def is_valid_email(email: str) -> bool:
    return bool(email) and bool(EMAIL_PATTERN.match(email))


def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.hostname)


def _optional_text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_flag(value, default=True) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def _parse_length(value) -> SummaryLength:
    if isinstance(value, str) and value.strip().lower() in DETAILED_LENGTHS:
        return SummaryLength.DETAILED
    return SummaryLength.SHORT


def validate_capture(payload) -> CaptureRequest:
    """
    Turn a raw JSON body into a CaptureRequest.

    Raises:
        InvalidInput: naming the missing or malformed field(s).
    """
    if not isinstance(payload, dict):
        raise InvalidInput('Request body must be a JSON object')

    url = _optional_text(payload.get('url'))
    email = _optional_text(payload.get('email'))

    missing = tuple(name for name, value in (('url', url), ('email', email)) if not value)
    if len(missing) == 1:
        raise InvalidInput(f"Missing required field: {missing[0]}", missing)
    if missing:
        raise InvalidInput(f"Missing required fields: {', '.join(missing)}", missing)

    if not is_valid_url(url):
        raise InvalidInput('Invalid URL provided', ('url',))

    if not is_valid_email(email):
        raise InvalidInput('Invalid email address format', ('email',))

    note = payload.get('context')
    if note is None:
        note = payload.get('note')

    return CaptureRequest(
        url=url,
        email=email,
        title=clean_title(_optional_text(payload.get('title'))),
        site_hint=_optional_text(payload.get('site')),
        note=_optional_text(note),
        summary_enabled=_parse_flag(payload.get('aiSummary')),
        summary_length=_parse_length(payload.get('summaryLength')),
    )
