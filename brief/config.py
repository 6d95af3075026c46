"""
Runtime configuration for the Brief mailer.

Settings are read from the process environment once, when the Cloud Function
module is imported, and passed explicitly into the pipeline.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_GEMINI_MODEL = 'gemini-2.0-flash'
DEFAULT_FROM_ADDRESS = 'Brief <brief@send-brief.com>'
DEFAULT_ARCHIVE_URL = 'https://archive.today'
DEFAULT_BYPASS_PROXY_URL = 'https://12ft.io'


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    resend_api_key: Optional[str] = None
    from_address: str = DEFAULT_FROM_ADDRESS
    archive_base_url: str = DEFAULT_ARCHIVE_URL
    bypass_proxy_base_url: str = DEFAULT_BYPASS_PROXY_URL
    fetch_timeout: float = 30
    oembed_timeout: float = 10
    email_timeout: float = 15


def _float_env(env, name: str, default: float) -> float:
    value = env.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        print(f"Ignoring invalid {name}={value!r}, using {default}")
        return default


def load_settings(environ=None) -> Settings:
    """Build Settings from environment variables (or a mapping, for tests)."""
    env = os.environ if environ is None else environ
    return Settings(
        gemini_api_key=env.get('GEMINI_API_KEY') or None,
        gemini_model=env.get('GEMINI_MODEL') or DEFAULT_GEMINI_MODEL,
        resend_api_key=env.get('RESEND_API_KEY') or None,
        from_address=env.get('BRIEF_FROM_ADDRESS') or DEFAULT_FROM_ADDRESS,
        archive_base_url=(env.get('BRIEF_ARCHIVE_URL') or DEFAULT_ARCHIVE_URL).rstrip('/'),
        bypass_proxy_base_url=(env.get('BRIEF_BYPASS_PROXY_URL') or DEFAULT_BYPASS_PROXY_URL).rstrip('/'),
        fetch_timeout=_float_env(env, 'BRIEF_FETCH_TIMEOUT', 30),
    )
