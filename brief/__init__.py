"""Brief: capture a link, summarize it, email it."""

from .config import Settings, load_settings

from .models import (
    ArticleMetadata,
    CaptureRequest,
    DeliveryError,
    FetchResult,
    FetchStrategy,
    InvalidInput,
    OutboundEmail,
    SocialPost,
    SummaryBasis,
    SummaryLength,
    SummaryResult,
)

from .pipeline import run_capture
from .providers import EmailProvider, GeminiProvider, ResendProvider, TextGenerationProvider
from .validation import validate_capture

__all__ = [
    # Configuration
    'Settings',
    'load_settings',
    # Value types and errors
    'ArticleMetadata',
    'CaptureRequest',
    'DeliveryError',
    'FetchResult',
    'FetchStrategy',
    'InvalidInput',
    'OutboundEmail',
    'SocialPost',
    'SummaryBasis',
    'SummaryLength',
    'SummaryResult',
    # Providers
    'EmailProvider',
    'GeminiProvider',
    'ResendProvider',
    'TextGenerationProvider',
    # Entry points
    'run_capture',
    'validate_capture',
]
