"""
Request-scoped value types for the Brief capture pipeline.

Nothing here is persisted. Every object is created and consumed inside a
single invocation of the HTTP function.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class SummaryLength(Enum):
    SHORT = 'short'
    DETAILED = 'detailed'


class FetchStrategy(Enum):
    DIRECT = 'direct'
    ARCHIVE_MIRROR = 'archive_mirror'
    BYPASS_PROXY = 'bypass_proxy'
    ALTERNATE_AGENT = 'alternate_agent'
    NONE = 'none'


class SummaryBasis(Enum):
    FULL_TEXT = 'full_text'
    TITLE_ONLY = 'title_only'
    UNAVAILABLE = 'unavailable'


@dataclass(frozen=True)
class CaptureRequest:
    url: str
    email: str
    title: Optional[str] = None
    site_hint: Optional[str] = None
    note: Optional[str] = None
    summary_enabled: bool = True
    summary_length: SummaryLength = SummaryLength.SHORT


@dataclass(frozen=True)
class FetchResult:
    html: str = ''
    succeeded: bool = False
    strategy: FetchStrategy = FetchStrategy.NONE


@dataclass(frozen=True)
class ArticleMetadata:
    title: str
    author: Optional[str] = None
    published_date: Optional[str] = None


@dataclass(frozen=True)
class SocialPost:
    text: str
    author_name: Optional[str] = None
    author_handle: Optional[str] = None


@dataclass(frozen=True)
class SummaryResult:
    basis: SummaryBasis
    bullets: Tuple[str, ...] = field(default_factory=tuple)
    reason: Optional[str] = None

    @classmethod
    def unavailable(cls, reason: str) -> 'SummaryResult':
        return cls(basis=SummaryBasis.UNAVAILABLE, bullets=(), reason=reason)


@dataclass(frozen=True)
class OutboundEmail:
    subject: str
    html_body: str
    recipient: str


class InvalidInput(ValueError):
    """Request body failed validation. Terminal, reported as HTTP 400."""

    def __init__(self, message: str, fields: Tuple[str, ...] = ()):
        super().__init__(message)
        self.message = message
        self.fields = fields


class DeliveryError(RuntimeError):
    """The email provider did not accept the message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
