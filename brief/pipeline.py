"""
The capture pipeline: fetch → extract → summarize → compose → deliver.

Every step runs sequentially inside one request. Fetch and summary failures
degrade the email; only a delivery failure aborts the request.
"""

from typing import Optional

from .composer import build_email, compose_email_html
from .config import Settings
from .fetcher import fetch_article
from .metadata import extract_metadata, fetch_social_post, is_social_url, social_post_title
from .models import ArticleMetadata, CaptureRequest, OutboundEmail
from .providers import EmailProvider, TextGenerationProvider
from .summarizer import summarize
from .text import normalize_text
from .title_utils import hostname_title


def run_capture(capture: CaptureRequest, settings: Settings,
                text_provider: Optional[TextGenerationProvider],
                email_provider: EmailProvider) -> OutboundEmail:
    """
    Run one capture end to end and dispatch the resulting email.

    Returns:
        The OutboundEmail that was sent.

    Raises:
        DeliveryError: if the email provider rejects the send.
    """
    site = capture.site_hint or hostname_title(capture.url)
    title = None
    social_post = None
    summary = None

    if is_social_url(capture.url):
        social_post = fetch_social_post(capture.url, settings)
        site = 'X'
        title = social_post_title(capture.url, social_post)

    if social_post and social_post.text:
        # The post itself is the content, so no page fetch and no AI summary
        metadata = ArticleMetadata(title=title)
    else:
        # Articles, and posts whose oEmbed lookup came back empty
        fetched = fetch_article(capture.url, settings)
        metadata = extract_metadata(capture.url, fetched.html if fetched.succeeded else None)
        title = title or capture.title or metadata.title

        if capture.summary_enabled:
            text = normalize_text(fetched.html) if fetched.succeeded else None
            summary = summarize(title, capture.url, text, capture.summary_length, text_provider)
            print(f"Summary basis: {summary.basis.value} ({len(summary.bullets)} bullets)")

    html_body = compose_email_html(
        title=title,
        url=capture.url,
        metadata=metadata,
        note=capture.note,
        summary=summary,
        social_post=social_post,
    )
    email = build_email(capture.email, site, title, html_body)

    email_provider.send(email)
    return email
