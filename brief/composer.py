"""
HTML email composition.

Everything here is a pure function of its arguments: same inputs, same
bytes out. No timestamps, no lookups.
"""

import re
from html import escape
from typing import Optional

from .models import ArticleMetadata, OutboundEmail, SocialPost, SummaryBasis, SummaryResult
from .title_utils import website_name

SUMMARY_HEADERS = {
    SummaryBasis.FULL_TEXT: 'Summary (AI-generated):',
    SummaryBasis.TITLE_ONLY: 'Summary (AI-generated from title - full article not accessible):',
    SummaryBasis.UNAVAILABLE: 'Summary:',
}

UNAVAILABLE_NOTICE = 'Summary could not be generated for this article.'
FOOTER_TEXT = 'Sent via Brief'


def inline_markdown(text: str) -> str:
    """Convert **bold**, *italic* and `code` in already-escaped text."""
    text = re.sub(r'\*\*(.+?)\*\*', r'<strong>\1</strong>', text)
    text = re.sub(r'\*(\S(?:.*?\S)?)\*', r'<em>\1</em>', text)
    return re.sub(r'`(.+?)`', r'<code>\1</code>', text)


def _summary_block(summary: SummaryResult) -> str:
    header = escape(SUMMARY_HEADERS[summary.basis])

    if summary.basis == SummaryBasis.UNAVAILABLE or not summary.bullets:
        return f"""
  <div style="margin: 20px 0;">
    <h2 style="font-size: 18px; font-weight: bold; color: #000; margin-bottom: 12px;">{header}</h2>
    <p style="color: #666; font-style: italic;">{UNAVAILABLE_NOTICE}</p>
  </div>"""

    items = ''.join(
        f'<li style="margin-bottom: 6px;">{inline_markdown(escape(bullet))}</li>'
        for bullet in summary.bullets
    )
    return f"""
  <div style="margin: 20px 0;">
    <h2 style="font-size: 18px; font-weight: bold; color: #000; margin-bottom: 12px;">{header}</h2>
    <ul style="margin: 0; padding-left: 20px;">{items}</ul>
  </div>"""


def _social_block(post: SocialPost) -> str:
    body = '<br>'.join(escape(line) for line in post.text.split('\n') if line.strip())

    attribution = ''
    if post.author_name:
        handle = f' (@{escape(post.author_handle)})' if post.author_handle else ''
        attribution = (
            f'<p style="margin-top: 12px; color: #657786; font-size: 14px;">'
            f'— {escape(post.author_name)}{handle}</p>'
        )

    return f"""
  <div style="margin: 20px 0; padding: 16px 20px; background: #f7f9fa; border-left: 4px solid #1da1f2; border-radius: 4px;">
    <p style="font-size: 16px; line-height: 1.5; color: #14171a; margin: 0;">{body}</p>
    {attribution}
  </div>"""


def compose_email_html(title: str, url: str, metadata: Optional[ArticleMetadata], note: Optional[str],
                       summary: Optional[SummaryResult], social_post: Optional[SocialPost] = None) -> str:
    """
    Render the fixed email layout.

    Blocks are omitted when their input is absent: byline/date without
    metadata, note without a user note, summary when summary is None. A
    social post replaces the summary block with a quoted post.
    """
    byline = ''
    if metadata and metadata.published_date:
        byline += f'<div style="color: #666; font-style: italic; margin-bottom: 8px;">{escape(metadata.published_date)}</div>'
    if metadata and metadata.author:
        byline += f'<div style="color: #666; font-style: italic; margin-bottom: 8px;">{escape(metadata.author)}</div>'

    note_block = ''
    if note:
        note_block = f"""
  <div style="border-left: 4px solid #f59e0b; padding: 12px 16px; margin: 20px 0; background: #fffbf0;">
    <strong style="color: #000;">Note:</strong> {escape(note)}
  </div>"""

    body_block = ''
    if social_post and social_post.text:
        body_block = _social_block(social_post)
    elif summary is not None:
        body_block = _summary_block(summary)

    safe_url = escape(url)
    return f"""<div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif; max-width: 600px; margin: 0 auto; line-height: 1.6;">
  <h1 style="font-size: 24px; font-weight: bold; margin: 20px 0; color: #000;">{escape(title)}</h1>
  <div style="margin: 20px 0;">
    {byline}
    <a href="{safe_url}" style="color: #0066cc; text-decoration: none;">{safe_url}</a>
  </div>{note_block}{body_block}
  <div style="color: #999; font-size: 14px; margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e5e5;">
    {FOOTER_TEXT}
  </div>
</div>"""


def build_subject(site: Optional[str], title: str) -> str:
    """'Pretty Site: Title', with line breaks in the title collapsed."""
    clean = ' '.join(title.split())
    return f"{website_name(site)}: {clean}"


def build_email(recipient: str, site: Optional[str], title: str, html_body: str) -> OutboundEmail:
    return OutboundEmail(
        subject=build_subject(site, title),
        html_body=html_body,
        recipient=recipient,
    )
