"""
AI summary generation with graceful degradation.

Summaries are a value-add, never a hard dependency of delivery: any provider
failure becomes SummaryBasis.UNAVAILABLE and the email still goes out.
"""

import re
from typing import List, Optional

from .models import SummaryBasis, SummaryLength, SummaryResult
from .prompts import ARTICLE_MAX_TOKENS, ARTICLE_PROMPTS, TITLE_ONLY_MAX_TOKENS, TITLE_ONLY_PROMPTS
from .providers import TextGenerationProvider
from .text import has_usable_text

# Leading "•", "-", "*" or "1." / "1)" markers
BULLET_MARKER = re.compile(r'^(?:•\s*|[-*]\s+|\d+[.)]\s+)')


def parse_bullets(text: Optional[str]) -> List[str]:
    """
    Split model output into bullets, one per non-blank line.

    Examples:
        >>> parse_bullets("- First\\n\\n• Second\\n3. Third")
        ['First', 'Second', 'Third']
    """
    if not text:
        return []

    bullets = []
    for line in text.split('\n'):
        line = BULLET_MARKER.sub('', line.strip()).strip()
        if line:
            bullets.append(line)
    return bullets


def build_prompt(title: str, url: str, text: Optional[str], length: SummaryLength):
    """Pick the prompt variant. Returns (prompt, max_tokens, basis)."""
    if has_usable_text(text):
        prompt = ARTICLE_PROMPTS[length].format(title=title, url=url, content=text)
        return prompt, ARTICLE_MAX_TOKENS, SummaryBasis.FULL_TEXT

    prompt = TITLE_ONLY_PROMPTS[length].format(title=title, url=url)
    return prompt, TITLE_ONLY_MAX_TOKENS, SummaryBasis.TITLE_ONLY


def summarize(title: str, url: str, text: Optional[str], length: SummaryLength,
              provider: Optional[TextGenerationProvider]) -> SummaryResult:
    """
    Generate summary bullets for a captured page.

    Args:
        title: Display title of the page
        url: The captured URL
        text: Normalized page text, or None when the fetch failed
        length: SHORT (3 bullets) or DETAILED (6 bullets)
        provider: Text generation backend; None means no credential

    Returns:
        SummaryResult tagged FULL_TEXT, TITLE_ONLY or UNAVAILABLE
    """
    if provider is None:
        return SummaryResult.unavailable('No text generation provider configured')

    prompt, max_tokens, basis = build_prompt(title, url, text, length)
    if basis == SummaryBasis.TITLE_ONLY:
        print(f"Content too short ({len(text or '')} chars), using title-only summary")

    try:
        output = provider.generate(prompt, max_tokens)
    except Exception as e:
        print(f"Summary generation error: {e}")
        return SummaryResult.unavailable(str(e))

    bullets = parse_bullets(output)
    if not bullets:
        return SummaryResult.unavailable('Empty response from text generation provider')

    return SummaryResult(basis=basis, bullets=tuple(bullets))
