from .models import SummaryLength

SHORT_ARTICLE_PROMPT = """
You are a professional news summarizer. Create a concise 3-bullet summary of this article for busy readers.

RULES:
- Read and understand the full article before summarizing
- Capture only material facts from the text, no speculation or outside sources
- Use neutral, factual language without editorializing adjectives
- Use present tense for ongoing events, past tense for completed events
- Each bullet should be self-contained and understandable without the full article

STRUCTURE:
1. Main event – Who, what, when, why it matters
2. Key actions or players – Major steps taken, partnerships, political context
3. Implications – Potential impact, stakes, or controversy

FORMAT:
- 3 bullets total, one per line
- 1-2 sentences each
- 20-35 words per bullet
- Use "–" to separate the topic from details (e.g., "Topic – Details here")
- Plain text only. No markdown, no preamble before the bullets.

Article Title: {title}
Article URL: {url}
Content: {content}
""".strip()

DETAILED_ARTICLE_PROMPT = """
You are a professional news summarizer. Create a detailed 6-bullet summary of this article for informed readers who want comprehensive understanding.

RULES:
- Read and understand the full article before summarizing
- Capture only material facts from the text, no speculation or outside sources
- Use neutral, factual language without editorializing adjectives
- Condense multiple related sentences into single concise bullets where possible
- Use present tense for ongoing events, past tense for completed events
- Each bullet should be self-contained and focus on one theme

STRUCTURE:
1. Main event and context – Introduce central figure/event with relevant background
2. Key background facts – Past actions or milestones leading to the event
3. Current actions – Deals, alliances or steps described in the article
4. Political/legal environment – Reactions from officials, regulators or courts
5. Stakes and potential outcomes – What could happen next
6. Industry/competitive impact – Effect on rivals, markets, or broader trends

FORMAT:
- 6 bullets total, one per line
- 2-3 sentences each
- 30-50 words per bullet
- Use "–" to separate the topic from details (e.g., "Topic – Details here")
- Plain text only. No markdown, no preamble before the bullets.

Article Title: {title}
Article URL: {url}
Content: {content}
""".strip()

SHORT_TITLE_ONLY_PROMPT = """
You are a professional news summarizer. The full article could not be accessed, so create a 3-bullet summary based only on the title and URL.

RULES:
- Base the summary only on the title and URL context clues
- Use neutral, factual language without editorializing adjectives
- Hedge: make clear these points are inferred from limited information
- Each bullet should be self-contained

STRUCTURE:
1. Main event – What the article likely covers based on the title
2. Key context – Likely players or background suggested by the title/URL
3. Likely implications – What this type of story typically involves

FORMAT:
- 3 bullets total, one per line
- 1-2 sentences each
- 20-35 words per bullet
- Use "–" to separate the topic from details
- Plain text only. No markdown, no preamble before the bullets.

Title: {title}
URL: {url}
""".strip()

DETAILED_TITLE_ONLY_PROMPT = """
You are a professional news summarizer. The full article could not be accessed, so create a 6-bullet summary based only on the title and URL.

RULES:
- Base the summary only on the title and URL context clues
- Use neutral, factual language without editorializing adjectives
- Hedge: make clear these points are inferred from limited information
- Each bullet should focus on one theme

STRUCTURE:
1. Main event and context – What the article likely covers
2. Key background – Relevant background suggested by the title/URL
3. Likely current actions – What actions the story probably describes
4. Political/legal context – Government or regulatory aspects suggested
5. Potential outcomes – What might happen based on the title
6. Industry impact – How this might affect the sector or market

FORMAT:
- 6 bullets total, one per line
- 2-3 sentences each
- 30-50 words per bullet
- Use "–" to separate the topic from details
- Plain text only. No markdown, no preamble before the bullets.

Title: {title}
URL: {url}
""".strip()

ARTICLE_PROMPTS = {
    SummaryLength.SHORT: SHORT_ARTICLE_PROMPT,
    SummaryLength.DETAILED: DETAILED_ARTICLE_PROMPT,
}

TITLE_ONLY_PROMPTS = {
    SummaryLength.SHORT: SHORT_TITLE_ONLY_PROMPT,
    SummaryLength.DETAILED: DETAILED_TITLE_ONLY_PROMPT,
}

# max_output_tokens per prompt family
ARTICLE_MAX_TOKENS = 500
TITLE_ONLY_MAX_TOKENS = 300
