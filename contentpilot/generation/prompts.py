"""
Prompt templates for content generation and repurposing.

Builds the (system, user) prompt pair sent to the AI gateway. The system
prompt is one constant for every request; the user prompt is chosen by
request type and, for ``generate``, by content type.

The topic is embedded verbatim. Unknown content types fall back to the
video template; the fallback is logged and counted but never reported to
the caller.

Usage:
    from contentpilot.generation.prompts import build_prompts, RequestType

    prompts = build_prompts("AI resume tips", RequestType.GENERATE, "blog")
    prompts.system, prompts.user
"""

from enum import Enum
from typing import NamedTuple, Optional, Union

import structlog

from contentpilot.monitoring.metrics import record_template_fallback

logger = structlog.get_logger(__name__)


# =============================================================================
# Enums
# =============================================================================


class RequestType(str, Enum):
    """What the caller wants from the model."""
    GENERATE = "generate"
    REPURPOSE = "repurpose"


class ContentType(str, Enum):
    """Long-form formats available for ``generate`` requests."""
    VIDEO = "video"
    BLOG = "blog"
    CAROUSEL = "carousel"
    THREAD = "thread"
    LINKEDIN = "linkedin"
    NEWSLETTER = "newsletter"


DEFAULT_CONTENT_TYPE = ContentType.VIDEO


class PromptPair(NamedTuple):
    """System and user prompt for one completion request."""
    system: str
    user: str


# =============================================================================
# System Prompt
# =============================================================================

SYSTEM_PROMPT = """You are an expert AI content creator specializing in educational content about AI for beginners, jobseekers, and upskillers. You create engaging, actionable content about micro-courses, toolkits, and digital learning tools.

When generating content, always:
- Use simple, accessible language
- Include practical tips and actionable advice
- Make content engaging with hooks and storytelling
- Focus on helping people learn AI skills for career advancement"""


# =============================================================================
# Generate Templates
# =============================================================================

VIDEO_TEMPLATE = """Create a comprehensive educational video script about: "{topic}"

The script should be for a 2-3 minute YouTube video. Include:
1. A strong hook (first 5 seconds to grab attention)
2. Introduction (who this is for and what they'll learn)
3. Main content (3-4 key points with examples)
4. Call-to-action (what viewers should do next)

Format the response as JSON with this structure:
{{
  "title": "Video title",
  "hook": "Opening hook text",
  "script": "Full script text",
  "keyPoints": ["point1", "point2", "point3"],
  "cta": "Call to action text"
}}"""

BLOG_TEMPLATE = """Write an educational blog post about: "{topic}"

The post should be 800-1200 words. Include:
1. A compelling headline
2. A meta description under 160 characters
3. An introduction that states the reader's problem
4. 3-5 sections with clear subheadings and practical examples
5. A conclusion with a next step for the reader

Format the response as JSON with this structure:
{{
  "title": "Blog headline",
  "metaDescription": "SEO meta description",
  "introduction": "Opening paragraphs",
  "sections": [
    {{"heading": "Section heading", "content": "Section body"}}
  ],
  "conclusion": "Closing paragraph",
  "keyPoints": ["point1", "point2", "point3"]
}}"""

CAROUSEL_TEMPLATE = """Create an Instagram/LinkedIn carousel about: "{topic}"

The carousel should have 8-10 slides. Include:
1. A cover slide with a bold promise
2. One idea per slide: a short headline (max 8 words) and 1-2 supporting sentences
3. A final slide with a call-to-action
4. A caption and hashtags for the post

Format the response as JSON with this structure:
{{
  "title": "Carousel title",
  "slides": [
    {{"slideNumber": 1, "headline": "Slide headline", "body": "Slide text"}}
  ],
  "caption": "Post caption",
  "hashtags": ["#hashtag1", "#hashtag2"]
}}"""

THREAD_TEMPLATE = """Write a Twitter/X thread about: "{topic}"

The thread should have 8-12 tweets. Include:
1. A hook tweet that makes people want to read on
2. One actionable tip or insight per tweet
3. Every tweet under 280 characters
4. A closing tweet with a call-to-action

Format the response as JSON with this structure:
{{
  "hook": "First tweet",
  "tweets": ["tweet 2", "tweet 3", "..."],
  "cta": "Closing tweet",
  "hashtags": ["#hashtag1", "#hashtag2"]
}}"""

LINKEDIN_TEMPLATE = """Write a LinkedIn post about: "{topic}"

The post should be a single professional post of 150-300 words. Include:
1. A first line that stops the scroll
2. A short personal or practical story
3. 3-5 concrete takeaways, formatted for easy skimming
4. A question or call-to-action that invites comments
5. 3-5 relevant hashtags

Format the response as JSON with this structure:
{{
  "hook": "Opening line",
  "content": "Full post text",
  "cta": "Closing call-to-action",
  "hashtags": ["#hashtag1", "#hashtag2"]
}}"""

NEWSLETTER_TEMPLATE = """Write an email newsletter issue about: "{topic}"

The email should be 500-700 words. Include:
1. A subject line under 60 characters
2. Preview text that complements the subject line
3. A friendly greeting and a short introduction
4. The main lesson with practical steps
5. 3 key takeaways
6. A call-to-action and a sign-off

Format the response as JSON with this structure:
{{
  "subjectLine": "Email subject",
  "previewText": "Inbox preview text",
  "greeting": "Greeting line",
  "content": "Main email body",
  "keyTakeaways": ["takeaway1", "takeaway2", "takeaway3"],
  "cta": "Call to action text",
  "signOff": "Sign-off line"
}}"""

GENERATE_TEMPLATES: dict[ContentType, str] = {
    ContentType.VIDEO: VIDEO_TEMPLATE,
    ContentType.BLOG: BLOG_TEMPLATE,
    ContentType.CAROUSEL: CAROUSEL_TEMPLATE,
    ContentType.THREAD: THREAD_TEMPLATE,
    ContentType.LINKEDIN: LINKEDIN_TEMPLATE,
    ContentType.NEWSLETTER: NEWSLETTER_TEMPLATE,
}


# =============================================================================
# Repurpose Template
# =============================================================================

REPURPOSE_TEMPLATE = """Take this original YouTube script and repurpose it for multiple platforms:

Original Script: {topic}

Create adapted versions for each platform. Return JSON with this structure:
{{
  "youtube": {{
    "title": "Full YouTube title",
    "description": "YouTube description with keywords",
    "hashtags": ["#hashtag1", "#hashtag2"],
    "script": "Original or slightly enhanced script"
  }},
  "youtubeShorts": {{
    "title": "Short punchy title",
    "hook": "60-second version hook",
    "script": "Condensed 60-second script focusing on ONE key point",
    "hashtags": ["#shorts", "#ai", "etc"]
  }},
  "tiktok": {{
    "hook": "Trending TikTok-style hook",
    "script": "TikTok-optimized script (casual, fast-paced)",
    "trendSuggestion": "Suggested trend or sound style",
    "hashtags": ["#tiktok", "#ai", "etc"]
  }},
  "instagram": {{
    "hook": "Instagram Reels hook",
    "script": "Visually-focused script with on-screen text suggestions",
    "caption": "Instagram caption",
    "hashtags": ["#instagram", "#ai", "etc"]
  }},
  "linkedin": {{
    "hook": "Professional opening line",
    "script": "Text post adapted for a professional audience",
    "caption": "Short summary line for the post",
    "hashtags": ["#linkedin", "#ai", "etc"]
  }}
}}"""


# =============================================================================
# Builder
# =============================================================================


def resolve_content_type(
    value: Union[ContentType, str, None],
) -> tuple[ContentType, bool]:
    """
    Map a caller-supplied content type onto a template key.

    Returns:
        (content_type, fell_back). ``fell_back`` is True only when a value was
        supplied but not recognized; an unset value is the normal default.
    """
    if value is None or value == "":
        return DEFAULT_CONTENT_TYPE, False
    if isinstance(value, ContentType):
        return value, False
    try:
        return ContentType(value.strip().lower()), False
    except ValueError:
        return DEFAULT_CONTENT_TYPE, True


def build_prompts(
    topic: str,
    request_type: Union[RequestType, str],
    content_type: Union[ContentType, str, None] = None,
) -> PromptPair:
    """
    Build the prompt pair for a request.

    Args:
        topic: Free-text subject, or the original script for ``repurpose``.
            Callers reject empty topics before calling this.
        request_type: ``generate`` or ``repurpose``.
        content_type: Template selector for ``generate``; ignored for
            ``repurpose``.

    Returns:
        PromptPair with the shared system prompt and the rendered user prompt.

    Raises:
        ValueError: If request_type is not a known RequestType.
    """
    request_type = RequestType(request_type)

    if request_type is RequestType.REPURPOSE:
        return PromptPair(SYSTEM_PROMPT, REPURPOSE_TEMPLATE.format(topic=topic))

    resolved, fell_back = resolve_content_type(content_type)
    if fell_back:
        logger.warning(
            "content_type_fallback",
            requested=str(content_type)[:50],
            used=resolved.value,
        )
        record_template_fallback()

    template = GENERATE_TEMPLATES[resolved]
    return PromptPair(SYSTEM_PROMPT, template.format(topic=topic))
