"""Typed views over generation results and the stored content shape.

The API returns model output unchanged. These models give Python callers a
typed view keyed by (request type, content type). Every field is optional
because no template guarantees the model fills it in, and unknown keys are
kept.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from contentpilot.generation.prompts import DEFAULT_CONTENT_TYPE, ContentType, RequestType


class ContentStatus(str, Enum):
    """Lifecycle status of a stored content record."""
    DRAFT = "draft"
    READY = "ready"
    SCHEDULED = "scheduled"


class SchedulePlatform(str, Enum):
    """Platforms a record can be scheduled on."""
    YOUTUBE = "youtube"
    SHORTS = "shorts"
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"


# =============================================================================
# Result Variants
# =============================================================================


class ResultModel(BaseModel):
    """Base for all result variants."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class VideoScript(ResultModel):
    title: Optional[str] = None
    hook: Optional[str] = None
    script: Optional[str] = None
    key_points: Optional[list[str]] = Field(None, alias="keyPoints")
    cta: Optional[str] = None


class BlogSection(ResultModel):
    heading: Optional[str] = None
    content: Optional[str] = None


class BlogPost(ResultModel):
    title: Optional[str] = None
    meta_description: Optional[str] = Field(None, alias="metaDescription")
    introduction: Optional[str] = None
    sections: Optional[list[BlogSection]] = None
    conclusion: Optional[str] = None
    key_points: Optional[list[str]] = Field(None, alias="keyPoints")


class CarouselSlide(ResultModel):
    slide_number: Optional[int] = Field(None, alias="slideNumber")
    headline: Optional[str] = None
    body: Optional[str] = None


class Carousel(ResultModel):
    title: Optional[str] = None
    slides: Optional[list[CarouselSlide]] = None
    caption: Optional[str] = None
    hashtags: Optional[list[str]] = None


class TwitterThread(ResultModel):
    hook: Optional[str] = None
    tweets: Optional[list[str]] = None
    cta: Optional[str] = None
    hashtags: Optional[list[str]] = None


class LinkedInPost(ResultModel):
    hook: Optional[str] = None
    content: Optional[str] = None
    cta: Optional[str] = None
    hashtags: Optional[list[str]] = None


class Newsletter(ResultModel):
    subject_line: Optional[str] = Field(None, alias="subjectLine")
    preview_text: Optional[str] = Field(None, alias="previewText")
    greeting: Optional[str] = None
    content: Optional[str] = None
    key_takeaways: Optional[list[str]] = Field(None, alias="keyTakeaways")
    cta: Optional[str] = None
    sign_off: Optional[str] = Field(None, alias="signOff")


class PlatformVariant(ResultModel):
    """One platform's adaptation of a script."""

    title: Optional[str] = None
    hook: Optional[str] = None
    script: Optional[str] = None
    description: Optional[str] = None
    caption: Optional[str] = None
    trend_suggestion: Optional[str] = Field(None, alias="trendSuggestion")
    hashtags: Optional[list[str]] = None


class RepurposedContent(ResultModel):
    youtube: Optional[PlatformVariant] = None
    youtube_shorts: Optional[PlatformVariant] = Field(None, alias="youtubeShorts")
    tiktok: Optional[PlatformVariant] = None
    instagram: Optional[PlatformVariant] = None
    linkedin: Optional[PlatformVariant] = None


GeneratedContent = Union[
    VideoScript, BlogPost, Carousel, TwitterThread, LinkedInPost, Newsletter, RepurposedContent
]

GENERATE_RESULT_MODELS: dict[ContentType, type[ResultModel]] = {
    ContentType.VIDEO: VideoScript,
    ContentType.BLOG: BlogPost,
    ContentType.CAROUSEL: Carousel,
    ContentType.THREAD: TwitterThread,
    ContentType.LINKEDIN: LinkedInPost,
    ContentType.NEWSLETTER: Newsletter,
}


def result_model_for(
    request_type: RequestType,
    content_type: ContentType,
) -> type[ResultModel]:
    """Return the variant class for a (request type, content type) pair."""
    if request_type is RequestType.REPURPOSE:
        return RepurposedContent
    return GENERATE_RESULT_MODELS[content_type]


@dataclass
class GenerationResult:
    """Outcome of one generation request.

    ``data`` is the parsed JSON value exactly as the model produced it.
    ``content_type`` is the template actually used, after any fallback.
    """

    request_type: RequestType
    content_type: ContentType
    data: Any
    raw_length: int = 0
    template_fallback: bool = False

    def as_model(self) -> Optional[GeneratedContent]:
        """Validate ``data`` into its typed variant, or None for non-objects."""
        if not isinstance(self.data, dict):
            return None
        model_cls = result_model_for(self.request_type, self.content_type)
        return model_cls.model_validate(self.data)


# =============================================================================
# Content Record
# =============================================================================

# RepurposedContent attribute -> ContentRecord column
PLATFORM_COLUMNS: dict[str, str] = {
    "youtube": "youtube_version",
    "youtube_shorts": "youtube_shorts_version",
    "tiktok": "tiktok_version",
    "instagram": "instagram_version",
    "linkedin": "linkedin_version",
}

# Generate content type -> ContentRecord column (video goes to original_script)
CONTENT_TYPE_COLUMNS: dict[ContentType, str] = {
    ContentType.BLOG: "blog_version",
    ContentType.CAROUSEL: "carousel_version",
    ContentType.THREAD: "thread_version",
    ContentType.LINKEDIN: "linkedin_version",
    ContentType.NEWSLETTER: "newsletter_version",
}


class ContentRecord(BaseModel):
    """Row shape of the external content store."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    topic: str
    original_script: str
    content_type: ContentType = ContentType.VIDEO
    youtube_version: Optional[dict[str, Any]] = None
    youtube_shorts_version: Optional[dict[str, Any]] = None
    tiktok_version: Optional[dict[str, Any]] = None
    instagram_version: Optional[dict[str, Any]] = None
    linkedin_version: Optional[dict[str, Any]] = None
    blog_version: Optional[dict[str, Any]] = None
    carousel_version: Optional[dict[str, Any]] = None
    thread_version: Optional[dict[str, Any]] = None
    newsletter_version: Optional[dict[str, Any]] = None
    status: ContentStatus = ContentStatus.DRAFT
    scheduled_for: Optional[datetime] = None
    platform: Optional[SchedulePlatform] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_row(self) -> dict[str, Any]:
        """Serialize for insertion, dropping empty variant columns."""
        return self.model_dump(mode="json", exclude_none=True)


def build_content_record(
    topic: Optional[str],
    original_script: str,
    result: GenerationResult,
) -> ContentRecord:
    """
    Map a generation result onto a ready-to-save ContentRecord.

    Repurpose results fill the per-platform columns and keep the default
    content type. Generate results for a non-video content type fill that
    type's column; a video script is the original script itself.

    Args:
        topic: Display topic; "Untitled" when missing.
        original_script: The script the result was derived from.
        result: Output of ContentGenerator.generate().
    """
    is_repurpose = result.request_type is RequestType.REPURPOSE
    record = ContentRecord(
        topic=topic or "Untitled",
        original_script=original_script,
        content_type=DEFAULT_CONTENT_TYPE if is_repurpose else result.content_type,
        status=ContentStatus.READY,
    )

    if not isinstance(result.data, dict):
        return record

    if is_repurpose:
        for attr, column in PLATFORM_COLUMNS.items():
            key = RepurposedContent.model_fields[attr].alias or attr
            variant = result.data.get(key)
            if isinstance(variant, dict):
                setattr(record, column, variant)
    elif result.content_type in CONTENT_TYPE_COLUMNS:
        setattr(record, CONTENT_TYPE_COLUMNS[result.content_type], result.data)

    return record


def schedule_update(
    scheduled_for: datetime,
    platform: Union[SchedulePlatform, str],
) -> dict[str, Any]:
    """Field updates that move a record onto the calendar."""
    return {
        "scheduled_for": scheduled_for.isoformat(),
        "platform": SchedulePlatform(platform).value,
        "status": ContentStatus.SCHEDULED.value,
    }


def unschedule_update() -> dict[str, Any]:
    """Field updates that take a record off the calendar."""
    return {
        "scheduled_for": None,
        "platform": None,
        "status": ContentStatus.READY.value,
    }
