"""
Content generation pipeline.

- prompts: System prompt and per-format user prompt templates
- gateway: Async client for the AI gateway chat-completions endpoint
- normalizer: Extracts and parses JSON from raw model output
- results: Typed result variants and the stored content record shape
- orchestrator: ContentGenerator tying the steps together
"""

from contentpilot.generation.prompts import (
    ContentType,
    PromptPair,
    RequestType,
    SYSTEM_PROMPT,
    build_prompts,
    resolve_content_type,
)
from contentpilot.generation.normalizer import extract_json_candidate, normalize
from contentpilot.generation.gateway import AIGatewayClient
from contentpilot.generation.results import (
    BlogPost,
    Carousel,
    ContentRecord,
    ContentStatus,
    GenerationResult,
    LinkedInPost,
    Newsletter,
    PlatformVariant,
    RepurposedContent,
    SchedulePlatform,
    TwitterThread,
    VideoScript,
    build_content_record,
    result_model_for,
    schedule_update,
    unschedule_update,
)
from contentpilot.generation.orchestrator import ContentGenerator, GenerationRequest

__all__ = [
    "ContentType",
    "PromptPair",
    "RequestType",
    "SYSTEM_PROMPT",
    "build_prompts",
    "resolve_content_type",
    "extract_json_candidate",
    "normalize",
    "AIGatewayClient",
    "BlogPost",
    "Carousel",
    "ContentRecord",
    "ContentStatus",
    "GenerationResult",
    "LinkedInPost",
    "Newsletter",
    "PlatformVariant",
    "RepurposedContent",
    "SchedulePlatform",
    "TwitterThread",
    "VideoScript",
    "build_content_record",
    "result_model_for",
    "schedule_update",
    "unschedule_update",
    "ContentGenerator",
    "GenerationRequest",
]
