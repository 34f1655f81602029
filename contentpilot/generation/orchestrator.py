"""
Content Generation Orchestrator.

Runs one generation request end to end: validate the topic, build prompts,
call the AI gateway, normalize the response. Each step's failure surfaces
immediately as a typed ContentPilotError; nothing is retried.

Standalone usage:
    from contentpilot.config import get_settings
    from contentpilot.generation import ContentGenerator, GenerationRequest

    generator = ContentGenerator(get_settings())
    request = GenerationRequest(topic="AI resume tips", request_type="generate",
                                content_type="blog")
    result = await generator.generate(request)
    await generator.aclose()
"""

from typing import Optional

import structlog
from pydantic import BaseModel, Field

from contentpilot.config.settings import Settings
from contentpilot.core.exceptions import ValidationError
from contentpilot.generation.gateway import AIGatewayClient
from contentpilot.generation.normalizer import normalize
from contentpilot.generation.prompts import (
    DEFAULT_CONTENT_TYPE,
    RequestType,
    build_prompts,
    resolve_content_type,
)
from contentpilot.generation.results import GenerationResult
from contentpilot.monitoring.metrics import track_generation

logger = structlog.get_logger(__name__)


# =============================================================================
# Models
# =============================================================================


class GenerationRequest(BaseModel):
    """Input for a single generation request."""
    topic: str = Field(default="", description="Subject, or the original script when repurposing")
    request_type: RequestType = Field(..., description="generate or repurpose")
    content_type: Optional[str] = Field(
        None, description="Template selector for generate; unknown values use video"
    )


# =============================================================================
# Generator
# =============================================================================


class ContentGenerator:
    """
    Generates and repurposes content through the AI gateway.

    Settings are injected once; a missing gateway key fails construction so
    no request can reach the network without credentials.
    """

    def __init__(self, settings: Settings, gateway: Optional[AIGatewayClient] = None):
        self.settings = settings
        self.gateway = gateway or AIGatewayClient(settings)

    async def aclose(self) -> None:
        await self.gateway.aclose()

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate content for a request.

        Args:
            request: Topic, request type and optional content type.

        Returns:
            GenerationResult whose ``data`` is the parsed model output.

        Raises:
            ValidationError: Topic is empty or whitespace.
            UpstreamError: Gateway failure (including its rate-limit, quota
                and timeout subclasses).
            ParseError: Model output had no extractable JSON.
        """
        if not request.topic or not request.topic.strip():
            logger.warning("generation_rejected_empty_topic", request_type=request.request_type.value)
            raise ValidationError("Topic is required", field="topic")

        if request.request_type is RequestType.REPURPOSE:
            content_type, fell_back = DEFAULT_CONTENT_TYPE, False
        else:
            content_type, fell_back = resolve_content_type(request.content_type)

        log = logger.bind(
            request_type=request.request_type.value,
            content_type=content_type.value,
        )

        with track_generation(request.request_type.value, content_type.value) as ctx:
            prompts = build_prompts(request.topic, request.request_type, request.content_type)

            log.info("generating_content", topic_length=len(request.topic))

            raw_text = await self.gateway.complete(prompts.system, prompts.user)
            data = normalize(raw_text)

            ctx["status"] = "success"

        log.info("content_generated", raw_length=len(raw_text))

        return GenerationResult(
            request_type=request.request_type,
            content_type=content_type,
            data=data,
            raw_length=len(raw_text),
            template_fallback=fell_back,
        )
