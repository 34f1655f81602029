"""Content generation endpoints for the ContentPilot API.

Provides the generate-content endpoint used by both the script generator and
the repurpose engine.
"""

import structlog
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from contentpilot.api.dependencies import get_content_generator
from contentpilot.api.models import ErrorResponse, GenerateContentRequest
from contentpilot.generation.orchestrator import ContentGenerator, GenerationRequest

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Generation"])


@router.options("/generate-content", include_in_schema=False)
async def generate_content_preflight() -> Response:
    """Answer a bare OPTIONS request with an empty 200."""
    return Response(status_code=200)


@router.post(
    "/generate-content",
    summary="Generate or repurpose content",
    description=(
        "Generate a script, blog post, carousel, thread, LinkedIn post or "
        "newsletter for a topic, or repurpose a script for each platform."
    ),
    responses={
        200: {"description": "Parsed model output, returned unchanged"},
        400: {"model": ErrorResponse, "description": "Topic is empty"},
        402: {"model": ErrorResponse, "description": "AI credits depleted"},
        429: {"model": ErrorResponse, "description": "Upstream rate limit"},
        500: {"model": ErrorResponse, "description": "Upstream or parse failure"},
        504: {"model": ErrorResponse, "description": "Upstream timeout"},
    },
)
async def generate_content(
    body: GenerateContentRequest,
    generator: ContentGenerator = Depends(get_content_generator),
) -> JSONResponse:
    """
    Run one generation request.

    **Parameters:**
    - **topic**: Topic text, or the original script for `repurpose`
    - **type**: `generate` or `repurpose`
    - **contentType**: Template for `generate`; unknown values use `video`

    Errors are rendered as `{"error": "..."}` by the application's
    ContentPilotError handler.
    """
    result = await generator.generate(
        GenerationRequest(
            topic=body.topic,
            request_type=body.request_type,
            content_type=body.content_type,
        )
    )

    logger.info(
        "generate_content_succeeded",
        request_type=result.request_type.value,
        content_type=result.content_type.value,
        template_fallback=result.template_fallback,
    )
    return JSONResponse(content=result.data)
