"""
Normalization of raw model output into JSON.

Models often wrap their JSON in a ```json fenced block surrounded by prose.
When such a block exists only its contents are parsed; otherwise the whole
text is. No schema validation happens here: any JSON value passes through.
"""

import json
import math
import re
from typing import Any, Optional

import structlog

from contentpilot.core.exceptions import ParseError
from contentpilot.monitoring.metrics import record_parse_failure

logger = structlog.get_logger(__name__)

JSON_FENCE_PATTERN = re.compile(r"```json\n?(.*?)\n?```", re.DOTALL)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON and cannot be rendered back out
    raise ValueError(f"Invalid JSON constant {name}")


def _parse_finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {literal[:20]}")
    return value


def extract_json_candidate(raw_text: str) -> tuple[str, bool]:
    """
    Return the text that should be parsed as JSON.

    Returns:
        (candidate, fenced). ``fenced`` is True when the first ```json block
        was used.
    """
    match = JSON_FENCE_PATTERN.search(raw_text)
    if match:
        return match.group(1), True
    return raw_text, False


def normalize(raw_text: Optional[str]) -> Any:
    """
    Parse model output into a JSON value.

    Args:
        raw_text: The message content returned by the model.

    Returns:
        The parsed JSON value, unchanged.

    Raises:
        ParseError: If the text is empty or the candidate is not valid JSON.
    """
    if not raw_text:
        record_parse_failure()
        logger.error("model_response_empty", raw_length=0)
        raise ParseError("Model returned an empty response")

    candidate, fenced = extract_json_candidate(raw_text)

    try:
        return json.loads(
            candidate,
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
    except ValueError as e:
        record_parse_failure()
        logger.error(
            "model_response_parse_failed",
            raw_length=len(raw_text),
            candidate_length=len(candidate),
            fenced=fenced,
            position=getattr(e, "pos", None),
        )
        raise ParseError(
            f"Model response was not valid JSON: {getattr(e, 'msg', e)}",
            raw_length=len(raw_text),
            candidate_length=len(candidate),
        ) from e
