"""Parsing of the model's classification reply.

A reply must open with a classification line such as ``AI-GENERATED 87%``
or ``HUMAN-WRITTEN 64%``; everything after it is the rationale.
"""

import re
from dataclasses import dataclass

from ..llm.provider import LLMResponseError
from ..utils.logging import get_logger

logger = get_logger(__name__)

AI_PATTERN = re.compile(r"^AI-GENERATED\s+(\d{1,3})%", re.IGNORECASE)
HUMAN_PATTERN = re.compile(r"^HUMAN-WRITTEN\s+(\d{1,3})%", re.IGNORECASE)

EMPTY_RESPONSE_MESSAGE = "Invalid API response format"
MISSING_CLASSIFICATION_MESSAGE = "Invalid response format: Missing classification"
DETAILS_PLACEHOLDER = "Analysis details not provided"

MAX_CONFIDENCE = 100


@dataclass(frozen=True)
class ParsedVerdict:
    """Classification line and rationale pulled out of a reply."""
    is_ai: bool
    confidence: int
    details: str


def parse_detection_response(content: str) -> ParsedVerdict:
    """Parse a raw reply into a verdict.

    Args:
        content: Reply text from the model.

    Returns:
        ParsedVerdict with confidence clamped to 0-100.

    Raises:
        LLMResponseError: If the reply is empty or its first non-empty line
            is not a classification line.
    """
    if not content or not content.strip():
        raise LLMResponseError(EMPTY_RESPONSE_MESSAGE)

    lines = content.strip().splitlines()
    first_line = lines[0].strip()

    ai_match = AI_PATTERN.match(first_line)
    human_match = None if ai_match else HUMAN_PATTERN.match(first_line)

    if not ai_match and not human_match:
        logger.error(f"Invalid classification format: {first_line[:120]!r}")
        raise LLMResponseError(MISSING_CLASSIFICATION_MESSAGE)

    match = ai_match or human_match
    raw_confidence = int(match.group(1))
    confidence = min(raw_confidence, MAX_CONFIDENCE)
    if confidence != raw_confidence:
        logger.warning(f"Confidence {raw_confidence}% out of range, clamped to {confidence}%")

    details = "\n".join(lines[1:]).strip()

    return ParsedVerdict(
        is_ai=ai_match is not None,
        confidence=confidence,
        details=details or DETAILS_PLACEHOLDER,
    )
