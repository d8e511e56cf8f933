"""Reading analysis input from JSONL files.

Only the first non-blank line is used; it must be an object with a
string ``text`` field.
"""

import json
from pathlib import Path
from typing import Union

from ..utils.logging import get_logger

logger = get_logger(__name__)

JSONL_SUFFIX = ".jsonl"


class JSONLError(ValueError):
    """Input file is not usable JSONL."""


def parse_jsonl_text(content: str) -> str:
    """Extract the ``text`` field from the first non-blank JSONL line.

    Raises:
        JSONLError: If there is no line, it isn't JSON, or it lacks a
            string ``text`` field.
    """
    lines = [line for line in content.splitlines() if line.strip()]
    if not lines:
        raise JSONLError("JSONL file is empty")

    try:
        record = json.loads(lines[0])
    except json.JSONDecodeError as e:
        raise JSONLError("Invalid JSONL format") from e

    text = record.get("text") if isinstance(record, dict) else None
    if not text or not isinstance(text, str):
        raise JSONLError(
            'Invalid JSONL format. Each line must contain a "text" field with string content.'
        )

    if len(lines) > 1:
        logger.debug(f"Ignoring {len(lines) - 1} additional JSONL line(s)")
    return text


def read_jsonl_text(path: Union[str, Path]) -> str:
    """Read the analysis text from a ``.jsonl`` file.

    Raises:
        JSONLError: For a wrong extension, bytes that aren't UTF-8, or
            unusable content.
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if path.suffix.lower() != JSONL_SUFFIX:
        raise JSONLError("Please upload a JSONL file")

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise JSONLError("Invalid JSONL format") from e

    return parse_jsonl_text(content)
