"""Input readers."""

from .jsonl import JSONLError, parse_jsonl_text, read_jsonl_text

__all__ = [
    "JSONLError",
    "parse_jsonl_text",
    "read_jsonl_text",
]
