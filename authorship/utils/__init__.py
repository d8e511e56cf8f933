"""Shared utilities."""

from .logging import get_logger, setup_logging, analysis_context, get_analysis_id

__all__ = [
    "get_logger",
    "setup_logging",
    "analysis_context",
    "get_analysis_id",
]
