"""Structured logging for the authorship detection pipeline."""

import json
import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

# One id per analysis so interleaved concurrent runs stay readable
_analysis_id: ContextVar[Optional[str]] = ContextVar("analysis_id", default=None)


def get_analysis_id() -> Optional[str]:
    """Get the id of the analysis running in the current context."""
    return _analysis_id.get()


@contextmanager
def analysis_context(analysis_id: Optional[str] = None) -> Iterator[str]:
    """Bind an analysis id for the duration of the block.

    Generates a short id if none is given. The previous id is restored on
    exit.
    """
    if analysis_id is None:
        analysis_id = uuid.uuid4().hex[:8]
    token = _analysis_id.set(analysis_id)
    try:
        yield analysis_id
    finally:
        _analysis_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON log lines, one object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        analysis_id = get_analysis_id()
        if analysis_id:
            log_data["analysis_id"] = analysis_id

        if getattr(record, "extra_data", None):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Colored single-line output for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        analysis_id = get_analysis_id()
        id_str = f"[{analysis_id}] " if analysis_id else ""

        color = self.COLORS.get(record.levelname, "")
        level = f"{color}{record.levelname:8}{self.RESET}"

        extra_str = ""
        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            extra_items = [f"{k}={v}" for k, v in extra_data.items()]
            extra_str = f" | {', '.join(extra_items)}"

        return f"{level} {id_str}{record.name}: {record.getMessage()}{extra_str}"


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that accepts an ``extra_data`` dict on every call."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = {**self.extra, **kwargs.pop("extra_data", {})}

        extra = kwargs.get("extra", {})
        extra["extra_data"] = extra_data
        kwargs["extra"] = extra

        return msg, kwargs

    def with_context(self, **context) -> "ContextLogger":
        """Create a logger that adds ``context`` to every record."""
        return ContextLogger(self.logger, {**self.extra, **context})


def get_logger(name: str) -> ContextLogger:
    """Get a structured logger for the given name."""
    return ContextLogger(logging.getLogger(name), {})


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None
) -> None:
    """Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit JSON lines on the console instead of colored text.
        log_file: Optional path; file output is always JSON.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    formatter = StructuredFormatter() if json_format else HumanFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def log_llm_call(
    logger: ContextLogger,
    provider: str,
    model: str,
    attempt: int,
    duration_ms: int,
    success: bool = True,
    error: Optional[str] = None,
    status: Optional[int] = None
) -> None:
    """Log a single HTTP attempt against an LLM endpoint."""
    extra = {
        "provider": provider,
        "model": model,
        "attempt": attempt,
        "duration_ms": duration_ms,
        "success": success,
    }
    if status is not None:
        extra["status"] = status
    if error:
        extra["error"] = error

    if success:
        logger.info(
            f"LLM call completed on attempt {attempt} in {duration_ms}ms",
            extra_data=extra
        )
    else:
        logger.warning(
            f"LLM call failed on attempt {attempt}: {error}",
            extra_data=extra
        )
