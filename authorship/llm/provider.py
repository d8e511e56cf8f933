"""Base LLM provider with retry/backoff and the provider registry."""

import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Type

from ..config import LLMConfig, LLMProviderConfig
from ..models import LLMResponse, Message, MessageRole
from ..utils.logging import get_logger, log_llm_call

logger = get_logger(__name__)


class LLMError(Exception):
    """Failure talking to an LLM endpoint.

    Attributes:
        message: Human-readable description.
        code: Provider error code, when the endpoint returned one.
        status: HTTP status, when the failure came from a response.
    """

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status


class LLMRateLimitError(LLMError):
    """Endpoint rejected the call for rate limiting or quota."""


class LLMTimeoutError(LLMError):
    """Request did not complete within the configured timeout."""


class LLMResponseError(LLMError):
    """Endpoint answered but the body was not usable."""


class LLMCancelledError(LLMError):
    """Caller cancelled the call while it was in progress."""


_PROVIDERS: Dict[str, Type["LLMProvider"]] = {}


def register_provider(name: str) -> Callable[[Type["LLMProvider"]], Type["LLMProvider"]]:
    """Class decorator that makes a provider available to get_provider()."""
    def decorator(cls: Type["LLMProvider"]) -> Type["LLMProvider"]:
        _PROVIDERS[name] = cls
        return cls
    return decorator


def get_provider(
    name: str,
    config: LLMProviderConfig,
    retry_config: Optional[Dict] = None,
    **kwargs
) -> "LLMProvider":
    """Instantiate a registered provider by name.

    Raises:
        ValueError: If no provider is registered under ``name``.
    """
    if name not in _PROVIDERS:
        available = ", ".join(sorted(_PROVIDERS)) or "none"
        raise ValueError(f"Unknown LLM provider: {name} (available: {available})")
    return _PROVIDERS[name](config, retry_config, **kwargs)


def create_provider_from_config(
    llm_config: LLMConfig,
    provider_name: Optional[str] = None,
    **kwargs
) -> "LLMProvider":
    """Build the configured provider with the configured retry policy."""
    name = provider_name or llm_config.provider
    return get_provider(
        name,
        llm_config.get_provider_config(name),
        llm_config.retry_config(),
        **kwargs
    )


class LLMProvider(ABC):
    """Abstract chat-completion provider.

    Subclasses implement ``_call_api`` for a single HTTP attempt and must
    raise ``LLMError`` (or a subclass) for every failure. ``call`` wraps
    that in sequential retries with exponential backoff: the delay before
    attempt k+1 is ``base_delay * 2 ** (k - 1)``, capped at ``max_delay``.
    """

    def __init__(self, config: LLMProviderConfig, retry_config: Optional[Dict] = None):
        retry_config = retry_config or {}
        self.config = config
        self.max_retries = retry_config.get("max_retries", 5)
        self.base_delay = retry_config.get("base_delay", 2.0)
        self.max_delay = retry_config.get("max_delay", 60.0)

        self._lock = threading.Lock()
        self._total_calls = 0
        self._failed_attempts = 0
        self._total_input_tokens = 0
        self._total_output_tokens = 0

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short name used in logs and the registry."""

    def estimate_tokens(self, text: str) -> int:
        """Rough token estimate: ~4 characters per token for English."""
        return len(text) // 4

    @abstractmethod
    def _call_api(
        self,
        messages: List[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> LLMResponse:
        """Make exactly one request to the endpoint."""

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)

    def call(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> str:
        """Send a system + user prompt and return the reply text.

        Args:
            system_prompt: Fixed instruction for the model.
            user_prompt: The request itself.
            temperature: Override for the configured temperature.
            max_tokens: Override for the configured token limit.
            cancel_event: When set, stops the retry sequence before the
                next attempt or during a backoff wait.

        Raises:
            LLMError: The last attempt's failure once retries are exhausted.
            LLMCancelledError: If ``cancel_event`` was set.
        """
        messages = [
            Message(role=MessageRole.SYSTEM, content=system_prompt),
            Message(role=MessageRole.USER, content=user_prompt),
        ]
        response = self._call_with_retry(messages, temperature, max_tokens, cancel_event)
        return response.content

    def _call_with_retry(
        self,
        messages: List[Message],
        temperature: Optional[float],
        max_tokens: Optional[int],
        cancel_event: Optional[threading.Event]
    ) -> LLMResponse:
        attempt = 1
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise LLMCancelledError("Analysis was cancelled")

            start = time.monotonic()
            try:
                response = self._call_api(messages, temperature=temperature, max_tokens=max_tokens)
            except LLMCancelledError:
                raise
            except LLMError as e:
                duration_ms = int((time.monotonic() - start) * 1000)
                with self._lock:
                    self._failed_attempts += 1
                log_llm_call(
                    logger, self.provider_name, self.config.model, attempt, duration_ms,
                    success=False, error=e.message, status=e.status
                )

                if attempt >= self.max_retries:
                    raise

                delay = self.backoff_delay(attempt)
                logger.warning(
                    f"Attempt {attempt} failed, retrying in {delay:g}s...",
                    extra_data={"attempt": attempt, "next_delay": delay}
                )
                self._wait(delay, cancel_event)
                attempt += 1
                continue

            duration_ms = int((time.monotonic() - start) * 1000)
            log_llm_call(logger, self.provider_name, response.model or self.config.model, attempt, duration_ms)
            self._record_usage(response)
            return response

    def _wait(self, delay: float, cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is None:
            time.sleep(delay)
        elif cancel_event.wait(delay):
            raise LLMCancelledError("Analysis was cancelled")

    def _record_usage(self, response: LLMResponse) -> None:
        with self._lock:
            self._total_calls += 1
            self._total_input_tokens += response.input_tokens
            self._total_output_tokens += response.output_tokens

    def get_usage_stats(self) -> Dict[str, int]:
        """Totals over successful calls made by this provider."""
        with self._lock:
            return {
                "total_calls": self._total_calls,
                "failed_attempts": self._failed_attempts,
                "total_input_tokens": self._total_input_tokens,
                "total_output_tokens": self._total_output_tokens,
                "total_tokens": self._total_input_tokens + self._total_output_tokens,
            }

    def reset_usage_stats(self) -> None:
        with self._lock:
            self._total_calls = 0
            self._failed_attempts = 0
            self._total_input_tokens = 0
            self._total_output_tokens = 0
