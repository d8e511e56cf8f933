"""OpenRouter chat-completion provider."""

from typing import Any, Dict, List, Optional

import requests

from ..config import DEFAULT_API_URL, DEFAULT_APP_TITLE, LLMProviderConfig
from ..models import LLMResponse, Message
from ..utils.logging import get_logger
from .provider import (
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    register_provider,
)

logger = get_logger(__name__)

FALLBACK_ERROR_MESSAGE = "Failed to analyze text"
INVALID_RESPONSE_MESSAGE = "Invalid API response format"


@register_provider("openrouter")
class OpenRouterProvider(LLMProvider):
    """LLM provider for OpenRouter's OpenAI-compatible endpoint.

    ``base_url`` is the full chat-completions URL. The referer and title
    headers are OpenRouter's app attribution pair.
    """

    def __init__(
        self,
        config: LLMProviderConfig,
        retry_config: Optional[Dict] = None,
        site_url: str = "http://localhost",
        app_title: str = DEFAULT_APP_TITLE
    ):
        super().__init__(config, retry_config)

        if not config.api_key:
            raise ValueError("OpenRouter API key is required")

        self.url = config.base_url or DEFAULT_API_URL
        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.api_key}",
            "HTTP-Referer": site_url,
            "X-Title": app_title,
        }

    @property
    def provider_name(self) -> str:
        return "openrouter"

    def build_payload(
        self,
        messages: List[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": temperature if temperature is not None else self.config.temperature,
            "max_tokens": max_tokens if max_tokens is not None else self.config.max_tokens,
        }

    def _call_api(
        self,
        messages: List[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> LLMResponse:
        payload = self.build_payload(messages, temperature, max_tokens)

        try:
            response = requests.post(
                self.url,
                headers=self.headers,
                json=payload,
                timeout=self.config.timeout
            )
        except requests.exceptions.Timeout:
            raise LLMTimeoutError(f"OpenRouter request timed out after {self.config.timeout}s")
        except requests.exceptions.RequestException as e:
            raise LLMError(str(e) or FALLBACK_ERROR_MESSAGE)

        if not response.ok:
            raise _error_from_response(response)

        try:
            data = response.json()
        except ValueError:
            raise LLMResponseError(INVALID_RESPONSE_MESSAGE, status=response.status_code)

        content = _extract_content(data)
        if not content:
            raise LLMResponseError(INVALID_RESPONSE_MESSAGE, status=response.status_code)

        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        return LLMResponse(
            content=content,
            input_tokens=_token_count(usage.get("prompt_tokens")),
            output_tokens=_token_count(usage.get("completion_tokens")),
            model=data.get("model") or self.config.model
        )


def _token_count(value: Any) -> int:
    """Usage counts may be missing or null; anything non-numeric counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _extract_content(data: Any) -> Optional[str]:
    """Pull ``choices[0].message.content`` out of a response body."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


def _error_from_response(response: requests.Response) -> LLMError:
    """Turn a non-2xx response into the matching LLMError."""
    status = response.status_code
    message = None
    code = None

    try:
        error_data = response.json()
    except ValueError:
        error_data = None

    if isinstance(error_data, dict):
        error = error_data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            code = error.get("code")
        message = message or error_data.get("message")

    if not message:
        message = f"{FALLBACK_ERROR_MESSAGE} (HTTP {status})"
    if code is not None:
        code = str(code)

    logger.debug(f"OpenRouter returned HTTP {status}: {message}")

    if status == 429:
        return LLMRateLimitError(message, code=code, status=status)
    return LLMError(message, code=code, status=status)
