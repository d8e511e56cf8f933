"""Mock LLM provider for testing."""

from typing import List, Optional, Dict, Sequence, Union

from authorship.models import Message, LLMResponse
from authorship.config import LLMProviderConfig
from authorship.llm.provider import LLMProvider, register_provider, LLMError

# A scripted step is either reply text or an exception to raise
Step = Union[str, Exception]


@register_provider("mock")
class MockLLMProvider(LLMProvider):
    """Mock LLM provider for unit testing.

    Plays back ``script`` one step per attempt; once the script runs out
    the last step repeats.
    """

    def __init__(
        self,
        config: LLMProviderConfig = None,
        retry_config: Optional[Dict] = None,
        script: Optional[Sequence[Step]] = None,
        **kwargs
    ):
        if config is None:
            config = LLMProviderConfig(model="mock-model")
        super().__init__(config, retry_config)

        self.script = list(script or ["HUMAN-WRITTEN 50%\nMock rationale."])
        self.call_count = 0
        self.last_messages: List[Message] = []
        self.extra_kwargs = kwargs

    @property
    def provider_name(self) -> str:
        return "mock"

    def estimate_tokens(self, text: str) -> int:
        return len(text.split())

    def _call_api(
        self,
        messages: List[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> LLMResponse:
        self.last_messages = messages
        self.call_count += 1

        step = self.script[min(self.call_count, len(self.script)) - 1]
        if isinstance(step, Exception):
            raise step

        input_text = " ".join(m.content for m in messages)
        return LLMResponse(
            content=step,
            input_tokens=self.estimate_tokens(input_text),
            output_tokens=self.estimate_tokens(step),
            model="mock-model"
        )


def create_mock_provider(
    script: Optional[Sequence[Step]] = None,
    max_retries: int = 5,
    base_delay: float = 2.0
) -> MockLLMProvider:
    """Factory function to create a mock provider."""
    return MockLLMProvider(
        script=script,
        retry_config={"max_retries": max_retries, "base_delay": base_delay, "max_delay": 60.0},
    )


def failures(count: int, message: str = "Simulated error") -> List[Step]:
    """``count`` LLMError steps."""
    return [LLMError(f"{message} #{i}") for i in range(1, count + 1)]
