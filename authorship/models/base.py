"""Chat message models shared by the LLM layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class MessageRole(Enum):
    """Role of a message in a chat-completion request."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single chat message."""
    role: MessageRole
    content: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to the dict format chat-completion APIs expect."""
        return {
            "role": self.role.value,
            "content": self.content
        }


@dataclass
class LLMResponse:
    """Response from one successful LLM call."""
    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str = ""
