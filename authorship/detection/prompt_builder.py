"""Prompt building for authorship detection."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..models import TextCharacteristics
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Templates ship inside the package so installed copies can find them
PROMPTS_DIR = Path(__file__).parent.parent / "prompts"
SYSTEM_PROMPT_NAME = "detection_system"

# (label, attribute) in the order they appear in the prompt
CHARACTERISTIC_LABELS = [
    ("Historical language", "has_historical_language"),
    ("Complex metaphors", "has_complex_metaphors"),
    ("Emotional depth", "has_emotional_depth"),
    ("Irregular structure", "has_irregular_structure"),
    ("Unique imagery", "has_unique_imagery"),
    ("Modern language", "is_modern_language"),
]


def load_prompt(name: str) -> str:
    """Load a prompt template from the prompts directory.

    Args:
        name: Template filename without extension (e.g. "detection_system").

    Raises:
        FileNotFoundError: If the template doesn't exist.
    """
    path = PROMPTS_DIR / f"{name}.md"

    if not path.exists():
        raise FileNotFoundError(f"Prompt not found: {path}")

    content = path.read_text(encoding="utf-8").strip()
    logger.debug(f"Loaded prompt: {name} ({len(content)} chars)")
    return content


@dataclass(frozen=True)
class DetectionPrompt:
    """A complete system + user prompt pair."""
    system_prompt: str
    user_prompt: str


class PromptBuilder:
    """Builds the detection prompt from text and its characteristics.

    The system instruction is read once per builder; by default it comes
    from the packaged ``detection_system`` template.
    """

    def __init__(self, system_prompt: Optional[str] = None):
        self.system_prompt = system_prompt if system_prompt is not None else load_prompt(SYSTEM_PROMPT_NAME)

    def build_user_prompt(self, text: str, characteristics: TextCharacteristics) -> str:
        """Embed the six flags and the verbatim text into the user message."""
        flag_lines = [
            f"- {label}: {'Yes' if getattr(characteristics, attr) else 'No'}"
            for label, attr in CHARACTERISTIC_LABELS
        ]

        return (
            "Text characteristics analysis:\n"
            + "\n".join(flag_lines)
            + "\n\nText to analyze:\n"
            + '"""\n'
            + text
            + '\n"""\n\n'
            + "Provide your analysis following the exact format specified."
        )

    def build(self, text: str, characteristics: TextCharacteristics) -> DetectionPrompt:
        user_prompt = self.build_user_prompt(text, characteristics)
        logger.debug(f"Built detection prompt ({len(user_prompt)} chars)")
        return DetectionPrompt(system_prompt=self.system_prompt, user_prompt=user_prompt)
