"""Stylistic signals that accompany the text in the detection prompt.

Regexes and small lexicons only, with no models and no network: the same
text always yields the same flags.
"""

import re
from typing import List, Protocol

from ..models import TextCharacteristics
from ..utils.logging import get_logger

logger = get_logger(__name__)

ARCHAIC_WORDS = frozenset({
    "thee", "thou", "thy", "thine", "hath", "doth", "dost", "shalt",
    "wilt", "whence", "whither", "wherefore", "hither", "thither", "ere",
    "nay", "yea", "oft", "alas", "forsooth", "methinks", "'tis", "'twas",
    "o'er", "e'en", "betwixt", "unto", "perchance", "anon", "mayhap",
})

EMOTION_WORDS = frozenset({
    "love", "loved", "grief", "grieve", "sorrow", "joy", "longing", "ache",
    "aching", "tears", "weep", "wept", "despair", "hope", "fear", "afraid",
    "lonely", "loneliness", "heartbreak", "heart", "yearning", "regret",
    "tender", "anguish", "mourn", "rage", "bliss", "shame", "miss", "missed",
})

IMAGERY_WORDS = frozenset({
    "crimson", "scarlet", "amber", "golden", "silver", "azure", "violet",
    "emerald", "ivory", "shadow", "shadows", "glimmer", "shimmer", "gleam",
    "velvet", "whisper", "whispered", "fragrance", "scent", "smoke", "moonlight",
    "dusk", "dawn", "ember", "embers", "frost", "mist", "bruised", "rust",
})

MODERN_WORDS = frozenset({
    "internet", "online", "email", "smartphone", "phone", "app", "apps",
    "software", "digital", "website", "laptop", "startup", "podcast",
    "streaming", "wifi", "emoji", "selfie", "algorithm", "ai", "data",
    "cloud", "okay", "ok", "hashtag", "blog", "covid", "zoom", "uber",
})

FIGURATIVE_PATTERNS = [
    re.compile(r"\blike (?:a|an|the)\b", re.IGNORECASE),
    re.compile(r"\bas (?:if|though)\b", re.IGNORECASE),
    re.compile(r"\bas \w+ as\b", re.IGNORECASE),
    re.compile(r"\b(?:is|was|are|were) (?:a|an) (?:sea|river|ocean|storm|fire|cage|mirror|wound) of\b", re.IGNORECASE),
]

WORD_RE = re.compile(r"[a-z]+(?:'[a-z]+)?|'[a-z]+", re.IGNORECASE)
SENTENCE_RE = re.compile(r"[^.!?]+[.!?]*")

EMOTION_THRESHOLD = 2
IMAGERY_THRESHOLD = 2
FIGURATIVE_THRESHOLD = 2
BURSTINESS_THRESHOLD = 0.5
MIN_SENTENCES_FOR_BURSTINESS = 3


class FeatureExtractor(Protocol):
    """Anything that turns text into TextCharacteristics."""

    def extract(self, text: str) -> TextCharacteristics:
        ...


def _words(text: str) -> List[str]:
    return [w.lower() for w in WORD_RE.findall(text)]


def _sentences(text: str) -> List[str]:
    return [s.strip() for s in SENTENCE_RE.findall(text) if s.strip()]


def calculate_burstiness(sentences: List[str]) -> float:
    """Coefficient of variation of sentence lengths in words.

    Returns:
        0 for uniform lengths, higher for more variable rhythm.
    """
    if len(sentences) < 2:
        return 0.0

    lengths = [len(s.split()) for s in sentences]
    mean_length = sum(lengths) / len(lengths)

    if mean_length == 0:
        return 0.0

    variance = sum((l - mean_length) ** 2 for l in lengths) / len(lengths)
    return (variance ** 0.5) / mean_length


def _looks_like_verse(text: str) -> bool:
    """Several short lines without closing punctuation, as in poetry."""
    lines = [l.strip() for l in text.splitlines() if l.strip()]
    if len(lines) < 3:
        return False
    open_lines = [l for l in lines if len(l.split()) <= 10 and l[-1] not in ".!?"]
    return len(open_lines) / len(lines) >= 0.5


class HeuristicFeatureExtractor:
    """Lexicon and rhythm heuristics over raw text."""

    def extract(self, text: str) -> TextCharacteristics:
        if not text or not text.strip():
            return TextCharacteristics()

        words = _words(text)
        word_set = set(words)

        emotion_hits = sum(1 for w in words if w in EMOTION_WORDS)
        imagery_hits = sum(1 for w in words if w in IMAGERY_WORDS)
        figurative_hits = sum(len(p.findall(text)) for p in FIGURATIVE_PATTERNS)

        sentences = _sentences(text)
        burstiness = calculate_burstiness(sentences)
        irregular = (
            (len(sentences) >= MIN_SENTENCES_FOR_BURSTINESS and burstiness >= BURSTINESS_THRESHOLD)
            or _looks_like_verse(text)
        )

        characteristics = TextCharacteristics(
            has_historical_language=bool(word_set & ARCHAIC_WORDS),
            has_complex_metaphors=figurative_hits >= FIGURATIVE_THRESHOLD,
            has_emotional_depth=emotion_hits >= EMOTION_THRESHOLD,
            has_irregular_structure=irregular,
            has_unique_imagery=imagery_hits >= IMAGERY_THRESHOLD,
            is_modern_language=bool(word_set & MODERN_WORDS),
        )
        logger.debug(
            "Extracted text characteristics",
            extra_data={"burstiness": round(burstiness, 3), **characteristics.to_dict()}
        )
        return characteristics


class NullFeatureExtractor:
    """Reports every signal as absent."""

    def extract(self, text: str) -> TextCharacteristics:
        return TextCharacteristics()


_default_extractor = HeuristicFeatureExtractor()


def extract_characteristics(text: str) -> TextCharacteristics:
    """Extract characteristics with the default heuristic extractor."""
    return _default_extractor.extract(text)
