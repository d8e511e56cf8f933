"""End-to-end authorship detection pipeline."""

import random
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Union

from ..config import Config, default_llm_config
from ..llm.provider import LLMProvider, create_provider_from_config
from ..models import DetectionResult
from ..utils.logging import analysis_context, get_logger
from .errors import EMPTY_INPUT_MESSAGE, ClassificationError, ErrorKind, classify_error
from .features import FeatureExtractor, HeuristicFeatureExtractor
from .metrics import synthesize_metrics
from .parser import parse_detection_response
from .prompt_builder import PromptBuilder

logger = get_logger(__name__)

AnalysisOutcome = Union[DetectionResult, ClassificationError]


class AIDetector:
    """Classifies text as AI-generated or human-written via a remote LLM.

    The detector holds only read-only collaborators, so one instance can
    serve any number of concurrent ``analyze`` calls. Each call owns its
    own retry state.

    Usage:
        detector = AIDetector.from_config(load_config("config.json"))
        result = detector.analyze(text)
        print(result.label, result.confidence)
    """

    def __init__(
        self,
        provider: LLMProvider,
        extractor: Optional[FeatureExtractor] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        rng: Optional[random.Random] = None
    ):
        """Initialize the detector.

        Args:
            provider: LLM provider that performs the (retried) call.
            extractor: Feature extractor; heuristic one by default.
            prompt_builder: Prompt builder; packaged template by default.
            rng: Random source for metric jitter; unseeded by default.
        """
        self.provider = provider
        self.extractor = extractor or HeuristicFeatureExtractor()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.rng = rng

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "AIDetector":
        """Build a detector whose provider follows ``config``."""
        llm_config = config.llm if config.llm.providers else default_llm_config()
        provider = create_provider_from_config(
            llm_config,
            site_url=config.detector.site_url,
            app_title=config.detector.app_title,
        )
        return cls(provider, **kwargs)

    def analyze(self, text: str, cancel_event: Optional[threading.Event] = None) -> DetectionResult:
        """Classify one text.

        Args:
            text: Text to classify; must contain non-whitespace characters.
            cancel_event: Optional event that aborts the retry sequence.

        Returns:
            DetectionResult for the text.

        Raises:
            ClassificationError: For blank input and for every failure in
                extraction, transport, or parsing.
        """
        if not text or not text.strip():
            raise ClassificationError(EMPTY_INPUT_MESSAGE, kind=ErrorKind.INPUT_VALIDATION)

        with analysis_context() as analysis_id:
            log = logger.with_context(analysis_id=analysis_id)

            try:
                characteristics = self.extractor.extract(text)
                prompt = self.prompt_builder.build(text, characteristics)
                content = self.provider.call(
                    prompt.system_prompt,
                    prompt.user_prompt,
                    cancel_event=cancel_event,
                )
                verdict = parse_detection_response(content)
                metrics = synthesize_metrics(verdict.confidence, self.rng)
            except Exception as e:
                error = classify_error(e)
                log.error(
                    f"AI detection failed: {e}",
                    extra_data={"kind": error.kind.value, "status": error.status}
                )
                if error is e:
                    raise
                raise error from e

            result = DetectionResult(
                is_ai=verdict.is_ai,
                metrics=metrics,
                details=verdict.details,
                confidence=verdict.confidence,
            )
            log.info(
                f"Processed detection result: {result.label} {result.confidence}%",
                extra_data=result.metrics.to_dict()
            )
            return result

    def analyze_many(
        self,
        texts: Sequence[str],
        max_workers: int = 2,
        cancel_event: Optional[threading.Event] = None
    ) -> List[AnalysisOutcome]:
        """Analyze independent texts concurrently.

        Returns:
            One entry per input, in input order: the DetectionResult, or the
            ClassificationError that analysis ended with.
        """
        if not texts:
            return []

        def run(text: str) -> AnalysisOutcome:
            try:
                return self.analyze(text, cancel_event=cancel_event)
            except ClassificationError as e:
                return e

        with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(texts)))) as executor:
            return list(executor.map(run, texts))


def analyze_text(
    text: str,
    config: Optional[Config] = None,
    cancel_event: Optional[threading.Event] = None
) -> DetectionResult:
    """Convenience wrapper: build a detector from ``config`` and analyze once.

    Raises:
        ClassificationError: For every failure, including a config the
            provider can't be built from (e.g. no API key).
    """
    try:
        detector = AIDetector.from_config(config or Config())
    except ValueError as e:
        raise ClassificationError(str(e), kind=ErrorKind.INPUT_VALIDATION) from e
    except Exception as e:
        raise classify_error(e) from e
    return detector.analyze(text, cancel_event=cancel_event)
