"""Unit tests for classification reply parsing."""

import pytest

from authorship.llm.provider import LLMResponseError
from authorship.detection.parser import (
    DETAILS_PLACEHOLDER,
    parse_detection_response,
)


class TestClassificationLine:
    """Test the mandatory first line."""

    def test_ai_generated(self):
        verdict = parse_detection_response(
            "AI-GENERATED 87%\n\n  The text is uniform.\nIt lacks voice.  \n"
        )
        assert verdict.is_ai is True
        assert verdict.confidence == 87
        assert verdict.details == "The text is uniform.\nIt lacks voice."

    def test_human_written(self):
        verdict = parse_detection_response("HUMAN-WRITTEN 64%\nQuirky idioms.")
        assert verdict.is_ai is False
        assert verdict.confidence == 64

    def test_case_insensitive(self):
        verdict = parse_detection_response("ai-generated 5%\nx")
        assert verdict.is_ai is True
        assert verdict.confidence == 5

    def test_leading_blank_lines_skipped(self):
        verdict = parse_detection_response("\n\n   HUMAN-WRITTEN 12%\nrationale")
        assert verdict.is_ai is False
        assert verdict.details == "rationale"

    def test_trailing_text_on_first_line_allowed(self):
        verdict = parse_detection_response("AI-GENERATED 70% confidence\nmore")
        assert verdict.confidence == 70

    def test_unrecognized_first_line(self):
        with pytest.raises(LLMResponseError) as exc_info:
            parse_detection_response("I think this is AI\nAI-GENERATED 90%")
        assert "Missing classification" in exc_info.value.message

    def test_pattern_must_start_the_line(self):
        with pytest.raises(LLMResponseError):
            parse_detection_response("Verdict: AI-GENERATED 90%")

    def test_four_digit_confidence_rejected(self):
        with pytest.raises(LLMResponseError):
            parse_detection_response("AI-GENERATED 1000%")

    def test_out_of_range_confidence_clamped(self):
        verdict = parse_detection_response("AI-GENERATED 999%\nwhy")
        assert verdict.confidence == 100

    @pytest.mark.parametrize("content", ["", "   \n\t  "])
    def test_empty_reply(self, content):
        with pytest.raises(LLMResponseError) as exc_info:
            parse_detection_response(content)
        assert "Missing classification" not in exc_info.value.message


class TestDetails:
    """Test rationale extraction."""

    def test_placeholder_when_no_rationale(self):
        verdict = parse_detection_response("HUMAN-WRITTEN 40%")
        assert verdict.details == DETAILS_PLACEHOLDER

    def test_placeholder_when_rationale_blank(self):
        verdict = parse_detection_response("HUMAN-WRITTEN 40%\n   \n\n")
        assert verdict.details == "Analysis details not provided"

    def test_remainder_never_fails(self):
        verdict = parse_detection_response("AI-GENERATED 50%\n{{not json}} HUMAN-WRITTEN 10% \x00 ✓")
        assert "{{not json}}" in verdict.details
