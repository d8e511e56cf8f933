"""Command-line entry point for AI-authorship detection.

Usage:
    # One file
    authorship-detect sample.jsonl

    # Compare two inputs side by side
    authorship-detect first.jsonl second.jsonl

    # Inline text, JSON output
    authorship-detect --text "Some paragraph..." --json
"""

import argparse
import json
import os
import random
import sys
from dataclasses import replace
from typing import List, Optional, Tuple

from . import __version__
from .config import Config, default_llm_config, load_config
from .detection import AIDetector, ClassificationError
from .ingestion import JSONLError, read_jsonl_text
from .models import DetectionResult
from .utils.logging import setup_logging

MAX_INPUTS = 2
API_KEY_ENV = "OPENROUTER_API_KEY"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authorship-detect",
        description="Classify text as AI-generated or human-written."
    )
    parser.add_argument("files", nargs="*", help="JSONL files (first line's \"text\" field is analyzed)")
    parser.add_argument("--text", "-t", action="append", default=[], help="Text to analyze (repeatable)")
    parser.add_argument("--config", "-c", help="Path to config.json")
    parser.add_argument("--api-key", help=f"OpenRouter API key (default: ${API_KEY_ENV})")
    parser.add_argument("--seed", type=int, help="Seed for the synthetic metrics")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load_inputs(args: argparse.Namespace) -> List[Tuple[str, str]]:
    """Return (label, text) pairs from files and --text options."""
    inputs = []
    for path in args.files:
        inputs.append((path, read_jsonl_text(path)))
    for i, text in enumerate(args.text, start=1):
        inputs.append((f"text #{i}", text))
    return inputs


def _resolve_config(args: argparse.Namespace) -> Config:
    config = load_config(args.config) if args.config else Config()
    api_key = args.api_key or os.environ.get(API_KEY_ENV, "")

    if not config.llm.providers:
        return replace(config, llm=default_llm_config(api_key))

    name = config.llm.provider
    current = config.llm.get_provider_config(name)
    # --api-key always wins; the environment only fills an empty key
    if args.api_key or (api_key and not current.api_key):
        providers = dict(config.llm.providers)
        providers[name] = replace(current, api_key=api_key)
        config = replace(config, llm=replace(config.llm, providers=providers))
    return config


def _print_result(label: str, outcome) -> None:
    print(f"\n=== {label} ===")
    if isinstance(outcome, ClassificationError):
        print(f"Error: {outcome.message}")
        return

    print(f"Verdict:    {outcome.label} ({outcome.confidence}%)")
    print(f"{'Metric':<12} {'Score'}")
    print("-" * 20)
    for name, value in outcome.metrics.to_dict().items():
        print(f"{name:<12} {value:.1%}")
    print()
    print(outcome.details)


def _print_comparison(outcomes: List[Tuple[str, object]]) -> None:
    results = [(label, o) for label, o in outcomes if isinstance(o, DetectionResult)]
    if len(results) != MAX_INPUTS:
        return
    (first_label, first), (second_label, second) = results
    print("\n=== Comparison ===")
    if first.is_ai == second.is_ai:
        print(f"Both inputs classified as {first.label}")
    else:
        ai_label = first_label if first.is_ai else second_label
        print(f"Only {ai_label} classified as AI-GENERATED")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _resolve_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        level="DEBUG" if args.verbose else config.log_level,
        json_format=config.log_json
    )

    try:
        inputs = _load_inputs(args)
    except (JSONLError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not inputs:
        parser.error("provide at least one JSONL file or --text")
    if len(inputs) > MAX_INPUTS:
        parser.error(f"at most {MAX_INPUTS} inputs can be compared")

    try:
        rng = random.Random(args.seed) if args.seed is not None else None
        detector = AIDetector.from_config(config, rng=rng)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    outcomes = detector.analyze_many([text for _, text in inputs])
    labelled = list(zip([label for label, _ in inputs], outcomes))

    if args.json:
        payload = [
            {"input": label, "error": o.message, "kind": o.kind.value}
            if isinstance(o, ClassificationError)
            else {"input": label, **o.to_dict()}
            for label, o in labelled
        ]
        print(json.dumps(payload, indent=2))
    else:
        for label, outcome in labelled:
            _print_result(label, outcome)
        _print_comparison(labelled)

    return 1 if any(isinstance(o, ClassificationError) for o in outcomes) else 0


if __name__ == "__main__":
    sys.exit(main())
