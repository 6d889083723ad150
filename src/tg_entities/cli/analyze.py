"""
Command-line interface for entity extraction.

Usage:
    # Text as argument
    tg-entities "John Smith spoke at the conference"

    # From a file or stdin
    tg-entities --file post.txt
    echo "ООО «Ромашка» открыла офис" | tg-entities

    # Provider / model override
    tg-entities "..." --provider anthropic --model claude-3-5-haiku-latest

    # Regex fallback only (no API calls)
    tg-entities "..." --fallback-only
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from tg_entities.config import OverrideConfig, settings
from tg_entities.extraction import (
    EntityAnalyzer,
    EntityDetection,
    extract_entities_fallback,
)
from tg_entities.extraction.providers import MODEL_CONFIG_KEYS, resolve_provider
from tg_entities.logging_config import setup_logging


logger = structlog.get_logger(__name__)


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def build_config(provider: Optional[str], model: Optional[str]) -> OverrideConfig:
    """
    Layer CLI overrides over application settings.

    --model applies to whichever provider ends up selected.
    """
    overrides = {"LLM_PROVIDER": provider}
    if model:
        selected = resolve_provider(OverrideConfig(overrides, settings))
        overrides[MODEL_CONFIG_KEYS[selected]] = model
    return OverrideConfig(overrides, settings)


def read_input_text(args: argparse.Namespace) -> str:
    """Resolve input text from positional args, --file or stdin."""
    if args.text:
        return " ".join(args.text)
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


async def run_analysis(
    text: str,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    fallback_only: bool = False,
) -> List[EntityDetection]:
    """
    Run the pipeline for one text.

    Args:
        text: Message text
        provider: Optional LLM_PROVIDER override
        model: Optional model override for the selected provider
        fallback_only: Skip the LLM and use regex patterns only

    Returns:
        Extracted entities
    """
    if fallback_only:
        source = text.strip()
        return extract_entities_fallback(source) if source else []

    analyzer = EntityAnalyzer(config=build_config(provider, model))
    return await analyzer.analyze(text)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tg-entities",
        description="Extract named entities (person, organization, location, event, sports club) from a message.",
    )
    parser.add_argument("text", nargs="*", help="Message text (default: read --file or stdin)")
    parser.add_argument("--file", "-f", help="Read message text from file")
    parser.add_argument(
        "--provider",
        help="LLM provider override (openai, anthropic, deepseek)",
    )
    parser.add_argument("--model", help="Model id override for the selected provider")
    parser.add_argument(
        "--fallback-only",
        action="store_true",
        help="Use regex fallback only (no API calls)",
    )
    parser.add_argument("--pretty", action="store_true", help="Indent JSON output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug events to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Logs go to stderr so stdout stays valid JSON
    setup_logging(stream=sys.stderr, level="DEBUG" if args.verbose else None)

    if args.text and args.file:
        parser.error("pass text either as arguments or with --file, not both")

    try:
        text = read_input_text(args)
    except OSError as e:
        logger.error("input_read_failed", path=args.file, error=str(e))
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    if not text.strip():
        parser.error("no input text")

    entities = asyncio.run(
        run_analysis(
            text,
            provider=args.provider,
            model=args.model,
            fallback_only=args.fallback_only,
        )
    )

    print(
        json.dumps(
            [entity.to_dict() for entity in entities],
            ensure_ascii=False,
            indent=2 if args.pretty else None,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
