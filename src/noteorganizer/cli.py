"""Command-line entry point: organize, visualize or classify notes from a file or stdin."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from noteorganizer.config import get_settings
from noteorganizer.models import Diagram, Mode
from noteorganizer.processing.classifier import (
    classify_diagram,
    classify_note,
    classify_tone,
    should_visualize,
)
from noteorganizer.processor import NoteProcessor
from noteorganizer.stores.state import StateStore

logger = logging.getLogger("noteorganizer.cli")


def _log_structured(event: str, **kwargs: Any) -> None:
    """Log a structured JSON event."""
    logger.info(json.dumps({"event": event, **kwargs}))


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _process(args: argparse.Namespace) -> int:
    settings = get_settings()
    text = _read_input(args.source)
    mode = None if args.mode == "auto" else Mode(args.mode)
    processor = NoteProcessor(settings, state_store=StateStore(Path(settings.data_path)))

    start = time.time()
    outcome = processor.process(text, mode=mode, local_only=args.local_only)
    if outcome.result is None:
        logger.error(
            "Input too short to process (minimum %d characters)", settings.min_text_length
        )
        return 1

    _log_structured(
        "processed",
        chars=len(text),
        mode=str(outcome.mode),
        source=outcome.source,
        fallback_reason=outcome.fallback_reason,
        duration_ms=int((time.time() - start) * 1000),
    )
    result = outcome.result
    if isinstance(result, Diagram):
        print(result.dsl, end="")
    elif args.html:
        print(result.html)
    else:
        print(result.markdown, end="")
    return 0


def _analyze(args: argparse.Namespace) -> int:
    text = _read_input(args.source)
    tone = classify_tone(text)
    print(
        json.dumps(
            {
                "note_category": str(classify_note(text)),
                "diagram_kind": str(classify_diagram(text)),
                "should_visualize": should_visualize(text),
                "tone": str(tone.tone),
                "tone_intensity": tone.intensity,
            },
            indent=2,
        )
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="noteorganizer", description="Turn freeform notes into markdown or diagrams"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    process_parser = subparsers.add_parser("process", help="Organize or visualize notes")
    process_parser.add_argument("source", nargs="?", default="-", help="File to read (default: stdin)")
    process_parser.add_argument(
        "--mode",
        choices=["organize", "visualize", "auto"],
        default="auto",
        help="Output mode (default: auto, follows the smart-mode preference)",
    )
    process_parser.add_argument(
        "--local-only", action="store_true", help="Skip the remote model and use local rules"
    )
    process_parser.add_argument("--html", action="store_true", help="Print organized notes as HTML")
    process_parser.set_defaults(handler=_process)

    analyze_parser = subparsers.add_parser("analyze", help="Print how the notes are classified")
    analyze_parser.add_argument("source", nargs="?", default="-", help="File to read (default: stdin)")
    analyze_parser.set_defaults(handler=_analyze)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    if args.source != "-" and not Path(args.source).is_file():
        logger.error("Input file does not exist: %s", args.source)
        return 1
    return int(args.handler(args))
