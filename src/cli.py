"""Command-line interface: turn messy brain dumps into structured actions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from src.config import settings
from src.enhancement.enhancer import EnhancementError
from src.extraction.extractor import process_dump
from src.extraction.formatting import format_as_markdown, summarize
from src.extraction.models import ExtractionResult, entry_text
from src.extraction.pipeline import enhance_result
from src.pipeline_config import EnhancementProvider, PipelineConfig

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


def _read_input(file: str | None) -> str | None:
    """Read text from ``file`` or, if not given, from stdin. None if the file is missing."""
    if file:
        path = Path(file)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")
    return sys.stdin.read()


def _render(result: ExtractionResult, as_json: bool) -> str:
    if as_json:
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    return format_as_markdown(result)


def cmd_process(args: argparse.Namespace) -> int:
    """Process a brain dump from stdin or a file."""
    text = _read_input(args.file)
    if text is None:
        print(f"File not found: {args.file}", file=sys.stderr)
        return 1
    if not text.strip():
        print("No input provided", file=sys.stderr)
        return 1

    result = process_dump(text)

    if args.enhance:
        config = PipelineConfig(
            enhance=True,
            provider=EnhancementProvider(args.provider),
            model=args.model,
        )
        try:
            result = enhance_result(result, config)
        except EnhancementError as exc:
            # Pattern-only result is still valid; report and carry on.
            logger.warning("Enhancement skipped, using pattern extraction only: %s", exc)

    output = _render(result, args.json)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Written to {args.output}")
        print(summarize(result))
    else:
        print(output)
    return 0


def cmd_quick(args: argparse.Namespace) -> int:
    """Quickly process text given on the command line."""
    result = process_dump(" ".join(args.text))

    print(f"\n{summarize(result)}\n")

    if result.actions:
        print("Actions:")
        for action in result.actions:
            print(f"  - [ ] {entry_text(action)}")
    if result.people:
        print("People:", ", ".join(result.people))
    if result.dates:
        print("Dates:", ", ".join(result.dates))
    if result.decisions:
        print("Decisions needed:", ", ".join(result.decisions))
    if result.questions:
        print("Questions:", ", ".join(result.questions))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("src.api.main:app", host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="braindump",
        description="Turn messy brain dumps into structured actions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser("process", help="Process a brain dump from stdin or file")
    process.add_argument("-f", "--file", help="Read from file instead of stdin")
    process.add_argument("-o", "--output", help="Write output to file")
    process.add_argument("--json", action="store_true", help="Output as JSON instead of markdown")
    process.add_argument("--enhance", action="store_true", help="Augment results with an LLM")
    process.add_argument(
        "--provider",
        choices=[p.value for p in EnhancementProvider],
        default=settings.enhancement_provider.value,
        help="LLM provider used with --enhance",
    )
    process.add_argument("--model", default=None, help="Override the provider's default model")
    process.set_defaults(func=cmd_process)

    quick = subparsers.add_parser("quick", help="Quickly process text from command line")
    quick.add_argument("text", nargs="+")
    quick.set_defaults(func=cmd_quick)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
