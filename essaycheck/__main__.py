import argparse
import json
import logging
import sys

from essaycheck.core.config import settings
from essaycheck.core.exceptions import AnalysisException
from essaycheck.models.feedback import Structured
from essaycheck.services.analysis_client import AnalysisClient
from essaycheck.services.response_normalizer import extract


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _normalize_saved(raw: str) -> int:
    """Normalize a saved raw response offline (no network)."""
    outcome = extract(raw)
    output = {
        "extraction": outcome.kind,
        "strategy": outcome.strategy if isinstance(outcome, Structured) else None,
        "feedback": outcome.summary.model_dump(mode="json", by_alias=True),
    }
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Request structured feedback for an essay")
    group = parser.add_mutually_exclusive_group(required=False)
    group.add_argument("--text", help="Essay text to analyze")
    group.add_argument("--file", help="Path to a file containing the essay text")
    group.add_argument("--raw-file", help="Path to a saved raw generation response to normalize offline")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level (default from LOG_LEVEL)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        if args.raw_file is not None:
            return _normalize_saved(_read(args.raw_file))
        if args.text is not None:
            text = args.text
        elif args.file is not None:
            text = _read(args.file)
        else:
            # Read from stdin
            text = sys.stdin.read()
    except OSError as e:
        print(f"Failed to read file: {e}", file=sys.stderr)
        return 2

    if not text.strip():
        print("No text provided. Use --text, --file, or pipe input.", file=sys.stderr)
        return 2

    try:
        summary = AnalysisClient().analyze(text)
    except AnalysisException as e:
        print(f"{type(e).__name__}: {e.message}", file=sys.stderr)
        return 2

    print(json.dumps(summary.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
