"""
Офлайн прогон фильтра полей по сохранённому ответу Google Vision.

Удобно для подбора порогов без обращения к API:

    quote-ocr-filter response.json --confidence-threshold 0.7 --json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from quote_ocr.config import settings
from quote_ocr.services.annotation_parser import parse_page_annotation
from quote_ocr.services.text_filter import filter_page


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quote-ocr-filter",
        description="Run the page margin filter over a saved Vision images:annotate response.",
    )
    p.add_argument(
        "response",
        type=Path,
        help="Path to a saved JSON response of images:annotate.",
    )
    p.add_argument(
        "--confidence-threshold",
        type=float,
        default=None,
        help="Override the block confidence threshold (0..1).",
    )
    p.add_argument(
        "--line-break-as-newline",
        action="store_true",
        help="Keep end-of-line breaks as newlines instead of spaces.",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON.",
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        response = json.loads(args.response.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Cannot read {args.response}: {e}", file=sys.stderr)
        return 2

    if not isinstance(response, dict):
        print(f"{args.response} is not a Vision response object", file=sys.stderr)
        return 2

    overrides = {}
    if args.confidence_threshold is not None:
        overrides["filter_confidence_threshold"] = args.confidence_threshold
    if args.line_break_as_newline:
        overrides["filter_line_break_as_newline"] = True
    config = settings.model_copy(update=overrides).filter_config()

    result = filter_page(parse_page_annotation(response), config)

    if args.json:
        print(
            json.dumps(
                {"text": result.body_text, "page_number": result.page_number},
                ensure_ascii=False,
            )
        )
    else:
        print(result.body_text)
        if result.page_number:
            print(f"\n[page {result.page_number}]")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
