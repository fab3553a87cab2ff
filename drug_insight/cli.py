"""
Command-line analyzer

Usage:
  drug-insight article.pdf notes.txt
  cat article.txt | drug-insight --json
  drug-insight --sample "Hypertension follow-up"
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .analyzer import analyze, validate_input
from .demo import SAMPLE_ARTICLES, generate_demo_result, get_sample_article
from .exceptions import DrugInsightError, EmptyInputError
from .reference_data import get_default_tables, load_reference_tables
from .utils import format_results_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EMPTY_INPUT = 2
EXIT_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drug-insight",
        description="Find drug mentions, interactions and side effects in medical text"
    )
    parser.add_argument("files", nargs="*", help="Text, PDF or image files to analyze (default: stdin)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--tables", metavar="DIR", help="Directory with reference CSV tables")
    parser.add_argument("--sample", choices=sorted(SAMPLE_ARTICLES), help="Analyze a built-in sample article")
    parser.add_argument("--demo", action="store_true", help="Print synthetic demo results instead of analyzing")
    parser.add_argument("--seed", type=int, help="Random seed for --demo")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show pipeline logs")
    return parser


def read_source(path: str) -> str:
    # Imported here so plain-text use does not need the OCR stack loaded
    from .extraction import extract_text

    file_path = Path(path)
    try:
        file_bytes = file_path.read_bytes()
    except OSError as e:
        raise DrugInsightError(f"File not found or unreadable: {file_path}") from e
    return extract_text(file_bytes, None, file_path.name)


def collect_inputs(args) -> List[tuple]:
    if args.sample:
        return [(f"sample: {args.sample}", get_sample_article(args.sample))]
    if args.files:
        return [(path, read_source(path)) for path in args.files]
    return [("<stdin>", sys.stdin.read())]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.setup_logging("DEBUG" if args.verbose else "WARNING")

    try:
        tables = load_reference_tables(args.tables) if args.tables else get_default_tables()
        inputs = collect_inputs(args)
    except DrugInsightError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_ERROR

    exit_code = EXIT_OK
    reports = []
    for source, text in inputs:
        try:
            validate_input(text)
        except EmptyInputError:
            print(f"⚠️  {source}: no content to analyze", file=sys.stderr)
            exit_code = EXIT_EMPTY_INPUT
            continue

        if args.demo:
            result = generate_demo_result(tables, random.Random(args.seed))
        else:
            result = analyze(text, tables)
        reports.append((source, result))

    if args.json:
        payload = [{"source": source, **result.to_dict()} for source, result in reports]
        print(json.dumps(payload if len(payload) != 1 else payload[0], indent=2))
    else:
        for source, result in reports:
            if len(reports) > 1:
                print(f"=== {source} ===")
            print(format_results_text(result))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
