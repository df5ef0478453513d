"""Command line front end for jdiff."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from .documents import load_document, write_outputs
from .engine import DiffEngine
from .exceptions import JdiffError
from .models import EngineConfig, DiffReport

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jdiff",
        description="Split two JSON documents into equal, a-to-b and b-to-a trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Writes <output_prefix>_eq.json, <output_prefix>_diff_ab.json and
<output_prefix>_diff_ba.json.

Examples:
  jdiff user1.json user2.json out/users
  jdiff a.json b.json out/run -c jdiff.yaml -r out/report.json
        """
    )

    parser.add_argument("input_a", help="Path to the first JSON document")
    parser.add_argument("input_b", help="Path to the second JSON document")
    parser.add_argument("output_prefix", help="Prefix of the three output files")

    parser.add_argument("-c", "--config", help="Path to YAML/JSON engine configuration")
    parser.add_argument("-r", "--report", help="Path to output JSON report file")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    return parser


def print_summary(report: DiffReport):
    summary = report.summary
    status = "EQUAL" if report.is_equal else "DIFFERENT"
    print(f"{status}: {summary.fields_checked} field(s) checked")
    print(f"  Unchanged: {summary.unchanged}")
    print(f"  Changed: {summary.changed}")
    if summary.type_changed:
        print(f"  Type changed: {summary.type_changed}")
    print(f"  Removed: {summary.removed}")
    print(f"  Added: {summary.added}")


def run(args: argparse.Namespace) -> int:
    config = EngineConfig.from_file(args.config) if args.config else EngineConfig()
    logging.getLogger().setLevel(config.log_level.value)

    left = load_document(args.input_a)
    right = load_document(args.input_b)

    result = DiffEngine(config).compare(left, right)
    if not isinstance(result, DiffReport):
        print(f"Error: {result.error['message']}", file=sys.stderr)
        return 1

    paths = write_outputs(result.result, args.output_prefix, config.indent)

    if args.report:
        try:
            with open(args.report, 'w', encoding='utf-8') as f:
                json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        except (OSError, RecursionError) as e:
            print(f"Error: cannot write report {args.report}: {e}", file=sys.stderr)
            return 1

    if not args.quiet:
        print_summary(result)
        for path in paths:
            print(f"Wrote: {path}")
        if args.report:
            print(f"Report saved to: {args.report}")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        return run(args)
    except JdiffError as e:
        logger.debug("jdiff failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
