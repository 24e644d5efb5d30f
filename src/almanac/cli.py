"""Resolve almanac seeds to their terminal category.

Usage:
    almanac day5.txt
    almanac day5.txt --ranges
    almanac almanac.json --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import ValidationError

from almanac.core.errors import AlmanacError
from almanac.engine import ConversionEngine, EngineConfig, MissingTablePolicy, seed_ranges
from almanac.producer import AlmanacDocument, load_almanac, load_almanac_json

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="almanac",
        description="Resolve seeds through the almanac conversion tables.",
    )
    parser.add_argument("path", type=Path, help="Almanac file (text grammar, or JSON with .json suffix)")
    parser.add_argument(
        "--ranges",
        action="store_true",
        help="Treat the seeds line as (start, length) pairs and report the lowest terminal value",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on missing tables, overlapping rules and mislinked tables",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _load(path: Path) -> AlmanacDocument:
    if path.suffix == ".json":
        return load_almanac_json(path)
    return load_almanac(path)


def build_report(document: AlmanacDocument, engine: ConversionEngine, ranges: bool) -> Dict[str, Any]:
    if ranges:
        resolved = engine.resolve_ranges_forward(seed_ranges(document.seeds))
        return {
            "terminal": engine.chain.last.value,
            "ranges": [[r.start, r.length] for r in resolved],
            "lowest": resolved[0].start if resolved else None,
        }

    values = engine.resolve_seeds(document.seeds)
    lowest = min((v.magnitude for v in values), default=None)
    return {
        "terminal": engine.chain.last.value,
        "seeds": [[seed, value.magnitude] for seed, value in zip(document.seeds, values)],
        "lowest": lowest,
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = EngineConfig()
    if args.strict:
        config = EngineConfig(
            missing_table_policy=MissingTablePolicy.RAISE,
            reject_overlapping_rules=True,
            validate_chain_links=True,
        )

    try:
        document = _load(args.path)
        engine = ConversionEngine(document.tables, config=config)
        report = build_report(document, engine, args.ranges)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (AlmanacError, ValidationError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(report, indent=2))
        return 0

    terminal = report["terminal"]
    for seed, magnitude in report.get("seeds", []):
        print(f"seed {seed} -> {terminal} {magnitude}")
    for start, length in report.get("ranges", []):
        print(f"{terminal} range [{start}, {start + length})")
    print(f"lowest {terminal}: {report['lowest']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
