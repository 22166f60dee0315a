#!/usr/bin/env python3
"""CLI for scoring receipt JSON files."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from receipt_points.audit import setup_app_logging
from receipt_points.cache import ExpiringCache
from receipt_points.identifier import DuplicateReceipt, receipt_fingerprint
from receipt_points.processor import process_receipt
from receipt_points.scoring import ScoringError, points_breakdown
from receipt_points.validation import InvalidReceipt, validate_receipt


def _load_receipt(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Receipt file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def cmd_process(args: argparse.Namespace) -> int:
    """Validate, identify and score each file against one shared cache."""
    cache = ExpiringCache()
    results = []
    failed = False
    for path in args.files:
        try:
            result = process_receipt(_load_receipt(path), cache)
            results.append({"file": str(path), "id": result["id"], "points": result["points"]})
        except DuplicateReceipt as e:
            failed = True
            results.append({"file": str(path), "id": e.receipt_id, "error": str(e)})
        except (FileNotFoundError, ValueError) as e:
            failed = True
            results.append({"file": str(path), "error": str(e)})

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        for r in results:
            if "error" in r:
                print(f"{r['file']}: Error: {r['error']}", file=sys.stderr)
            else:
                print(f"{r['file']}: id={r['id']} points={r['points']}")
    return 1 if failed else 0


def cmd_score(args: argparse.Namespace) -> int:
    """Validate and score one file without registering it."""
    try:
        receipt = _load_receipt(args.file)
        validate_receipt(receipt)
        breakdown = points_breakdown(receipt)
    except (FileNotFoundError, InvalidReceipt, ScoringError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    total = sum(breakdown.values())
    if args.json:
        print(json.dumps({"points": total, "breakdown": breakdown}, indent=2))
    else:
        print("=== Points ===")
        for rule, points in breakdown.items():
            print(f"  {rule}: {points}")
        print(f"Total: {total}")
    return 0


def cmd_fingerprint(args: argparse.Namespace) -> int:
    """Validate one file and print its fingerprint without registering it."""
    try:
        receipt = _load_receipt(args.file)
        validate_receipt(receipt)
    except (FileNotFoundError, InvalidReceipt, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(receipt_fingerprint(receipt))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Receipt points: validate, identify and score receipts")
    sub = parser.add_subparsers(dest="command", required=True)

    p_process = sub.add_parser("process", help="Validate, identify and score receipts; repeats are duplicates")
    p_process.add_argument("files", type=Path, nargs="+", help="Receipt JSON files")
    p_process.add_argument("--json", action="store_true", help="Output JSON")
    p_process.set_defaults(func=cmd_process)

    p_score = sub.add_parser("score", help="Validate and score a receipt, showing points per rule")
    p_score.add_argument("file", type=Path, help="Receipt JSON file")
    p_score.add_argument("--json", action="store_true", help="Output JSON")
    p_score.set_defaults(func=cmd_score)

    p_fp = sub.add_parser("fingerprint", help="Print the content fingerprint of a receipt")
    p_fp.add_argument("file", type=Path, help="Receipt JSON file")
    p_fp.set_defaults(func=cmd_fingerprint)

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    setup_app_logging()
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
