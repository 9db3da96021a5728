"""
Точка входа для интеграционного хоста.

validate-pallets читает JSON из переменной окружения (или файла / stdin)
и печатает результат {status, success, errorMessage} в stdout.
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from edichecks.config import settings
from edichecks.models.schemas import Candidate, MatchRequest
from edichecks.services.pallet_validator import validate_pallet_json
from edichecks.services.reference_matcher import match_reference
from edichecks.services.related_order import set_related_sales_order


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def _load_json_file(parser: argparse.ArgumentParser, path: str):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        parser.error(f"cannot read {path}: {e}")


def _print_match(result) -> int:
    print(json.dumps({
        "candidateId": result.candidate_id,
        "matchType": result.match_type.value,
        "matched": result.matched,
    }))
    return 0 if result.matched else 1


def cmd_validate_pallets(args, parser) -> int:
    if args.file:
        try:
            raw = Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            parser.error(f"cannot read {args.file}: {e}")
    elif args.stdin:
        raw = sys.stdin.read()
    else:
        raw = os.environ.get(args.var or settings.pallet_json_var)

    result = validate_pallet_json(raw).to_result()
    print(result.to_json())
    return 0 if result.success else 1


def cmd_match_reference(args, parser) -> int:
    rows = _load_json_file(parser, args.candidates)
    if not isinstance(rows, list):
        parser.error("candidates file must contain a JSON list")
    try:
        candidates = [Candidate.model_validate(row) for row in rows]
    except ValidationError as e:
        parser.error(f"invalid candidate: {e}")
    request = MatchRequest(target_key=args.target_key, owner_id=args.owner_id)

    return _print_match(match_reference(request, candidates))


def cmd_set_related_order(args, parser) -> int:
    document = _load_json_file(parser, args.document)
    if not isinstance(document, dict):
        parser.error("document file must contain a JSON object")

    return _print_match(set_related_sales_order(document))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="edichecks")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("validate-pallets", help="validate pallet JSON (EDI 856)")
    source = p.add_mutually_exclusive_group()
    source.add_argument("--file", help="read JSON from file")
    source.add_argument("--stdin", action="store_true", help="read JSON from stdin")
    source.add_argument("--var", help="environment variable holding the JSON")
    p.set_defaults(func=cmd_validate_pallets)

    p = sub.add_parser("match-reference", help="match a key against candidate records")
    p.add_argument("--target-key", required=True)
    p.add_argument("--owner-id", required=True)
    p.add_argument("--candidates", required=True, help="JSON list of {id, primary_key, secondary_key}")
    p.set_defaults(func=cmd_match_reference)

    p = sub.add_parser("set-related-order", help="link a PO change document to its sales order")
    p.add_argument("--document", required=True, help="JSON document with id, PO number and customer fields")
    p.set_defaults(func=cmd_set_related_order)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args, parser)


if __name__ == "__main__":
    sys.exit(main())
