# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run either engine on JSON read from a file, an argument,
#   or stdin. Useful for inspecting an exported sample
#   (mongoexport --jsonArray) or checking what a filter turns into.
#   A source naming an existing file is always read as that
#   file, even when it would also parse as inline JSON.
#
# COMMANDS:
# ---------
# 1. Infer the schema of a sample:
#    python -m mongoshape.cli infer sample.json
#    python -m mongoshape.cli infer sample.json --report users
#    cat sample.json | python -m mongoshape.cli infer -
#
# 2. Normalize a payload:
#    python -m mongoshape.cli normalize '{"_id": "507f1f77bcf86cd799439011"}'
#    python -m mongoshape.cli normalize '{"$set": {"seenAt": "2024-01-01T00:00:00Z"}}' --kind update
#    python -m mongoshape.cli normalize - --policy force < filter.json
#
# EXIT CODES:
# -----------
#   0 on success, 1 when the input is rejected.
#
# ==============================================

import argparse
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import List, Optional

from bson import json_util

from mongoshape.config import get_config
from mongoshape.errors import InvalidShapeError, MongoShapeError
from mongoshape.inference import SchemaAggregator, build_collection_report
from mongoshape.normalization import (
    CoercionPolicy,
    ValueNormalizer,
    normalize_documents,
    normalize_index_specs,
    normalize_pipeline,
    normalize_update,
    parse_filter,
    parse_payload,
)


PAYLOAD_KINDS = {
    "filter": parse_filter,
    "update": normalize_update,
    "pipeline": normalize_pipeline,
    "documents": normalize_documents,
    "indexes": normalize_index_specs,
}


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # inline JSON longer than a file name is allowed to be
        is_file = False
    if is_file:
        return path.read_text(encoding="utf-8")
    return source


def _dump(value) -> str:
    return json_util.dumps(value, json_options=json_util.RELAXED_JSON_OPTIONS, indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mongoshape",
        description="Infer document schemas and normalize MongoDB payloads."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    infer_parser = subparsers.add_parser("infer", help="Infer the schema of a document sample")
    infer_parser.add_argument("source", help="JSON array of documents: a file path, inline JSON, or '-' for stdin (an existing file path wins over inline JSON)")
    infer_parser.add_argument("--report", metavar="COLLECTION", help="Print the full collection report")

    normalize_parser = subparsers.add_parser("normalize", help="Normalize a filter, update or document")
    normalize_parser.add_argument("source", help="JSON payload: a file path, inline JSON, or '-' for stdin (an existing file path wins over inline JSON)")
    normalize_parser.add_argument(
        "--policy",
        choices=[policy.value for policy in CoercionPolicy],
        default=None,
        help="ObjectId conversion mode (default: MONGOSHAPE_OBJECTID_MODE or auto)"
    )
    normalize_parser.add_argument(
        "--kind",
        choices=["value"] + list(PAYLOAD_KINDS),
        default="value",
        help="Which operation the payload belongs to"
    )
    return parser


def _run_infer(args: argparse.Namespace) -> None:
    config = get_config()
    documents = parse_payload(_read_source(args.source))
    if isinstance(documents, Mapping):
        documents = [documents]
    if not isinstance(documents, list):
        raise InvalidShapeError("Sample must be a JSON array of documents")

    if len(documents) > config.inference.sample_size:
        print(
            f"⚠ Sample has {len(documents)} documents, "
            f"configured sample size is {config.inference.sample_size}",
            file=sys.stderr
        )

    aggregator = SchemaAggregator(
        max_examples=config.inference.max_examples,
        max_depth=config.max_nesting_depth
    )
    if args.report:
        print(_dump(build_collection_report(args.report, documents, aggregator=aggregator)))
    else:
        print(aggregator.infer(documents).to_json())


def _run_normalize(args: argparse.Namespace) -> None:
    config = get_config()
    policy = args.policy or config.normalization.default_policy
    text = _read_source(args.source)

    if args.kind == "value":
        normalizer = ValueNormalizer(policy=policy, max_depth=config.max_nesting_depth)
        result = normalizer.normalize_payload(text)
    else:
        result = PAYLOAD_KINDS[args.kind](text, policy)

    print(_dump(result))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        if args.command == "infer":
            _run_infer(args)
        else:
            _run_normalize(args)
    except MongoShapeError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
