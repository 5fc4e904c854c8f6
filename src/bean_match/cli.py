"""Command-line interface for bean-match."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from bean_match import __version__
from bean_match.exceptions import BeanMatchError, PayloadError
from bean_match.ingestion import IngestionConfig, ingest_bag
from bean_match.matching import (
    MatchingConfig,
    MatchingEngine,
    are_likely_same_by_name,
    name_similarity,
)
from bean_match.schema import CoffeeDescriptor, ExtractedBagInfo

_DESCRIPTORS = TypeAdapter(list[CoffeeDescriptor])


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.handler(args)
    except BeanMatchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bean-match",
        description="Match photographed coffees against an existing catalog",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"bean-match {__version__}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Score two coffee names")
    compare.add_argument("name_a")
    compare.add_argument("name_b")
    compare.add_argument("--threshold", type=float, default=None)
    compare.set_defaults(handler=_run_compare)

    match = subparsers.add_parser("match", help="Find the best catalog match for a coffee")
    match.add_argument("target", help="JSON file with the coffee descriptor to match")
    match.add_argument("candidates", help="JSON file with a list of existing coffee descriptors")
    match.add_argument("--threshold", type=float, default=None)
    match.add_argument("--json", action="store_true", help="Output as JSON")
    match.set_defaults(handler=_run_match)

    ingest = subparsers.add_parser("ingest", help="Store extracted bag info in the catalog")
    ingest.add_argument("payload", help="JSON file with extracted bag info")
    source = ingest.add_mutually_exclusive_group()
    source.add_argument("--catalog", help="JSON catalog snapshot, updated in place")
    source.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL"),
        help="PostgreSQL URL (default: DATABASE_URL env var)",
    )
    ingest.set_defaults(handler=_run_ingest)

    return parser


def _run_compare(args: argparse.Namespace) -> int:
    config = MatchingConfig.from_env()
    threshold = args.threshold if args.threshold is not None else config.name_threshold
    score = name_similarity(args.name_a, args.name_b)
    same = are_likely_same_by_name(args.name_a, args.name_b, threshold=threshold)
    print(f"  {'Score:':<10} {score:.3f}")
    print(f"  {'Same:':<10} {'yes' if same else 'no'}")
    return 0


def _run_match(args: argparse.Namespace) -> int:
    target = _load_json(args.target, CoffeeDescriptor.model_validate)
    candidates = _load_json(args.candidates, _DESCRIPTORS.validate_python)

    engine = MatchingEngine(MatchingConfig.from_env())
    result = engine.find_best_match(target, candidates, threshold=args.threshold)

    if args.json:
        payload = None
        if result is not None:
            payload = {
                "descriptor": result.descriptor.model_dump(exclude_none=True),
                "score": result.score,
            }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif result is None:
        print("  No confident match")
    else:
        print(f"  {'Match:':<10} {result.descriptor.name}")
        print(f"  {'Id:':<10} {result.descriptor.id or '-'}")
        print(f"  {'Score:':<10} {result.score:.3f}")
    return 0


def _run_ingest(args: argparse.Namespace) -> int:
    info = _load_json(args.payload, ExtractedBagInfo.model_validate)

    if args.catalog:
        from bean_match.stores.memory import InMemoryCatalogStore

        catalog_path = Path(args.catalog)
        store = InMemoryCatalogStore.from_json_file(catalog_path) if catalog_path.exists() else InMemoryCatalogStore()
    elif args.database_url:
        from bean_match.stores.postgres import PostgresCatalogStore

        store = PostgresCatalogStore(args.database_url)
    else:
        raise PayloadError("Either --catalog or --database-url (DATABASE_URL) is required")

    result = ingest_bag(
        info,
        store,
        engine=MatchingEngine(MatchingConfig.from_env()),
        config=IngestionConfig.from_env(),
    )

    if args.catalog:
        catalog_path.write_text(json.dumps(store.to_dict(), ensure_ascii=False, indent=2) + "\n", encoding="utf-8")

    fields = [
        ("Roaster", f"{result.roaster.name} ({'new' if result.roaster_created else 'existing'})"),
        ("Coffee", f"{result.coffee.name} ({'new' if result.coffee_created else 'existing'})"),
        ("Score", f"{result.match_score:.3f}" if result.match_score is not None else None),
        ("Bag", result.bag.id),
    ]
    for label, value in fields:
        print(f"  {label + ':':<10} {value or '-'}")
    return 0


def _load_json(path: str, validate):
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return validate(data)
    except OSError as e:
        raise PayloadError(f"Cannot read {path}: {e}") from e
    except (json.JSONDecodeError, ValidationError) as e:
        raise PayloadError(f"Invalid JSON in {path}: {e}") from e


if __name__ == "__main__":
    sys.exit(main())
