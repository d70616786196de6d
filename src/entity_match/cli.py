from __future__ import annotations

import argparse
import csv
import json
import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from entity_match.config import EngineConfig, load_config
from entity_match.datasets import SCHEMAS, SUPPLIER_COLUMNS, SUPPLIER_SCHEMA, ReferenceDatasetGenerator
from entity_match.engine import DuplicateScorer, FuzzySearchRanker, UsageTracker
from entity_match.errors import EntityMatchError
from entity_match.models import ComparableRecord, MatchResult, PartialRecord, UsageRecord
from entity_match.schema import RecordSchema
from entity_match.stores import JsonFileUsageStore

logger = logging.getLogger(__name__)

_CANDIDATE_FIELDS = ("name", "email", "phone", "website")


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return

    try:
        config = load_config(args.config)
        args.handler(args, config)
    except EntityMatchError as exc:
        parser.exit(1, f"{parser.prog}: error: {exc}\n")


def run_duplicates(args: argparse.Namespace, config: EngineConfig) -> None:
    candidate = _parse_candidate(args.candidate, args.candidate_file)
    existing = _read_records_csv(args.existing_csv, SCHEMAS[args.schema])
    matches = DuplicateScorer(config.duplicates).find_duplicates(candidate, existing)
    _print_json([_match_payload(match) for match in matches])


def run_search(args: argparse.Namespace, config: EngineConfig) -> None:
    usage = _tracker(args.usage_store, config).load() if args.usage_store else []
    ranker = FuzzySearchRanker(config.ranking)
    schema = SCHEMAS[args.schema or ("customer" if args.structured else "product")]

    if args.structured:
        records = _read_records_csv(args.items_csv, schema)
        results = ranker.rank_structured_scored(args.query, records, usage, args.limit)
        payload = [
            {"id": r.item.record_id, "name": r.item.name, "score": round(r.score, 4)} for r in results
        ]
    else:
        items = [item for item in map(schema.to_item, _read_rows(args.items_csv)) if item is not None]
        results = ranker.rank_scored(args.query, items, usage, args.limit)
        payload = [
            {"id": r.item.item_id, "text": r.item.text, "kind": r.item.kind.value, "score": round(r.score, 4)}
            for r in results
        ]
    _print_json(payload)


def run_record_usage(args: argparse.Namespace, config: EngineConfig) -> None:
    now = args.now if args.now is not None else _now_millis()
    records = _tracker(args.usage_store, config).record(args.entity_id, now)
    _print_json([record.to_dict() for record in records])


def run_usage(args: argparse.Namespace, config: EngineConfig) -> None:
    tracker = _tracker(args.usage_store, config)
    records: list[UsageRecord]
    if args.view == "recent":
        now = args.now if args.now is not None else _now_millis()
        records = tracker.recent(now, limit=args.limit)
    else:
        records = tracker.favorites(limit=args.limit)
    _print_json([record.to_dict() for record in records])


def run_test(args: argparse.Namespace, config: EngineConfig) -> None:
    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    dataset = ReferenceDatasetGenerator(seed=args.seed).generate(
        size=args.size,
        duplicate_rate=args.duplicate_rate,
    )
    dataset_path = output_dir / "dataset.csv"
    _write_rows_csv(dataset_path, dataset.rows, SUPPLIER_COLUMNS)

    records = [r for r in map(SUPPLIER_SCHEMA.to_record, dataset.rows) if r is not None]
    scorer = DuplicateScorer(config.duplicates)

    found = 0
    flagged_pairs = 0
    report: list[dict[str, Any]] = []
    for record in records:
        source_id = dataset.duplicate_of.get(record.record_id)
        if source_id is None:
            continue
        others = [other for other in records if other.record_id != record.record_id]
        matches = scorer.find_duplicates(_as_candidate(record), others)
        flagged_pairs += len(matches)
        matched_ids = [match.record.record_id for match in matches]
        if source_id in matched_ids:
            found += 1
        report.append(
            {
                "record_id": record.record_id,
                "duplicate_of": source_id,
                "matches": [_match_payload(match) for match in matches],
            }
        )

    duplicate_count = len(dataset.duplicate_of)
    summary = {
        "record_count": len(records),
        "duplicate_count": duplicate_count,
        "duplicates_found": found,
        "recall": round(found / duplicate_count, 4) if duplicate_count else 0.0,
        "flagged_pair_count": flagged_pairs,
        "dataset_path": str(dataset_path),
    }
    _write_json(output_dir / "matches.json", report)
    _write_json(output_dir / "summary.json", summary)

    print(f"Dataset: {dataset_path}")
    print(f"Summary: {output_dir / 'summary.json'}")
    print("---")
    for key in ("record_count", "duplicate_count", "duplicates_found", "recall", "flagged_pair_count"):
        print(f"{key}={summary[key]}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="entity-match", description="Fuzzy entity matching CLI")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--config", type=Path, default=None, help="JSON file with weight overrides")
    subparsers = parser.add_subparsers(dest="command")

    dup_parser = subparsers.add_parser("duplicates", help="Find existing records similar to a new one")
    candidate = dup_parser.add_mutually_exclusive_group(required=True)
    candidate.add_argument("--candidate", type=str, help="JSON object with name/email/phone/website")
    candidate.add_argument("--candidate-file", type=Path)
    dup_parser.add_argument("--existing-csv", type=Path, required=True)
    dup_parser.add_argument("--schema", choices=["supplier", "customer"], default="supplier")
    dup_parser.set_defaults(handler=run_duplicates)

    search_parser = subparsers.add_parser("search", help="Rank items or entities against a query")
    search_parser.add_argument("query", nargs="?", default="")
    search_parser.add_argument("--items-csv", type=Path, required=True)
    search_parser.add_argument("--structured", action="store_true", help="Score name, phone and email")
    search_parser.add_argument("--schema", choices=sorted(SCHEMAS), default=None)
    search_parser.add_argument("--usage-store", type=Path, default=None)
    search_parser.add_argument("--limit", type=int, default=None)
    search_parser.set_defaults(handler=run_search)

    record_parser = subparsers.add_parser("record-usage", help="Record one selection of an entity")
    record_parser.add_argument("entity_id")
    record_parser.add_argument("--usage-store", type=Path, required=True)
    record_parser.add_argument("--now", type=int, default=None, help="Epoch milliseconds")
    record_parser.set_defaults(handler=run_record_usage)

    usage_parser = subparsers.add_parser("usage", help="Show recent or favorite entities")
    usage_parser.add_argument("view", choices=["recent", "favorites"])
    usage_parser.add_argument("--usage-store", type=Path, required=True)
    usage_parser.add_argument("--now", type=int, default=None, help="Epoch milliseconds")
    usage_parser.add_argument("--limit", type=int, default=None)
    usage_parser.set_defaults(handler=run_usage)

    test_parser = subparsers.add_parser(
        "run-test",
        help="Generate a supplier dataset with known duplicates and report how many are found",
    )
    test_parser.add_argument("--size", type=int, default=300)
    test_parser.add_argument("--duplicate-rate", type=float, default=0.15)
    test_parser.add_argument("--seed", type=int, default=42)
    test_parser.add_argument("--output-dir", type=Path, default=Path("data/cli_output"))
    test_parser.set_defaults(handler=run_test)

    return parser


def _tracker(path: Path, config: EngineConfig) -> UsageTracker:
    return UsageTracker(JsonFileUsageStore(path), policy=config.usage)


def _now_millis() -> int:
    return int(time.time() * 1000)


def _parse_candidate(raw: str | None, path: Path | None) -> PartialRecord:
    if path is not None:
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise EntityMatchError(f"cannot read candidate file {path}: {exc}") from exc
    try:
        payload = json.loads(raw or "{}")
    except json.JSONDecodeError as exc:
        raise EntityMatchError(f"candidate is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise EntityMatchError("candidate must be a JSON object")
    values = {key: str(payload[key]) for key in _CANDIDATE_FIELDS if payload.get(key)}
    return PartialRecord(**values)


def _as_candidate(record: ComparableRecord) -> PartialRecord:
    return PartialRecord(
        name=record.name or None,
        email=record.email,
        phone=record.phone,
        website=record.website,
    )


def _match_payload(match: MatchResult) -> dict[str, Any]:
    return {
        "record_id": match.record.record_id,
        "name": match.record.name,
        "score": round(match.score, 4),
        "reasons": list(match.reasons),
    }


def _read_rows(path: Path) -> list[dict[str, str]]:
    with path.open("r", newline="", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


def _read_records_csv(path: Path, schema: RecordSchema) -> list[ComparableRecord]:
    records = [record for record in map(schema.to_record, _read_rows(path)) if record is not None]
    logger.info("Loaded %d records from %s", len(records), path)
    return records


def _write_rows_csv(path: Path, rows: list[dict[str, str]], columns: list[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
