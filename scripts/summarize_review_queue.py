"""Summarize near-miss review queue JSONL records.

Usage:
  python scripts/summarize_review_queue.py --input /tmp/bean-match-review.jsonl
"""

from __future__ import annotations

import argparse
import json
from collections import defaultdict
from pathlib import Path


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize review queue records")
    parser.add_argument("--input", required=True, help="Path to review queue JSONL file")
    parser.add_argument("--top", type=int, default=50, help="Top pairs to show (default: 50)")
    parser.add_argument(
        "--format",
        choices=["json", "table"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument("--output", help="Optional output file path")
    return parser.parse_args()


def load_records(path: Path) -> list[dict]:
    if not path.exists():
        return []

    records: list[dict] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return records


def summarize(records: list[dict]) -> list[dict]:
    """Group near misses by (roaster, incoming name, closest catalog coffee)."""
    grouped: dict[tuple[str, str, str], dict] = defaultdict(
        lambda: {"count": 0, "max_score": 0.0, "candidate_id": None, "latest_ts": None}
    )

    for record in records:
        target = record.get("target") or {}
        roaster = str(record.get("roaster_name", ""))
        target_name = str(target.get("name", ""))
        candidate = str(record.get("candidate_name", ""))
        if not target_name or not candidate:
            continue

        entry = grouped[(roaster, target_name, candidate)]
        entry["count"] += 1
        entry["candidate_id"] = record.get("candidate_id")

        score = record.get("score")
        if isinstance(score, (int, float)):
            entry["max_score"] = max(entry["max_score"], float(score))

        ts = record.get("ts")
        if isinstance(ts, str) and (entry["latest_ts"] is None or ts > entry["latest_ts"]):
            entry["latest_ts"] = ts

    rows = [
        {
            "roaster": roaster,
            "target_name": target_name,
            "candidate_name": candidate,
            "candidate_id": entry["candidate_id"],
            "count": entry["count"],
            "max_score": round(entry["max_score"], 4),
            "latest_ts": entry["latest_ts"],
        }
        for (roaster, target_name, candidate), entry in grouped.items()
    ]
    rows.sort(key=lambda row: (-row["max_score"], -row["count"], row["roaster"], row["target_name"]))
    return rows


def render_table(rows: list[dict], top: int) -> str:
    head = "max_score | count | roaster | incoming | closest | closest_id | latest_ts"
    sep = "--- | --- | --- | --- | --- | --- | ---"
    lines = [head, sep]
    for row in rows[:top]:
        lines.append(
            f"{row['max_score']} | {row['count']} | {row['roaster']} | {row['target_name']} | "
            f"{row['candidate_name']} | {row['candidate_id']} | {row['latest_ts']}"
        )
    return "\n".join(lines)


def main() -> int:
    args = parse_args()
    rows = summarize(load_records(Path(args.input)))

    if args.format == "json":
        output = json.dumps(rows[: args.top], ensure_ascii=False, indent=2)
    else:
        output = render_table(rows, args.top)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
