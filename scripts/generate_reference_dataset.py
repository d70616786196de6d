from __future__ import annotations

import argparse
import csv
from pathlib import Path

from entity_match.datasets import SUPPLIER_COLUMNS, ReferenceDatasetGenerator


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic supplier dataset")
    parser.add_argument("--size", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--duplicate-rate", type=float, default=0.15)
    parser.add_argument("--output", type=Path, default=Path("data/reference_suppliers.csv"))
    args = parser.parse_args()

    dataset = ReferenceDatasetGenerator(seed=args.seed).generate(
        size=args.size,
        duplicate_rate=args.duplicate_rate,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=[*SUPPLIER_COLUMNS, "duplicate_of"])
        writer.writeheader()
        for row in dataset.rows:
            writer.writerow({**row, "duplicate_of": dataset.duplicate_of.get(row["id"], "")})


if __name__ == "__main__":
    main()
