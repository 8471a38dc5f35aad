"""
Seed onboarding records

Reconciliation only enriches people that are already known, so person
records are seeded from a roster file first. The file is a CSV with columns
``id`` and ``name`` and an optional ``joiningDate`` column holding an initial
history separated by ";" (newest first).

Re-seeding an existing person refreshes the name and leaves the history alone.
"""

import argparse
import logging
import sys
from typing import List

import pandas as pd

from database.adapters.postgres_adapter import PostgresAdapter, create_postgres_adapter
from scripts.onboarding.common import (
    add_logging_arguments,
    handle_keyboard_interrupt,
    setup_logging,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["id", "name"]


def load_seed_file(path: str) -> pd.DataFrame:
    """
    Read and clean a roster CSV.

    Raises:
        ValueError: If a required column is missing
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [column.strip() for column in df.columns]

    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Seed file is missing column(s): {', '.join(missing)}")

    df["id"] = df["id"].str.strip()
    df["name"] = df["name"].str.strip()
    blank = df["id"] == ""
    if blank.any():
        logger.warning(f"Skipping {int(blank.sum())} row(s) without an id")
        df = df[~blank]

    return df.drop_duplicates(subset="id", keep="first")


def parse_history(raw: str) -> List[str]:
    labels = []
    for label in (raw or "").split(";"):
        label = label.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def seed_records(store: PostgresAdapter, df: pd.DataFrame) -> int:
    """Upsert every roster row; returns the number of rows written."""
    has_history = "joiningDate" in df.columns
    count = 0
    for row in df.to_dict(orient="records"):
        history = parse_history(row["joiningDate"]) if has_history else []
        store.upsert_person(row["id"], row["name"], history)
        count += 1
    logger.info(f"Seeded {count} person records")
    return count


@handle_keyboard_interrupt("Seeding interrupted by user")
def main():
    """Main entry point for seeding onboarding records."""
    parser = argparse.ArgumentParser(description="Seed onboarding person records from a CSV roster")
    parser.add_argument("roster", help="CSV file with id,name[,joiningDate] columns")
    add_logging_arguments(parser, "seed_onboarding_records.log")
    args = parser.parse_args()

    setup_logging(args.log_level, args.log)

    try:
        df = load_seed_file(args.roster)
        store = create_postgres_adapter()
    except (OSError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        store.ensure_schema()
        seed_records(store, df)
    finally:
        store.close()


if __name__ == "__main__":
    main()
