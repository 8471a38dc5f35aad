"""
Export onboarding records

Writes every stored person with their join-date history to CSV or JSON.
Only DATABASE_URL is needed; the TCS iON credentials are not used.
"""

import argparse
import json
import logging
import sys

import pandas as pd

from database.adapters.postgres_adapter import PERSON_TABLE, PostgresAdapter, create_postgres_adapter
from database.exceptions import StoreUnavailableError
from scripts.onboarding.common import (
    add_logging_arguments,
    handle_keyboard_interrupt,
    setup_logging,
)

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["id", "name", "joiningDate", "latestJoiningDate", "cohortCount"]


def build_export_dataframe(store: PostgresAdapter) -> pd.DataFrame:
    """
    Load person records into a flat DataFrame.

    The history is kept as a list in ``joiningDate``; ``latestJoiningDate`` is
    its first element and ``cohortCount`` its length.
    """
    df = store.query_to_dataframe(
        f"SELECT person_id, name, joining_dates FROM {PERSON_TABLE} ORDER BY person_id"
    )
    if df.empty:
        return pd.DataFrame(columns=EXPORT_COLUMNS)

    df["joiningDate"] = df["joining_dates"].apply(lambda raw: json.loads(raw) if raw else [])
    # object dtype keeps None for an empty history instead of NaN
    df["latestJoiningDate"] = pd.Series(
        [dates[0] if dates else None for dates in df["joiningDate"]],
        index=df.index,
        dtype=object,
    )
    df["cohortCount"] = df["joiningDate"].apply(len)
    df = df.rename(columns={"person_id": "id"})
    df["name"] = df["name"].fillna("")
    return df[EXPORT_COLUMNS]


def write_export(df: pd.DataFrame, output_path: str, output_format: str) -> None:
    if output_format == "json":
        df.to_json(output_path, orient="records", indent=2)
    else:
        csv_df = df.copy()
        csv_df["joiningDate"] = csv_df["joiningDate"].apply(lambda dates: "; ".join(dates))
        csv_df.to_csv(output_path, index=False)


@handle_keyboard_interrupt("Export interrupted by user")
def main():
    """Main entry point for exporting onboarding records."""
    parser = argparse.ArgumentParser(description="Export onboarding records to CSV or JSON")
    parser.add_argument("output", help="Output file path")
    parser.add_argument(
        "--format", choices=["csv", "json"], default="csv", help="Output format (default: csv)"
    )
    add_logging_arguments(parser, "export_onboarding_records.log")
    args = parser.parse_args()

    setup_logging(args.log_level, args.log)

    try:
        store = create_postgres_adapter()
    except (ValueError, StoreUnavailableError) as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        df = build_export_dataframe(store)
        write_export(df, args.output, args.format)
    finally:
        store.close()

    logger.info(f"Exported {len(df)} records to {args.output}")


if __name__ == "__main__":
    main()
