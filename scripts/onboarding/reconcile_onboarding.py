"""
One-shot onboarding reconciliation

Runs a single reconciliation for a month outside the HTTP server, for
backfills and troubleshooting. Use --dry-run to see what would change.
"""

import argparse
import json
import logging
import sys

from database.adapters.postgres_adapter import PostgresAdapter
from database.exceptions import StoreUnavailableError
from scripts.onboarding.common import (
    add_logging_arguments,
    handle_keyboard_interrupt,
    setup_logging,
)
from services.config import ConfigMissingError, OnboardingConfig
from services.onboarding_reconciliation_service import OnboardingReconciliationService
from tcsion.facade.tcsion_facade import TCSionFacade

logger = logging.getLogger(__name__)


@handle_keyboard_interrupt("Reconciliation interrupted by user")
def main():
    """Main entry point for one-shot reconciliation."""
    parser = argparse.ArgumentParser(
        description="Reconcile onboarding records with TCS iON communities for one month"
    )
    parser.add_argument("--month", required=True, help="Period name sent to the community list (e.g. June)")
    parser.add_argument("--sec-key", help="Optional mtop_sec_key forwarded to the community list")
    parser.add_argument(
        "--dry-run", action="store_true", help="Simulate the run without making changes"
    )
    add_logging_arguments(parser, "reconcile_onboarding.log")
    args = parser.parse_args()

    setup_logging(args.log_level, args.log)

    if args.dry_run:
        logger.info("*** DRY RUN MODE - No changes will be made ***")

    try:
        config = OnboardingConfig.load()
    except ConfigMissingError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("Initializing database connection...")
    try:
        store = PostgresAdapter(
            database_url=config["database_url"],
            pool_size=config["db_pool_size"],
            max_overflow=config["db_max_overflow"],
        )
    except StoreUnavailableError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        store.ensure_schema()

        logger.info("Initializing TCS iON facade...")
        facade = TCSionFacade(
            api_key=config["api_key"],
            session_cookie=config["session_cookie"],
            base_url=config["tcsion_base_url"],
            timeout=config["tcsion_timeout"],
            max_pages=config["member_page_limit"],
        )

        service = OnboardingReconciliationService(facade, store, dry_run=args.dry_run)
        stats = service.reconcile(args.month, args.sec_key)
    finally:
        store.close()

    print(json.dumps(stats, indent=2, default=str))
    if stats["aborted"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
