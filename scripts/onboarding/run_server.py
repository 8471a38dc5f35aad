"""
Onboarding HTTP server

Serves GET /api/prime-data, which reconciles the requested month against
TCS iON and returns every stored onboarding record.
"""

import argparse
import logging
import sys

from database.exceptions import StoreUnavailableError
from scripts.onboarding.common import (
    add_logging_arguments,
    handle_keyboard_interrupt,
    setup_logging,
)
from services.config import ConfigMissingError, OnboardingConfig
from web.app import create_app_from_config

logger = logging.getLogger(__name__)


@handle_keyboard_interrupt("Server stopped by user")
def main():
    """Main entry point for the onboarding server."""
    parser = argparse.ArgumentParser(
        description="Onboarding Hub - serve reconciled onboarding records over HTTP"
    )
    parser.add_argument("--host", help="Interface to bind (default: HOST env var or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: PORT env var or 3000)")
    add_logging_arguments(parser, "onboarding_server.log")
    args = parser.parse_args()

    setup_logging(args.log_level, args.log)

    try:
        config = OnboardingConfig.load()
    except ConfigMissingError as e:
        logger.error(str(e))
        sys.exit(1)

    host = args.host or config["host"]
    port = args.port or config["port"]

    try:
        app = create_app_from_config(config)
    except StoreUnavailableError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Server is running on http://{host}:{port}")
    app.run(host=host, port=port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
