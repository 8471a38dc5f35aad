"""
Flask application factory for the onboarding endpoint.
"""

import logging
from typing import Any, Dict

from flask import Flask

from database.adapters.postgres_adapter import PostgresAdapter
from services.onboarding_reconciliation_service import OnboardingReconciliationService
from tcsion.facade.tcsion_facade import TCSionFacade
from web.routes import bp, health_bp

logger = logging.getLogger(__name__)


def create_app(
    service: OnboardingReconciliationService,
    store: PostgresAdapter,
    api_key: str,
    allowed_origin: str = '',
) -> Flask:
    """
    Build the Flask app around already-constructed collaborators.

    Args:
        service: Reconciliation service shared by every request
        store: Onboarding store shared by every request
        api_key: Shared secret accepted in the X-API-Key header
        allowed_origin: Referer prefix that is trusted without the shared secret

    Returns:
        Flask: The configured application
    """
    app = Flask(__name__)
    app.config['ONBOARDING_API_KEY'] = api_key
    app.config['ALLOWED_ORIGIN'] = allowed_origin
    app.extensions['onboarding'] = {'service': service, 'store': store}

    app.register_blueprint(bp, url_prefix='/api')
    app.register_blueprint(health_bp)
    return app


def create_app_from_config(config: Dict[str, Any]) -> Flask:
    """
    Build the store, the TCS iON facade and the service from a validated config.

    Args:
        config: Configuration from ``OnboardingConfig.load()``
    """
    store = PostgresAdapter(
        database_url=config['database_url'],
        pool_size=config['db_pool_size'],
        max_overflow=config['db_max_overflow'],
    )
    store.ensure_schema()

    facade = TCSionFacade(
        api_key=config['api_key'],
        session_cookie=config['session_cookie'],
        base_url=config['tcsion_base_url'],
        timeout=config['tcsion_timeout'],
        max_pages=config['member_page_limit'],
    )
    service = OnboardingReconciliationService(facade, store)

    logger.info(f"Onboarding app ready (origin allow-list: {config['allowed_origin']})")
    return create_app(service, store, config['api_key'], config['allowed_origin'])
