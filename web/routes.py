"""
Onboarding REST API
"""

import hmac
import logging
from typing import List

from flask import Blueprint, current_app, jsonify, request

logger = logging.getLogger(__name__)

bp = Blueprint('prime_data', __name__)
health_bp = Blueprint('health', __name__)


def is_authorized() -> bool:
    """
    Allow requests from the dashboard origin, or carrying the shared secret.

    The dashboard is recognised by its Referer; other callers must send the
    API key in the X-API-Key header.
    """
    allowed_origin = current_app.config['ALLOWED_ORIGIN']
    referer = request.headers.get('Referer', '')
    if allowed_origin and referer.startswith(allowed_origin):
        return True

    api_key = current_app.config['ONBOARDING_API_KEY']
    provided = request.headers.get('X-API-Key', '')
    return bool(api_key) and hmac.compare_digest(provided.encode(), api_key.encode())


def validate_query() -> List[dict]:
    """Each supported query parameter may be given at most once."""
    errors = []
    for param in ('month', 'mtop_sec_key'):
        if len(request.args.getlist(param)) > 1:
            errors.append({'param': param, 'msg': 'Must be a single string value'})
    return errors


@bp.route('/prime-data')
def api_prime_data():
    """Reconcile the requested month (if any) and return every person record."""
    errors = validate_query()
    if errors:
        return {'errors': errors}, 400

    if not is_authorized():
        return {'error': 'Unauthorized access'}, 403

    onboarding = current_app.extensions['onboarding']
    month = request.args.get('month')
    sec_key = request.args.get('mtop_sec_key')

    if month:
        try:
            onboarding['service'].reconcile(month, sec_key)
        except Exception:
            logger.exception(f"Reconciliation for '{month}' failed, serving stored data")

    try:
        records = onboarding['store'].find_all_persons()
    except Exception as e:
        logger.error(f"Error fetching data from the store: {e}")
        return {'error': 'Failed to fetch data'}, 500

    if not records:
        return {'message': 'No data found in the database'}, 404

    return jsonify([record.to_dict() for record in records])


@health_bp.route('/health')
def health():
    return {'status': 'ok'}
