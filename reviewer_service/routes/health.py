"""Liveness and readiness endpoints for load balancers and orchestrators."""

from flask import Blueprint, current_app, jsonify
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

# Create blueprint
health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Liveness probe. Does not touch the database."""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat()
    }), 200


@health_bp.route('/health/database', methods=['GET'])
def database_health_check():
    """Readiness probe: runs SELECT 1 against the configured database."""
    database = current_app.database
    try:
        database.ping()
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return jsonify({
            'status': 'unhealthy',
            'database': database.engine.dialect.name,
            'error': str(e)
        }), 503

    return jsonify({
        'status': 'healthy',
        'database': database.engine.dialect.name,
        'timestamp': datetime.now(timezone.utc).isoformat()
    }), 200
