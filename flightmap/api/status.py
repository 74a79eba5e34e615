"""
Status API endpoint.

Provides:
- GET /api/status - Refresh scheduler status and configuration summary
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, jsonify, current_app

from flightmap.config import config

logger = logging.getLogger(__name__)

status_bp = Blueprint('status', __name__, url_prefix='/api/status')


@status_bp.route('', methods=['GET'])
def get_status():
    """
    Get refresh health and configuration.

    Status is 'healthy' while the scheduler runs and the last cycle did
    not fail, 'degraded' otherwise.
    """
    pipeline = current_app.config.get('REFRESH_PIPELINE')
    pipeline_stats = pipeline.stats if pipeline else {'running': False}

    message = current_app.config['FLIGHT_VIEW'].message
    healthy = pipeline_stats.get('running') and not message.visible

    return jsonify({
        'status': 'healthy' if healthy else 'degraded',
        'refresh': pipeline_stats,
        'config': {
            'api_configured': config.aviationstack.is_configured,
            'flight_status': config.aviationstack.flight_status,
            'limit': config.aviationstack.limit,
            'interval_seconds': config.scheduler.interval_seconds,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })
