"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights - Flights currently on the map, plus the message box state
- POST /api/flights/refresh - Run one refresh cycle now
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify, current_app

from flightmap.ingestion import CycleResult

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List the flights currently rendered on the map.

    The payload is taken from a single view snapshot, so flights and
    message box always belong to the same cycle.
    """
    start_time = time.perf_counter()

    snapshot = current_app.config['FLIGHT_VIEW'].snapshot()
    result = snapshot.to_dict()

    query_time_ms = (time.perf_counter() - start_time) * 1000
    result['timestamp'] = datetime.now(timezone.utc).isoformat()
    result['query_time_ms'] = round(query_time_ms, 2)

    return jsonify(result)


@flights_bp.route('/refresh', methods=['POST'])
def refresh_flights():
    """
    Run one fetch-format-render cycle synchronously.

    Responses:
    - 200: cycle succeeded
    - 409: a cycle is already in flight, nothing was done
    - 502: the cycle failed; the previous view is kept
    - 503: no refresh pipeline configured
    """
    pipeline = current_app.config.get('REFRESH_PIPELINE')
    if pipeline is None:
        return jsonify({'error': 'Refresh pipeline not configured'}), 503

    result = pipeline.run_cycle()
    view = current_app.config['FLIGHT_VIEW']

    if result == CycleResult.SKIPPED:
        return jsonify({'result': result.value, 'error': 'Refresh already in progress'}), 409

    if result == CycleResult.FAILED:
        return jsonify({
            'result': result.value,
            'message': view.message.to_dict(),
        }), 502

    snapshot = view.snapshot()
    return jsonify({
        'result': result.value,
        'count': len(snapshot.flights),
        'updated_at': snapshot.updated_at.isoformat() if snapshot.updated_at else None,
    })
