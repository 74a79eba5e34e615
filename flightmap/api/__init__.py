"""
API module for FlightMap.

Provides REST endpoints for:
- The current flight view (flights, details, message box)
- Manual refresh
- Scheduler status
"""

from flightmap.api.flights import flights_bp
from flightmap.api.status import status_bp

__all__ = ['flights_bp', 'status_bp']
