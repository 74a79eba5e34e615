"""
Flight data models.

FlightRecord mirrors the AviationStack payload; DisplayableFlight is what
the map and details panel show.
"""

from flightmap.models.flight import FlightRecord, LivePosition, DisplayableFlight

__all__ = [
    'FlightRecord',
    'LivePosition',
    'DisplayableFlight',
]
