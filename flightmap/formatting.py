"""
Filter and format flight records for display.

Pure functions only: nothing here touches the map or the details panel,
so the whole step can be tested without a view.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from flightmap.models import FlightRecord, DisplayableFlight

logger = logging.getLogger(__name__)

NOT_AVAILABLE = 'N/A'
UNKNOWN_AIRLINE = 'Unknown'


def round_half_up(value: float, decimals: int) -> Decimal:
    """
    Round to a fixed number of decimals, halves away from zero.

    Works on the exact binary value of the float, so 51.125 becomes 51.13
    while 1.005 (stored as 1.00499...) stays 1.00.
    """
    return Decimal(value).quantize(Decimal(10) ** -decimals, rounding=ROUND_HALF_UP)


def _format_measure(value: Optional[float], decimals: int, unit: str) -> str:
    """Format a numeric field with its unit, or N/A when absent."""
    if value is None:
        return NOT_AVAILABLE
    return f'{round_half_up(value, decimals)}{unit}'


def format_altitude(altitude_m: Optional[float]) -> str:
    return _format_measure(altitude_m, 0, ' m')


def format_speed(speed_kmh: Optional[float]) -> str:
    return _format_measure(speed_kmh, 1, ' km/h')


def format_direction(direction_deg: Optional[float]) -> str:
    return _format_measure(direction_deg, 1, '°')


def format_route(departure: Optional[str], arrival: Optional[str]) -> str:
    if not departure and not arrival:
        return NOT_AVAILABLE
    return f'{departure or "?"} → {arrival or "?"}'


def format_flight(record: FlightRecord) -> Optional[DisplayableFlight]:
    """
    Derive the display fields of a single record.

    Returns None for records without a live latitude and longitude.
    """
    if not record.has_live_position():
        return None

    live = record.live
    return DisplayableFlight(
        callsign=record.flight_iata or record.flight_icao or NOT_AVAILABLE,
        airline=record.airline_name or UNKNOWN_AIRLINE,
        position=(live.latitude, live.longitude),
        latitude=float(round_half_up(live.latitude, 2)),
        longitude=float(round_half_up(live.longitude, 2)),
        altitude=format_altitude(live.altitude),
        speed=format_speed(live.speed_horizontal),
        direction=format_direction(live.direction),
        status=record.flight_status or NOT_AVAILABLE,
        route=format_route(record.departure_iata, record.arrival_iata),
        on_ground=live.is_ground,
        updated_at=live.updated,
    )


def format_flights(records: Iterable[FlightRecord]) -> List[DisplayableFlight]:
    """
    Keep records with a live position and format them, preserving order.
    """
    records = list(records)
    flights = []
    for record in records:
        displayable = format_flight(record)
        if displayable is not None:
            flights.append(displayable)

    logger.info(
        f'Total flights: {len(records)}, '
        f'flights with live position: {len(flights)}'
    )
    return flights
