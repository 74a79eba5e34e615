"""
Flight models - AviationStack records and their display-ready form.

AviationStack flight object (fields used here):
    flight.iata / flight.icao       - Flight identifiers
    airline.name                    - Operating airline
    departure.iata / arrival.iata   - Route endpoints
    flight_status                   - scheduled, active, landed, ...
    live                            - Live position block, null when the
                                      flight is not being tracked:
        latitude, longitude         - WGS84 degrees
        altitude                    - Meters
        direction                   - Heading in degrees
        speed_horizontal            - km/h
        is_ground                   - Boolean
        updated                     - ISO timestamp of the fix

Every field may be missing or null.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Nested object by key, treating null and non-objects as empty."""
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse datetime string from API."""
    if not dt_str:
        return None
    try:
        # AviationStack uses ISO format
        return datetime.fromisoformat(dt_str.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        return None


@dataclass(frozen=True)
class LivePosition:
    """Real-time position block of a tracked flight."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[float] = None
    direction: Optional[float] = None
    speed_horizontal: Optional[float] = None
    is_ground: Optional[bool] = None
    updated: Optional[datetime] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'LivePosition':
        return cls(
            latitude=raw.get('latitude'),
            longitude=raw.get('longitude'),
            altitude=raw.get('altitude'),
            direction=raw.get('direction'),
            speed_horizontal=raw.get('speed_horizontal'),
            is_ground=raw.get('is_ground'),
            updated=_parse_datetime(raw.get('updated')),
        )

    def has_position(self) -> bool:
        """Check if this block carries a usable coordinate."""
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class FlightRecord:
    """
    One flight as received from AviationStack.

    Normalizes the nested JSON into a typed dataclass without inventing
    values: anything the API left out stays None.
    """
    flight_iata: Optional[str] = None
    flight_icao: Optional[str] = None
    airline_name: Optional[str] = None
    flight_status: Optional[str] = None
    departure_iata: Optional[str] = None
    arrival_iata: Optional[str] = None
    live: Optional[LivePosition] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'FlightRecord':
        """Parse an AviationStack flight object."""
        flight = _section(raw, 'flight')
        live = raw.get('live')

        return cls(
            flight_iata=flight.get('iata'),
            flight_icao=flight.get('icao'),
            airline_name=_section(raw, 'airline').get('name'),
            flight_status=raw.get('flight_status'),
            departure_iata=_section(raw, 'departure').get('iata'),
            arrival_iata=_section(raw, 'arrival').get('iata'),
            live=LivePosition.from_dict(live) if isinstance(live, dict) else None,
        )

    def has_live_position(self) -> bool:
        return self.live is not None and self.live.has_position()


@dataclass(frozen=True)
class DisplayableFlight:
    """
    Display-ready flight with fallback values already substituted.

    position holds the exact coordinate for the map marker; latitude and
    longitude are the rounded values shown in the details panel.
    """
    callsign: str
    airline: str
    position: Tuple[float, float]
    latitude: float
    longitude: float
    altitude: str
    speed: str
    direction: str
    status: str = 'N/A'
    route: str = 'N/A'
    on_ground: Optional[bool] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'callsign': self.callsign,
            'airline': self.airline,
            'position': {
                'latitude': self.position[0],
                'longitude': self.position[1],
            },
            'details': {
                'latitude': f'{self.latitude:.2f}',
                'longitude': f'{self.longitude:.2f}',
                'altitude': self.altitude,
                'speed': self.speed,
                'direction': self.direction,
            },
            'status': self.status,
            'route': self.route,
            'on_ground': self.on_ground,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
