"""
Shared view state: map surface, details panel and message box.

The refresh pipeline writes here and the web layer reads from here. All
access goes through FlightView's lock, which makes each render atomic
for readers: they see either the previous cycle or the new one, never a
half-cleared panel.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from flightmap.map_surface import MapSurface, Marker
from flightmap.models import DisplayableFlight

logger = logging.getLogger(__name__)

ERROR_MESSAGE = 'Error loading flight data. Please check your API key or try again later.'


@dataclass(frozen=True)
class DetailCard:
    """One entry in the details panel."""
    title: str
    rows: Tuple[Tuple[str, str], ...]

    @classmethod
    def from_flight(cls, flight: DisplayableFlight) -> 'DetailCard':
        return cls(
            title=flight.callsign,
            rows=(
                ('Airline', flight.airline),
                ('Latitude', f'{flight.latitude:.2f}'),
                ('Longitude', f'{flight.longitude:.2f}'),
                ('Altitude', flight.altitude),
                ('Speed', flight.speed),
                ('Direction', flight.direction),
                ('Route', flight.route),
                ('Status', flight.status),
            ),
        )

    def to_dict(self) -> dict:
        return {'title': self.title, 'rows': [list(row) for row in self.rows]}


@dataclass
class MessageBox:
    """User-visible error region."""
    visible: bool = False
    text: str = ''

    def to_dict(self) -> dict:
        return {'visible': self.visible, 'text': self.text}


@dataclass
class ViewSnapshot:
    """Consistent copy of the view taken under the lock."""
    flights: List[DisplayableFlight]
    cards: List[DetailCard]
    markers: List[Marker]
    message: MessageBox
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'flights': [f.to_dict() for f in self.flights],
            'count': len(self.flights),
            'message': self.message.to_dict(),
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class FlightView:
    """
    Everything the user sees.

    render() is the only place flights reach the map and panel;
    show_error()/hide_error() drive the message box.
    """

    def __init__(self, map_surface: Optional[MapSurface] = None):
        self.map_surface = map_surface or MapSurface()

        self._flights: List[DisplayableFlight] = []
        self._cards: List[DetailCard] = []
        self._message = MessageBox()
        self._updated_at: Optional[datetime] = None
        self._lock = threading.RLock()

    def render(self, flights: Sequence[DisplayableFlight]) -> None:
        """Replace markers and detail cards with the given flights."""
        with self._lock:
            self.map_surface.clear_markers()
            self._cards = []

            for flight in flights:
                self.map_surface.add_marker(
                    flight.position[0],
                    flight.position[1],
                    flight.callsign,
                )
                self._cards.append(DetailCard.from_flight(flight))

            self._flights = list(flights)
            self._updated_at = datetime.now(timezone.utc)

        logger.debug(f'View rendered with {len(flights)} flights')

    def show_error(self, text: str = ERROR_MESSAGE) -> None:
        """Make the message box visible with a fixed text."""
        with self._lock:
            self._message = MessageBox(visible=True, text=text)

    def hide_error(self) -> None:
        with self._lock:
            self._message = MessageBox()

    @property
    def message(self) -> MessageBox:
        with self._lock:
            return MessageBox(self._message.visible, self._message.text)

    def snapshot(self) -> ViewSnapshot:
        with self._lock:
            return ViewSnapshot(
                flights=list(self._flights),
                cards=list(self._cards),
                markers=self.map_surface.markers,
                message=MessageBox(self._message.visible, self._message.text),
                updated_at=self._updated_at,
            )

    def render_map_html(self) -> str:
        with self._lock:
            return self.map_surface.render_html()
