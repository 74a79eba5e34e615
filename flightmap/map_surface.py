"""
Map surface: a base tile layer plus a layer of flight markers.

Markers are kept as plain data and only turned into a folium map when the
page asks for it, so clearing and refilling the layer is cheap and easy
to inspect.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import folium

from flightmap.config import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Marker:
    """A labelled point on the marker layer."""
    latitude: float
    longitude: float
    label: str


class MapSurface:
    """
    Base tile layer and marker layer of the flight map.

    Not thread-safe on its own; FlightView serializes access.
    """

    tiles = 'OpenStreetMap'

    def __init__(
        self,
        center: Optional[Tuple[float, float]] = None,
        zoom: Optional[int] = None,
        icon_url: Optional[str] = None,
    ):
        self.center = center or config.map_center
        self.zoom = zoom if zoom is not None else config.map.zoom
        self.icon_url = icon_url or config.map.marker_icon_url
        self.icon_px = int(config.map.marker_icon_size * config.map.marker_scale)

        self._markers: List[Marker] = []

    @property
    def markers(self) -> List[Marker]:
        """Snapshot of the marker layer, in insertion order."""
        return list(self._markers)

    def clear_markers(self) -> None:
        """Remove every marker from the marker layer."""
        self._markers = []

    def add_marker(self, latitude: float, longitude: float, label: str) -> Marker:
        """Add a marker at (latitude, longitude) with the given label."""
        marker = Marker(latitude=latitude, longitude=longitude, label=label)
        self._markers.append(marker)
        return marker

    def to_folium(self) -> folium.Map:
        """Build a folium map holding the tile layer and current markers."""
        m = folium.Map(
            location=list(self.center),
            zoom_start=self.zoom,
            tiles=None,
        )
        folium.TileLayer(self.tiles).add_to(m)

        flights_layer = folium.FeatureGroup(name='Flights').add_to(m)
        for marker in self._markers:
            folium.Marker(
                location=[marker.latitude, marker.longitude],
                tooltip=marker.label,
                icon=folium.CustomIcon(
                    self.icon_url,
                    icon_size=(self.icon_px, self.icon_px),
                ),
            ).add_to(flights_layer)

        return m

    def render_html(self) -> str:
        """Standalone HTML document for the map."""
        html = self.to_folium().get_root().render()
        logger.debug(f'Rendered map with {len(self._markers)} markers')
        return html
