"""
FlightMap Package.

Live flight map built with Flask, requests and folium.

Modules:
    api/         REST endpoints for the current flight view and scheduler status
    models/      Flight records as received and their display-ready form
    ingestion/   AviationStack client and the scheduled refresh pipeline
    formatting   Pure filter/format step from records to displayable flights
    map_surface  Tile layer + marker layer, rendered with folium
    view         Shared view state (map, details panel, message box)
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
