"""
Configuration management for FlightMap.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAP_CENTER = (51.5072, -0.1276)  # London


def _parse_location(value: str) -> Optional[Tuple[float, float]]:
    """Parse 'lat,lon' string into tuple, or None if empty/invalid."""
    if not value:
        return None
    try:
        lat, lon = value.split(',')
        return (float(lat.strip()), float(lon.strip()))
    except (ValueError, AttributeError):
        return None


@dataclass(frozen=True)
class AviationStackConfig:
    """AviationStack API configuration for live flight data."""
    api_key: Optional[str] = os.getenv('AVIATION_API_KEY') or None
    base_url: str = os.getenv('AVIATIONSTACK_BASE_URL', 'http://api.aviationstack.com/v1')
    flight_status: str = os.getenv('FLIGHT_STATUS', 'active')
    limit: int = int(os.getenv('FLIGHT_LIMIT', '100'))
    timeout_seconds: float = float(os.getenv('REQUEST_TIMEOUT_SECONDS', '30'))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class SchedulerConfig:
    """Refresh cycle settings."""
    # 8 hours between fetches keeps the free tier quota intact
    interval_seconds: float = float(os.getenv('REFRESH_INTERVAL_SECONDS', str(8 * 60 * 60)))


@dataclass(frozen=True)
class MapConfig:
    """Initial map view and marker styling."""
    zoom: int = int(os.getenv('MAP_ZOOM', '3'))
    marker_icon_url: str = 'https://img.icons8.com/ios-filled/50/000000/airplane-take-off.png'
    marker_icon_size: int = 50
    marker_scale: float = 0.5


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    aviationstack: AviationStackConfig
    scheduler: SchedulerConfig
    map: MapConfig

    map_center: Tuple[float, float]

    # Flask settings
    secret_key: str
    debug: bool
    port: int


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        aviationstack=AviationStackConfig(),
        scheduler=SchedulerConfig(),
        map=MapConfig(),
        map_center=_parse_location(os.getenv('MAP_CENTER', '')) or DEFAULT_MAP_CENTER,
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '5000')),
    )


# Singleton instance
config = load_config()
