"""
Data ingestion module for FlightMap.

Handles polling the AviationStack API and pushing formatted flights into
the shared view.
"""

from flightmap.ingestion.aviationstack_client import AviationStackClient
from flightmap.ingestion.pipeline import RefreshPipeline, CycleResult

__all__ = ['AviationStackClient', 'RefreshPipeline', 'CycleResult']
