"""
AviationStack API client.

Fetches the current list of flights from the /flights endpoint:

    GET {base_url}/flights?access_key=...&flight_status=active&limit=100

Response envelope:
    {"pagination": {...}, "data": [ <flight object>, ... ]}

On failure AviationStack still answers with JSON, but with an "error"
object in place of "data":
    {"error": {"code": "invalid_access_key", "message": "..."}}

No retries and no rate limiting: one request per call, failures are
raised to the caller.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from flightmap.config import config
from flightmap.errors import FlightFeedError, InvalidResponseError
from flightmap.models import FlightRecord

logger = logging.getLogger(__name__)


class AviationStackClient:
    """
    Client for the AviationStack flights API.

    Handles:
    - GET requests to /flights filtered by status and limited in size
    - Access key injection
    - Translating transport and payload problems into FlightFeedError
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = 'http://api.aviationstack.com/v1',
        flight_status: str = 'active',
        limit: int = 100,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.flight_status = flight_status
        self.limit = limit
        self.timeout = timeout
        self.session = session or requests.Session()

        if not self.api_key:
            logger.warning('AviationStack API key not configured - requests will be rejected')

    @classmethod
    def from_config(cls) -> 'AviationStackClient':
        """Create client from application configuration."""
        return cls(
            api_key=config.aviationstack.api_key,
            base_url=config.aviationstack.base_url,
            flight_status=config.aviationstack.flight_status,
            limit=config.aviationstack.limit,
            timeout=config.aviationstack.timeout_seconds,
        )

    def _params(self) -> Dict[str, Any]:
        return {
            'access_key': self.api_key,
            'flight_status': self.flight_status,
            'limit': self.limit,
        }

    def _redact(self, text: str) -> str:
        """Mask the access key wherever it shows up in text."""
        if self.api_key:
            return text.replace(self.api_key, '***')
        return text

    @staticmethod
    def _error_message(response: Optional[requests.Response]) -> Optional[str]:
        """Message of an AviationStack error envelope, if the body has one."""
        if response is None:
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        error = data.get('error') if isinstance(data, dict) else None
        if isinstance(error, dict):
            return error.get('message') or error.get('code')
        return error or None

    def get_flights_raw(self) -> List[Dict[str, Any]]:
        """
        Fetch the raw flight objects.

        Returns:
            The list under the top-level "data" field.

        Raises:
            InvalidResponseError if the body is not JSON or lacks "data"
            FlightFeedError on network or HTTP errors
        """
        url = f'{self.base_url}/flights'

        logger.debug(f'Fetching flights: {url} status={self.flight_status} limit={self.limit}')

        try:
            response = self.session.get(
                url,
                params=self._params(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error('AviationStack API timeout')
            raise FlightFeedError('AviationStack request timed out') from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            detail = self._error_message(e.response)
            if detail:
                logger.error(f'AviationStack API error: {status} ({detail})')
                raise FlightFeedError(f'AviationStack returned HTTP {status}: {detail}') from e
            logger.error(f'AviationStack API error: {status}')
            raise FlightFeedError(f'AviationStack returned HTTP {status}') from e
        except requests.exceptions.RequestException as e:
            # urllib3 puts the full URL, access key included, in the message
            reason = self._redact(str(e))
            logger.error(f'AviationStack request failed: {reason}')
            raise FlightFeedError(f'AviationStack request failed: {reason}') from None

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponseError('Invalid API response: body is not JSON') from e

        if not isinstance(data, dict):
            raise InvalidResponseError('Invalid API response')

        if data.get('error'):
            error = data['error']
            message = error.get('message') if isinstance(error, dict) else error
            logger.warning(f'AviationStack API error: {message}')
            raise InvalidResponseError(f'Invalid API response: {message}')

        flights = data.get('data')
        if flights is None:
            raise InvalidResponseError('Invalid API response: missing "data" field')
        if not isinstance(flights, list):
            raise InvalidResponseError('Invalid API response: "data" is not a list')

        logger.info(f'Received {len(flights)} flights from AviationStack')
        return flights

    def get_flights(self) -> List[FlightRecord]:
        """Fetch current flights as FlightRecords."""
        return [
            FlightRecord.from_dict(raw)
            for raw in self.get_flights_raw()
            if isinstance(raw, dict)
        ]
