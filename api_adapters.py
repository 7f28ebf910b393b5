# Contains the adapter classes for communicating with the external routing API.

import asyncio
import logging
from abc import ABC, abstractmethod

import requests

from route_config import RouteConfig
from route_errors import NetworkError, RequestError, ServiceError

logger = logging.getLogger(__name__)


class ApiAdapter(ABC):
    """
    Abstract Base Class (blueprint) for routing service clients.
    The route generator only ever talks to the service through this.
    """
    @abstractmethod
    async def request_route(self, body: dict) -> dict:
        """Sends a /route request body and returns the decoded JSON answer."""
        pass


class GraphHopperAdapter(ApiAdapter):
    """The adapter for the GraphHopper Routing API."""
    ROUTING_PATH = "/route"

    def __init__(self, config: RouteConfig, session: requests.Session | None = None):
        self.config = config
        # without an injected session every call opens and closes its own,
        # so concurrent worker threads never share one
        self.session = session

    @property
    def url(self) -> str:
        return f"{self.config.host}{self.ROUTING_PATH}"

    async def request_route(self, body: dict) -> dict:
        # requests is blocking, keep it off the event loop
        return await asyncio.to_thread(self._post, body)

    def _post(self, body: dict) -> dict:
        if self.session is not None:
            return self._send(self.session, body)
        with requests.Session() as session:
            return self._send(session, body)

    def _send(self, session: requests.Session, body: dict) -> dict:
        logger.debug("POST %s with %d point(s)", self.url, len(body.get('points', [])))
        try:
            response = session.post(
                self.url,
                params={'key': self.config.api_key},
                json=body,
                headers={'Content-Type': 'application/json'},
                timeout=self.config.timeout_ms / 1000,
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.warning("GraphHopper unreachable: %s", e)
            raise NetworkError() from e
        except (requests.exceptions.RequestException, TypeError, ValueError) as e:
            raise RequestError(str(e)) from e

        if not response.ok:
            raise ServiceError(response.status_code, self._error_payload(response))

        try:
            return response.json()
        except ValueError as e:
            raise RequestError(f"Invalid JSON in GraphHopper response: {e}") from e

    @staticmethod
    def _error_payload(response: requests.Response) -> dict:
        try:
            payload = response.json()
        except ValueError:
            return {'message': response.reason}
        if not isinstance(payload, dict):
            return {'message': response.reason}
        payload.setdefault('message', response.reason)
        return payload
