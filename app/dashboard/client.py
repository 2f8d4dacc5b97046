"""HTTP client the dashboard uses to reach the weather proxy."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..errors import ClientTransportError
from ..models import NormalizedWeather
from config.settings import settings


logger = logging.getLogger(__name__)


class ProxyClient:
    """Calls ``GET /weather`` on the proxy and parses the record."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = (base_url or settings.dashboard_api_url).rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout or settings.http_timeout_seconds)

    async def fetch_weather(self, city: str) -> NormalizedWeather:
        """
        Look up current weather for a city through the proxy.

        Args:
            city: City name as entered by the user

        Returns:
            NormalizedWeather record

        Raises:
            ClientTransportError: If the proxy is unreachable, answers with a
                non-2xx status, or returns something that is not a record
        """
        try:
            response = await self.client.get(f"{self.base_url}/weather", params={"city": city})
            response.raise_for_status()
            return NormalizedWeather.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            # The proxy's error body is deliberately not surfaced
            logger.warning(f"Proxy returned HTTP {e.response.status_code} for {city}")
            raise ClientTransportError(f"proxy returned HTTP {e.response.status_code}") from e

        except httpx.RequestError as e:
            logger.warning(f"Could not reach weather proxy for {city}: {e!r}")
            raise ClientTransportError(f"proxy unreachable: {e!r}") from e

        except (ValidationError, ValueError) as e:
            logger.warning(f"Unexpected response from weather proxy for {city}: {e}")
            raise ClientTransportError("invalid response from proxy") from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
