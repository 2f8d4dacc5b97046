"""Weather service for fetching data from OpenWeatherMap API."""

import logging
from typing import Any, Dict, Optional
import httpx
from pydantic import ValidationError

from ..errors import UpstreamFailureError
from ..models import NormalizedWeather
from config.settings import settings


logger = logging.getLogger(__name__)


def normalize_weather(payload: Dict[str, Any], icon_url_template: str) -> NormalizedWeather:
    """
    Map an OpenWeatherMap current-weather payload to a NormalizedWeather.

    The city comes from the provider's canonical ``name``, not from the
    caller's input, so casing and spelling are consistent downstream.

    Args:
        payload: Decoded provider response body
        icon_url_template: Format string with an ``{icon}`` placeholder

    Returns:
        NormalizedWeather record

    Raises:
        ValueError: If the payload is missing fields or violates a constraint
    """
    try:
        main = payload["main"]
        condition = payload["weather"][0]
        icon_code = condition.get("icon")

        return NormalizedWeather(
            city=payload["name"],
            temperature=main["temp"],
            condition=condition["main"],
            description=condition.get("description") or "",
            icon=icon_url_template.format(icon=icon_code) if icon_code else None,
            humidity=main["humidity"],
            wind_speed=payload["wind"]["speed"],
        )
    except ValidationError as e:
        raise ValueError(f"Weather data failed validation: {e.error_count()} error(s)") from e
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ValueError(f"Invalid weather data format received: {e!r}") from e


class WeatherService:
    """Service for fetching weather data from OpenWeatherMap API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        icon_url_template: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key if api_key is not None else settings.openweather_api_key
        self.base_url = (base_url or settings.openweather_base_url).rstrip("/")
        self.icon_url_template = icon_url_template or settings.openweather_icon_url_template
        self.client = client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)

    async def get_weather_data(self, city: str) -> NormalizedWeather:
        """
        Fetch current weather for a city and normalize it.

        Args:
            city: The city name to look up

        Returns:
            NormalizedWeather record

        Raises:
            UpstreamFailureError: On any provider, network or payload problem
        """
        url = f"{self.base_url}/weather"
        params = {
            "q": city,
            "appid": self.api_key or "",
            "units": "metric"
        }

        logger.info(f"Fetching weather data for city: {city}")

        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            weather_data = normalize_weather(response.json(), self.icon_url_template)

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                logger.warning(f"City not found: {city}")
            else:
                logger.error(f"HTTP error fetching weather data for {city}: {e}")
            raise UpstreamFailureError(city, f"provider returned HTTP {status}") from e

        except httpx.RequestError as e:
            logger.error(f"Network error fetching weather data for {city}: {e!r}")
            raise UpstreamFailureError(city, f"network error: {e!r}") from e

        except ValueError as e:
            # Covers undecodable JSON as well as normalization failures
            logger.error(f"Invalid API response for {city}: {e}")
            raise UpstreamFailureError(city, str(e)) from e

        logger.info(f"Successfully fetched weather data for {weather_data.city}")
        return weather_data

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
