"""Shared fixtures for the weather proxy and dashboard tests."""

import copy

import httpx
import pytest

from app.models import NormalizedWeather
from app.services.weather_service import WeatherService


ICON_URL_TEMPLATE = "http://openweathermap.org/img/wn/{icon}.png"

PARIS_PAYLOAD = {
    "main": {"temp": 18.2, "humidity": 60},
    "weather": [{"main": "Clear", "description": "clear sky", "icon": "01d"}],
    "wind": {"speed": 3.1},
    "name": "Paris",
}

LONDON_PAYLOAD = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [{"id": 501, "main": "Rain", "description": "moderate rain", "icon": "10d"}],
    "main": {"temp": 11.4, "feels_like": 10.9, "humidity": 87, "pressure": 1009},
    "wind": {"speed": 5.66, "deg": 230},
    "sys": {"country": "GB"},
    "name": "London",
}


class ProviderStub:
    """OpenWeatherMap stand-in keyed by lower-cased ``q`` parameter."""

    def __init__(self, payloads=None):
        self.payloads = {key.lower(): value for key, value in (payloads or {}).items()}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        city = request.url.params.get("q", "").lower()
        if city in self.payloads:
            return httpx.Response(200, json=self.payloads[city])
        return httpx.Response(404, json={"cod": "404", "message": "city not found"})


def make_weather_service(handler) -> WeatherService:
    """WeatherService whose HTTP traffic goes to ``handler``."""
    return WeatherService(
        api_key="test-key",
        base_url="https://provider.test/data/2.5",
        icon_url_template=ICON_URL_TEMPLATE,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def paris_payload():
    return copy.deepcopy(PARIS_PAYLOAD)


@pytest.fixture
def provider():
    return ProviderStub({"paris": PARIS_PAYLOAD, "london": LONDON_PAYLOAD})


@pytest.fixture
def sample_weather():
    """Sample normalized record for dashboard tests."""
    return NormalizedWeather(
        city="London",
        temperature=11.4,
        condition="Rain",
        description="moderate rain",
        icon="http://openweathermap.org/img/wn/10d.png",
        humidity=87,
        wind_speed=5.66,
    )


def to_wire(weather: NormalizedWeather) -> dict:
    """Serialize a record the way the proxy sends it."""
    return weather.model_dump(by_alias=True, exclude_none=True)
