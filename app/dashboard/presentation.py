"""Pure presentation rules: icons, derived numbers and the view model."""

import math
from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .state import ClientState


DEFAULT_GLYPH = "🌡️"

# Checked in order; the first matching substring wins.
CONDITION_GLYPHS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("clear",), "☀️"),
    (("cloud",), "☁️"),
    (("rain",), "🌧️"),
    (("snow",), "❄️"),
    (("thunder",), "⛈️"),
    (("fog", "mist"), "🌫️"),
)

FEELS_LIKE_FACTOR = 0.95
FORECAST_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")
FORECAST_CONDITIONS = ("Clear", "Clouds", "Rain")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return int(math.floor(value + 0.5))


def weather_glyph(condition: Optional[str]) -> str:
    """Pick an emoji for a condition label when no icon URL is available."""
    text = (condition or "").lower()
    for needles, glyph in CONDITION_GLYPHS:
        if any(needle in text for needle in needles):
            return glyph
    return DEFAULT_GLYPH


def feels_like(temperature: float) -> int:
    """Approximate "feels like" value; not fetched from the provider."""
    return round_half_up(temperature * FEELS_LIKE_FACTOR)


class ForecastDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    glyph: str
    temperature: int


def placeholder_forecast(temperature: float) -> List[ForecastDay]:
    """Demo forecast built from the current temperature.

    This is decorative content, not real forecast data.
    """
    return [
        ForecastDay(
            day=day,
            glyph=weather_glyph(FORECAST_CONDITIONS[index % len(FORECAST_CONDITIONS)]),
            temperature=round_half_up(temperature + (index - 2)),
        )
        for index, day in enumerate(FORECAST_DAYS)
    ]


class WeatherCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str
    date_line: str
    icon_url: Optional[str]
    glyph: str
    condition: str
    temperature: int
    description: str
    humidity: int
    wind_speed: float
    feels_like: int


class DashboardView(BaseModel):
    """Everything the renderer needs, computed from one state snapshot."""

    model_config = ConfigDict(frozen=True)

    dark_mode: bool
    city_input: str
    recent_searches: Tuple[str, ...]
    show_spinner: bool
    error_message: Optional[str]
    card: Optional[WeatherCard]
    forecast: Tuple[ForecastDay, ...]


def format_date_line(today: date) -> str:
    """E.g. ``Monday, Oct 19``."""
    return f"{today:%A}, {today:%b} {today.day}"


def build_view(state: ClientState, today: date) -> DashboardView:
    weather = state.weather
    card = None
    forecast: Tuple[ForecastDay, ...] = ()

    # Stale weather stays in state during a lookup but is not shown
    if weather is not None and not state.loading:
        card = WeatherCard(
            city=weather.city,
            date_line=format_date_line(today),
            icon_url=weather.icon,
            glyph=weather_glyph(weather.condition),
            condition=weather.condition,
            temperature=round_half_up(weather.temperature),
            description=weather.description,
            humidity=weather.humidity,
            wind_speed=weather.wind_speed,
            feels_like=feels_like(weather.temperature),
        )
        forecast = tuple(placeholder_forecast(weather.temperature))

    return DashboardView(
        dark_mode=state.dark_mode,
        city_input=state.current_city_input,
        recent_searches=state.recent_searches,
        show_spinner=state.loading,
        error_message=state.error_message or None,
        card=card,
        forecast=forecast,
    )
