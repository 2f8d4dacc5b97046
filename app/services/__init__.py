"""Services package for the weather proxy."""

from .weather_service import WeatherService, normalize_weather

__all__ = ["WeatherService", "normalize_weather"]
