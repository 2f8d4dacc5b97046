"""Data models for the weather proxy and dashboard."""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class NormalizedWeather(BaseModel):
    """Current weather for one city, independent of the provider's shape."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True
    )

    city: str = Field(..., min_length=1, description="Canonical place name reported by the provider")
    temperature: float = Field(..., allow_inf_nan=False, description="Temperature in degrees Celsius")
    condition: str = Field(..., description="Short category label, e.g. Rain")
    description: str = Field(default="", description="Human-readable description")
    icon: Optional[str] = Field(default=None, description="Icon URL, if the provider supplied an icon code")
    humidity: int = Field(..., ge=0, le=100, description="Relative humidity in percent")
    wind_speed: float = Field(..., ge=0, allow_inf_nan=False, alias="windSpeed", description="Wind speed in m/s")


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    error: str
