"""Main FastAPI application for the weather proxy."""

import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Query, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import ConfigurationError, UpstreamFailureError, WeatherProxyError, MissingParameterError
from .models import NormalizedWeather, ErrorResponse
from .services import WeatherService
from config.settings import settings
from config.logging import setup_logging


# Setup logging
logger = setup_logging()


# Service instances
weather_service: Optional[WeatherService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    global weather_service

    logger.info("Starting weather proxy service...")

    if settings.require_api_key and not settings.openweather_api_key:
        logger.error("OPENWEATHER_API_KEY is not set; refusing to start")
        raise ConfigurationError("OPENWEATHER_API_KEY must be set to start the weather proxy")

    weather_service = WeatherService()

    yield

    # Cleanup
    logger.info("Shutting down weather proxy service...")
    if weather_service:
        await weather_service.close()
        weather_service = None


# Create FastAPI app
app = FastAPI(
    title="Weather Proxy Service",
    description="Looks up current weather for a city and normalizes the provider response",
    version="1.0.0",
    lifespan=lifespan
)

# Any origin may call the proxy
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_weather_service() -> WeatherService:
    """Dependency to get the weather service instance."""
    return weather_service


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get(
    "/weather",
    response_model=NormalizedWeather,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def get_weather(
    city: Optional[str] = Query(None, description="City name to get weather for"),
    weather_svc: WeatherService = Depends(get_weather_service)
):
    """
    Get current weather data for a specified city.

    The city is validated before anything else; a missing or blank city
    never reaches the provider. Every provider problem is reported with the
    same 500 envelope.

    Args:
        city: Name of the city to get weather for

    Returns:
        NormalizedWeather record

    Raises:
        MissingParameterError: If city is absent or blank
        UpstreamFailureError: If the provider lookup fails
    """
    if city is None or not city.strip():
        raise MissingParameterError()

    logger.info(f"Processing weather request for city: {city}")
    return await weather_svc.get_weather_data(city.strip())


@app.exception_handler(WeatherProxyError)
async def weather_proxy_exception_handler(request: Request, exc: WeatherProxyError):
    """Render proxy errors as the uniform error envelope."""
    if isinstance(exc, UpstreamFailureError):
        logger.error(f"Error fetching weather data for {exc.city}: {exc.reason}")
    else:
        logger.warning(f"Rejected request to {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump()
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc!r}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error").model_dump()
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
        log_level=settings.log_level.lower()
    )
