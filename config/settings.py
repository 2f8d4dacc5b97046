"""Application configuration settings."""

from typing import Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # OpenWeatherMap API Configuration
    openweather_api_key: Optional[str] = Field(
        default=None,
        alias="OPENWEATHER_API_KEY",
        description="OpenWeatherMap API key"
    )
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        alias="OPENWEATHER_BASE_URL",
        description="OpenWeatherMap API base URL"
    )
    openweather_icon_url_template: str = Field(
        default="http://openweathermap.org/img/wn/{icon}.png",
        alias="OPENWEATHER_ICON_URL_TEMPLATE",
        description="Template used to build icon URLs from provider icon codes"
    )
    require_api_key: bool = Field(
        default=True,
        alias="REQUIRE_API_KEY",
        description="Refuse to start the proxy without an API key"
    )
    http_timeout_seconds: float = Field(default=30.0, alias="HTTP_TIMEOUT_SECONDS", description="Outbound HTTP timeout")

    # Application Configuration
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST", description="Application host")
    app_port: int = Field(default=5000, alias="APP_PORT", description="Application port")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Log level")

    # Dashboard Configuration
    dashboard_api_url: str = Field(
        default="http://localhost:5000",
        alias="DASHBOARD_API_URL",
        description="Base URL of the weather proxy used by the dashboard"
    )
    dashboard_storage_path: str = Field(
        default="~/.weather-dashboard/storage.json",
        alias="DASHBOARD_STORAGE_PATH",
        description="File holding the dashboard's persisted preferences"
    )


# Global settings instance
settings = Settings()
