"""Exception classes for the weather proxy and dashboard."""


class WeatherProxyError(Exception):
    """Base error for failures reported to proxy callers.

    Carries the HTTP status code and the client-facing message. Anything
    more detailed stays in the server log.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingParameterError(WeatherProxyError):
    """The caller omitted the city parameter."""

    status_code = 400

    def __init__(self, message: str = "City name is required in query parameter"):
        super().__init__(message)


class UpstreamFailureError(WeatherProxyError):
    """The provider could not be reached or returned something unusable.

    Unknown cities, network errors, rejected credentials and malformed
    payloads all end up here with the same client-facing message.
    """

    status_code = 500

    def __init__(self, city: str, reason: str):
        super().__init__(f'Failed to fetch weather data for "{city}"')
        self.city = city
        self.reason = reason


class ClientTransportError(Exception):
    """The dashboard could not get a weather record from the proxy."""


class ConfigurationError(RuntimeError):
    """Required configuration is missing at startup."""
