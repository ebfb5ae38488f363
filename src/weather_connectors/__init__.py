"""
Weather Connectors for the Flood Readiness Platform

This package contains connectors for the upstream weather data sources:
- OpenWeatherMap: Current conditions
- Open-Meteo: Daily precipitation archive and recent window
and the TTL cache shared between requests.
"""

from .cache import TTLCache, make_cache_key
from .open_meteo_connector import OpenMeteoConnector
from .openweather_connector import OpenWeatherConnector

__all__ = [
    "OpenWeatherConnector",
    "OpenMeteoConnector",
    "TTLCache",
    "make_cache_key",
]
