"""
OpenWeatherMap Connector

Fetches current conditions (temperature, humidity, rainfall) for a city or
coordinate pair.
API Documentation: https://openweathermap.org/current
"""

import requests
from typing import Optional
import logging
import os

from src.risk_engine.models import WeatherSnapshot
from .cache import TTLCache, make_cache_key

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class OpenWeatherConnector:
    """Connector for the OpenWeatherMap current weather API"""

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
    DEFAULT_CITY = "New Delhi"
    PLACEHOLDER_KEYS = {"", "your_api_key_here"}

    # Served when no API key is configured
    DEMO_WEATHER = {
        "temperature_c": 28.0,
        "humidity_pct": 75.0,
        "rainfall_mm": 120.0,
        "condition": "Thunderstorm",
    }

    def __init__(self, api_key: Optional[str] = None, cache: Optional[TTLCache] = None):
        """
        Initialize OpenWeatherMap connector

        Args:
            api_key: OpenWeatherMap API key. If None, reads WEATHER_API_KEY.
            cache: Optional TTL cache shared across requests
        """
        self.api_key = api_key if api_key is not None else os.getenv("WEATHER_API_KEY", "")
        self.cache = cache

        if self.demo_mode:
            logger.warning("No OpenWeather API key found - serving demo weather data")

        self.session = requests.Session()

    @property
    def demo_mode(self) -> bool:
        return self.api_key in self.PLACEHOLDER_KEYS

    def get_current_weather(
        self,
        city: str = DEFAULT_CITY,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> Optional[WeatherSnapshot]:
        """
        Get current conditions

        Coordinates take precedence over the city name when both are given.

        Returns:
            WeatherSnapshot, or None when the request fails
        """
        cache_key = make_cache_key(city, latitude, longitude)
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        if self.demo_mode:
            snapshot = WeatherSnapshot(location=city, **self.DEMO_WEATHER)
        else:
            snapshot = self._fetch(city, latitude, longitude)
            if snapshot is None:
                return None

        if self.cache is not None:
            self.cache.set(cache_key, snapshot)

        return snapshot

    def _fetch(
        self,
        city: str,
        latitude: Optional[float],
        longitude: Optional[float]
    ) -> Optional[WeatherSnapshot]:
        params = {"appid": self.api_key, "units": "metric"}
        if latitude is not None and longitude is not None:
            params["lat"] = latitude
            params["lon"] = longitude
        else:
            params["q"] = city

        try:
            logger.info(f"Fetching current weather (params: {dict(params, appid='***')})")
            response = self.session.get(self.BASE_URL, params=params, timeout=10)
            response.raise_for_status()

            data = response.json()
            rain = data.get("rain") or {}
            conditions = data.get("weather") or [{}]

            return WeatherSnapshot(
                temperature_c=data["main"]["temp"],
                humidity_pct=data["main"]["humidity"],
                rainfall_mm=rain.get("1h") or rain.get("3h") or 0.0,
                condition=conditions[0].get("main", "Unknown"),
                location=data.get("name") or city,
            )

        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching weather: {e}")
            return None
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Malformed weather response: {e}")
            return None
