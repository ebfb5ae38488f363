"""
Open-Meteo Precipitation Connector

Fetches daily precipitation series from Open-Meteo (free, no API key):
- Archive API: ~12 months of history, published with a delay of several days
- Forecast API: a rolling recent window via ``past_days``
API Documentation: https://open-meteo.com/en/docs
"""

import requests
import pandas as pd
from datetime import date, timedelta
from typing import Dict, Optional
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class OpenMeteoConnector:
    """Connector for Open-Meteo archive and forecast precipitation"""

    ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"
    FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

    # Archive data lags behind real time
    ARCHIVE_DELAY_DAYS = 7

    def __init__(self):
        self.session = requests.Session()

    def _get_daily_precipitation(self, url: str, params: Dict) -> Optional[pd.DataFrame]:
        """
        Request ``daily=precipitation_sum`` and parse it into a DataFrame

        Returns:
            DataFrame with ``date`` and ``precipitation_mm`` columns (null
            amounts kept as NaN), or None when the request or payload fails
        """
        params = dict(params, daily="precipitation_sum", timezone="auto")

        try:
            logger.info(f"Fetching daily precipitation from {url} (params: {params})")
            response = self.session.get(url, params=params, timeout=30)
            response.raise_for_status()

            daily = (response.json() or {}).get("daily") or {}
            times = daily.get("time")
            amounts = daily.get("precipitation_sum")

            if not times or amounts is None or len(times) != len(amounts):
                logger.error("Invalid precipitation response: missing daily series")
                return None

            df = pd.DataFrame({
                "date": pd.to_datetime(times, errors="coerce"),
                "precipitation_mm": pd.to_numeric(pd.Series(amounts, dtype="object"), errors="coerce"),
            })
            logger.info(f"Retrieved {len(df)} daily precipitation records")

            return df

        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching precipitation: {e}")
            return None
        except ValueError as e:
            logger.error(f"Malformed precipitation response: {e}")
            return None

    def get_climate_series(
        self,
        latitude: float,
        longitude: float,
        today: Optional[date] = None,
        days: int = 365,
        delay_days: int = ARCHIVE_DELAY_DAYS
    ) -> Optional[pd.DataFrame]:
        """
        Get ~12 months of daily precipitation history

        Args:
            latitude: Location latitude
            longitude: Location longitude
            today: Reference day. If None, uses date.today()
            days: Length of the history to request
            delay_days: Days before today at which the archive is cut off

        Returns:
            DataFrame with date/precipitation_mm, or None on failure
        """
        today = today or date.today()
        start_date = today - timedelta(days=days)
        end_date = today - timedelta(days=delay_days)

        return self._get_daily_precipitation(self.ARCHIVE_URL, {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
        })

    def get_recent_window(
        self,
        latitude: float,
        longitude: float,
        past_days: int = 7
    ) -> Optional[pd.DataFrame]:
        """
        Get the rolling recent window

        The forecast API returns ``past_days`` days of observations followed by
        forecast days; the observed days come first.
        """
        return self._get_daily_precipitation(self.FORECAST_URL, {
            "latitude": latitude,
            "longitude": longitude,
            "past_days": past_days,
        })
