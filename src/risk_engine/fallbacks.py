"""
Degradation Policy

Single owner of every substitute output the platform serves when an
upstream source is missing or unusable. Each data source has one fallback
producer; callers never build fallback records themselves.

Placeholder rainfall is deterministic: the same "now" always produces the
same placeholder data.
"""

from datetime import date, timedelta
from typing import List
import logging

from .aggregation import MONTH_NAMES
from .explanation import NEUTRAL_NARRATIVE, month_label
from .models import (
    ClimateSummary,
    RainfallBar,
    RainfallHistory,
    RiskAssessment,
    RiskExplanation,
    WeatherSnapshot,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class DegradationPolicy:
    """Fallback producers, one per data source"""

    FALLBACK_AVERAGE_WEEKLY_MM = 25.0
    PLACEHOLDER_MONTHS = 12
    PLACEHOLDER_DAYS = 14

    def weather(self, location: str = "Your location") -> WeatherSnapshot:
        """Current conditions when the weather provider is unreachable"""
        logger.warning(f"Serving fallback weather for {location}")
        return WeatherSnapshot(
            temperature_c=28.0,
            humidity_pct=75.0,
            rainfall_mm=0.0,
            condition="Unknown",
            location=location,
        )

    def risk(self) -> RiskAssessment:
        logger.warning("Serving fallback risk assessment")
        return RiskAssessment(
            level="Low",
            explanation="Unable to fetch risk data. Conditions assumed stable.",
        )

    def placeholder_monthly(self, current_month_key: str) -> List[RainfallBar]:
        """
        Twelve months ending at the current month

        The month ``i`` months back gets ``30 + i * 5`` mm, so the oldest month
        shows 85mm and the current month 30mm.
        """
        year, month = (int(part) for part in current_month_key.split("-")[:2])

        bars = []
        for months_back in range(self.PLACEHOLDER_MONTHS - 1, -1, -1):
            index = year * 12 + (month - 1) - months_back
            key = f"{index // 12}-{index % 12 + 1:02d}"
            bars.append(RainfallBar(
                label=month_label(key),
                amount_mm=float(30 + months_back * 5),
                key=key,
            ))
        return bars

    def explanation(self, current_month_key: str) -> RiskExplanation:
        """Explanation when the climate archive is unavailable"""
        logger.warning("Serving fallback risk explanation")
        return RiskExplanation(
            bullet1="Using estimated data — API temporarily unavailable.",
            bullet2="Historical comparison unavailable.",
            bullet3="Check back when connection is restored.",
            narrative=NEUTRAL_NARRATIVE,
            is_wettest_month=False,
            recent_7day_mm=0.0,
            average_weekly_mm=self.FALLBACK_AVERAGE_WEEKLY_MM,
            pct_vs_average=0,
            monthly_rainfall=self.placeholder_monthly(current_month_key),
            wettest_month_key=None,
            peak_day=None,
            estimated=True,
        )

    def with_placeholder_months(
        self,
        explanation: RiskExplanation,
        current_month_key: str
    ) -> RiskExplanation:
        """Fill an explanation without any monthly history with the placeholder year"""
        if explanation.monthly_rainfall:
            return explanation

        logger.warning("No monthly rainfall history; charting placeholder months")
        return explanation.model_copy(update={
            "monthly_rainfall": self.placeholder_monthly(current_month_key),
            "estimated": True,
        })

    def climate_summary(self) -> ClimateSummary:
        logger.warning("Serving fallback climate summary")
        return ClimateSummary(
            seasonal_pattern="Data unavailable",
            last_major_event="Check back later",
            average_daily_mm=None,
            estimated=True,
        )

    def rainfall_history(self, today: date) -> RainfallHistory:
        """Fourteen zero-rainfall days ending today"""
        logger.warning("Serving fallback rainfall history")
        bars = []
        for days_back in range(self.PLACEHOLDER_DAYS - 1, -1, -1):
            day = today - timedelta(days=days_back)
            bars.append(RainfallBar(
                label=f"{day.day} {MONTH_NAMES[day.month - 1]}",
                amount_mm=0.0,
                key=day.isoformat(),
            ))

        return RainfallHistory(
            bars=bars,
            wettest_key=None,
            peak_day=None,
            is_current=False,
            estimated=True,
        )
