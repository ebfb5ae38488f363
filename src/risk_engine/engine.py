"""
Risk Engine

Runs the full decision-support pipeline for one location:

    weather ------------> classify -> alert
    climate series -----> aggregate --+
    recent window ------> sum_recent -+-> explain -> evacuation, route scores

Absent inputs are replaced through the DegradationPolicy, so every call
returns a complete Evaluation.
"""

from datetime import datetime
from typing import Callable, List, Optional, Sequence
import logging

from .aggregation import (
    SeriesInput,
    aggregate_history,
    daily_rainfall_history,
    read_precipitation_series,
    sum_recent,
)
from .alerts import generate_alert
from .classifier import classify_rainfall
from .evacuation import decide_evacuation
from .explanation import explain, month_key, summarize_climate
from .fallbacks import DegradationPolicy
from .models import (
    ClimateSummary,
    Evaluation,
    RainfallHistory,
    RiskAssessment,
    RiskExplanation,
    RouteCandidate,
    WeatherSnapshot,
)
from .routes import DEFAULT_ROUTES, score_routes

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class RiskEngine:
    """Flood risk assessment and decision support"""

    RECENT_DAYS = 7
    HISTORY_DAYS = 14

    def __init__(
        self,
        policy: Optional[DegradationPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the engine

        Args:
            policy: Fallback producers. If None, uses the default policy.
            clock: Returns "now"; drives the current month. Defaults to datetime.now.
        """
        self.policy = policy if policy is not None else DegradationPolicy()
        self.clock = clock if clock is not None else datetime.now

    def assess_risk(self, weather: Optional[WeatherSnapshot]) -> RiskAssessment:
        if weather is None:
            return self.policy.risk()
        return classify_rainfall(weather.rainfall_mm)

    def explain_history(
        self,
        climate_series: SeriesInput,
        recent_window: SeriesInput,
        now: Optional[datetime] = None
    ) -> RiskExplanation:
        """Explanation for the current month; fallback when the climate series is absent or unreadable"""
        current_month = month_key(now or self.clock())

        climate_frame = read_precipitation_series(climate_series)
        if climate_frame is None:
            return self.policy.explanation(current_month)

        stats = aggregate_history(climate_frame)
        recent_7day = sum_recent(recent_window, days=self.RECENT_DAYS)
        explanation = explain(stats, recent_7day, current_month)

        return self.policy.with_placeholder_months(explanation, current_month)

    def climate_summary(self, climate_series: SeriesInput) -> ClimateSummary:
        climate_frame = read_precipitation_series(climate_series)
        if climate_frame is None:
            return self.policy.climate_summary()
        return summarize_climate(aggregate_history(climate_frame))

    def rainfall_history(
        self,
        history_window: SeriesInput,
        now: Optional[datetime] = None
    ) -> RainfallHistory:
        history = daily_rainfall_history(history_window, days=self.HISTORY_DAYS)
        if not history.bars:
            return self.policy.rainfall_history((now or self.clock()).date())
        return history

    def evaluate(
        self,
        weather: Optional[WeatherSnapshot],
        climate_series: SeriesInput,
        recent_window: SeriesInput,
        routes: Optional[Sequence[RouteCandidate]] = None,
        location: Optional[str] = None,
        history_window: SeriesInput = None,
        now: Optional[datetime] = None
    ) -> Evaluation:
        """
        Evaluate flood risk for one location

        Args:
            weather: Current conditions, None if unavailable
            climate_series: ~365 days of daily precipitation, None if unavailable
            recent_window: Recent daily precipitation, oldest first
            routes: Evacuation route candidates. If None, uses DEFAULT_ROUTES.
            location: Display label; defaults to the weather location
            history_window: 14-day window for the daily chart; defaults to recent_window
            now: Evaluation time; defaults to the engine clock

        Returns:
            Evaluation with every field populated
        """
        now = now or self.clock()
        degraded: List[str] = []

        if weather is None:
            degraded.append("weather")
            weather = self.policy.weather(location or "Your location")

        climate_frame = read_precipitation_series(climate_series)
        recent_frame = read_precipitation_series(recent_window)
        if history_window is None:
            history_frame = recent_frame
        else:
            history_frame = read_precipitation_series(history_window)

        for source, raw, frame in (("climate", climate_series, climate_frame),
                                   ("recent", recent_window, recent_frame)):
            if frame is None:
                if raw is not None:
                    logger.warning(f"Unreadable {source} series of type {type(raw).__name__}")
                degraded.append(source)

        risk = classify_rainfall(weather.rainfall_mm)
        explanation = self.explain_history(climate_frame, recent_frame, now=now)
        evacuation = decide_evacuation(risk, explanation)
        route_scores = score_routes(routes if routes is not None else DEFAULT_ROUTES, risk, explanation)

        if degraded:
            logger.warning(f"Evaluation degraded for sources: {', '.join(degraded)}")

        logger.info(
            f"Evaluated {location or weather.location}: risk={risk.level}, "
            f"evacuate={evacuation.recommended}"
        )

        return Evaluation(
            location=location or weather.location,
            generated_at=now,
            weather=weather,
            risk=risk,
            alert=generate_alert(risk.level),
            explanation=explanation,
            evacuation=evacuation,
            routes=route_scores,
            climate=self.climate_summary(climate_frame),
            rainfall_history=self.rainfall_history(history_frame, now=now),
            degraded_sources=degraded,
        )
