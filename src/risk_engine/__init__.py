"""
Risk Engine

Flood risk classification, explanation and evacuation decision support.
"""

from .aggregation import aggregate_history, daily_rainfall_history, read_precipitation_series, sum_recent
from .alerts import generate_alert
from .classifier import classify_rainfall, coerce_rainfall
from .engine import RiskEngine
from .evacuation import decide_evacuation
from .explanation import explain, summarize_climate
from .fallbacks import DegradationPolicy
from .models import (
    Alert,
    ClimateSummary,
    EvacuationDecision,
    Evaluation,
    HistoricalStats,
    PeakDay,
    PrecipitationSample,
    RainfallBar,
    RainfallHistory,
    RiskAssessment,
    RiskExplanation,
    RouteCandidate,
    RouteConfidence,
    WeatherSnapshot,
    normalize_risk_level,
)
from .routes import DEFAULT_ROUTES, score_routes

__all__ = [
    "RiskEngine",
    "DegradationPolicy",
    "classify_rainfall",
    "coerce_rainfall",
    "normalize_risk_level",
    "aggregate_history",
    "read_precipitation_series",
    "sum_recent",
    "daily_rainfall_history",
    "explain",
    "summarize_climate",
    "decide_evacuation",
    "score_routes",
    "generate_alert",
    "DEFAULT_ROUTES",
    "Alert",
    "ClimateSummary",
    "EvacuationDecision",
    "Evaluation",
    "HistoricalStats",
    "PeakDay",
    "PrecipitationSample",
    "RainfallBar",
    "RainfallHistory",
    "RiskAssessment",
    "RiskExplanation",
    "RouteCandidate",
    "RouteConfidence",
    "WeatherSnapshot",
]
