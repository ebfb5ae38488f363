"""
Risk Engine Data Models

Immutable records passed between the engine components. Every record is a
pydantic model so it can be returned directly from the API or rendered by
the dashboard.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


RISK_LEVELS = ("Low", "Medium", "High")
CONFIDENCE_LABELS = ("Low", "Medium", "High")


def normalize_risk_level(level: Any) -> str:
    """Map any unrecognized level (e.g. "Unknown") to Low"""
    if isinstance(level, str):
        candidate = level.strip().capitalize()
        if candidate in RISK_LEVELS:
            return candidate
    return "Low"


class EngineModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrecipitationSample(EngineModel):
    """A single day's rainfall. The amount is validated during aggregation, not here."""
    date: date
    amount_mm: Optional[Any] = None


class WeatherSnapshot(EngineModel):
    temperature_c: Optional[float] = None
    humidity_pct: Optional[float] = None
    rainfall_mm: float = 0.0
    condition: str = "Unknown"
    location: str = ""


class PeakDay(EngineModel):
    date: date
    amount_mm: float


class HistoricalStats(EngineModel):
    sample_count: int = 0
    yearly_total_mm: float = 0.0
    average_daily_mm: float = 0.0
    average_weekly_mm: float = 0.0
    wettest_month_key: Optional[str] = None
    wettest_month_total_mm: float = 0.0
    peak_day: Optional[PeakDay] = None
    # YYYY-MM -> summed rainfall, chronological insertion order
    monthly_totals: Dict[str, float] = Field(default_factory=dict)


class RiskAssessment(EngineModel):
    level: str = "Low"
    explanation: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        return normalize_risk_level(value)


class RainfallBar(EngineModel):
    label: str
    amount_mm: float
    key: str


class RiskExplanation(EngineModel):
    bullet1: str
    bullet2: str
    bullet3: str
    narrative: str
    is_wettest_month: bool = False
    recent_7day_mm: float = 0.0
    average_weekly_mm: float = 0.0
    pct_vs_average: int = 0
    monthly_rainfall: List[RainfallBar] = Field(default_factory=list)
    wettest_month_key: Optional[str] = None
    peak_day: Optional[PeakDay] = None
    estimated: bool = False


class RouteCandidate(EngineModel):
    id: int
    name: str
    is_safe: bool
    metadata: Dict[str, Any] = Field(default_factory=dict)


class RouteConfidence(EngineModel):
    route_id: int
    name: str
    is_safe: bool
    confidence: Optional[float] = None
    label: Optional[str] = None
    pending: bool = False


class EvacuationDecision(EngineModel):
    recommended: bool
    window_hours: Optional[Tuple[int, int]] = None
    rationale: str


class Alert(EngineModel):
    level: str
    severity: str
    message: str
    action: str

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        return normalize_risk_level(value)


class ClimateSummary(EngineModel):
    seasonal_pattern: str
    last_major_event: str
    average_daily_mm: Optional[float] = None
    estimated: bool = False


class RainfallHistory(EngineModel):
    bars: List[RainfallBar] = Field(default_factory=list)
    wettest_key: Optional[str] = None
    peak_day: Optional[PeakDay] = None
    is_current: bool = True
    estimated: bool = False


class Evaluation(EngineModel):
    location: str
    generated_at: datetime
    weather: WeatherSnapshot
    risk: RiskAssessment
    alert: Alert
    explanation: RiskExplanation
    evacuation: EvacuationDecision
    routes: List[RouteConfidence]
    climate: ClimateSummary
    rainfall_history: RainfallHistory
    degraded_sources: List[str] = Field(default_factory=list)
