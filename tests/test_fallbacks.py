from datetime import date

from src.risk_engine import DegradationPolicy, HistoricalStats, explain
from src.risk_engine.explanation import NEUTRAL_NARRATIVE


policy = DegradationPolicy()


def test_placeholder_monthly_is_deterministic():
    bars = policy.placeholder_monthly("2025-03")

    assert len(bars) == 12
    assert bars[0].key == "2024-04"
    assert bars[0].label == "Apr 2024"
    assert bars[0].amount_mm == 85.0
    assert bars[-1].key == "2025-03"
    assert bars[-1].amount_mm == 30.0
    assert bars == policy.placeholder_monthly("2025-03")


def test_placeholder_monthly_crosses_year_boundary():
    keys = [bar.key for bar in policy.placeholder_monthly("2025-01")]
    assert keys[0] == "2024-02"
    assert keys[-2:] == ["2024-12", "2025-01"]


def test_fallback_explanation():
    explanation = policy.explanation("2025-07")

    assert explanation.estimated is True
    assert explanation.bullet1 == "Using estimated data — API temporarily unavailable."
    assert explanation.narrative == NEUTRAL_NARRATIVE
    assert explanation.is_wettest_month is False
    assert explanation.recent_7day_mm == 0.0
    assert explanation.average_weekly_mm == 25.0
    assert explanation.wettest_month_key is None
    assert explanation.peak_day is None
    assert explanation.monthly_rainfall == policy.placeholder_monthly("2025-07")


def test_with_placeholder_months_only_fills_empty():
    empty = explain(HistoricalStats(), 0.0, "2025-07")
    filled = policy.with_placeholder_months(empty, "2025-07")

    assert filled.estimated is True
    assert len(filled.monthly_rainfall) == 12
    assert filled.bullet2 == empty.bullet2

    populated = explain(HistoricalStats(monthly_totals={"2025-07": 4.0}), 0.0, "2025-07")
    assert policy.with_placeholder_months(populated, "2025-07") is populated


def test_fallback_weather_and_risk():
    weather = policy.weather("Pune")
    assert weather.location == "Pune"
    assert weather.rainfall_mm == 0.0
    assert weather.condition == "Unknown"

    risk = policy.risk()
    assert risk.level == "Low"
    assert "Conditions assumed stable" in risk.explanation


def test_fallback_climate_summary():
    summary = policy.climate_summary()
    assert summary.seasonal_pattern == "Data unavailable"
    assert summary.average_daily_mm is None
    assert summary.estimated is True


def test_fallback_rainfall_history():
    history = policy.rainfall_history(date(2025, 3, 5))

    assert len(history.bars) == 14
    assert history.bars[0].key == "2025-02-20"
    assert history.bars[0].label == "20 Feb"
    assert history.bars[-1].key == "2025-03-05"
    assert all(bar.amount_mm == 0.0 for bar in history.bars)
    assert history.peak_day is None
    assert history.is_current is False
    assert history.estimated is True
