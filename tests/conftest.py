import sys
import os
from datetime import date, datetime, timedelta

import pandas as pd
import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from src.risk_engine import PrecipitationSample, RiskExplanation


def daily_series(start: date, amounts):
    """Consecutive PrecipitationSamples starting at ``start``"""
    return [
        PrecipitationSample(date=start + timedelta(days=offset), amount_mm=amount)
        for offset, amount in enumerate(amounts)
    ]


def make_explanation(recent_7day_mm=0.0, average_weekly_mm=0.0, is_wettest_month=False):
    return RiskExplanation(
        bullet1="",
        bullet2="",
        bullet3="",
        narrative="",
        is_wettest_month=is_wettest_month,
        recent_7day_mm=recent_7day_mm,
        average_weekly_mm=average_weekly_mm,
    )


@pytest.fixture
def fixed_now():
    return datetime(2025, 7, 20, 9, 30)


@pytest.fixture
def yearly_frame():
    """
    One year of daily rainfall from 2024-08-01 to 2025-07-31

    2 mm every day, plus a 10 mm boost on every July day, and a single
    90 mm day on 2025-07-14.
    """
    days = pd.date_range("2024-08-01", "2025-07-31", freq="D")
    amounts = [12.0 if day.month == 7 else 2.0 for day in days]
    df = pd.DataFrame({"date": days, "precipitation_mm": amounts})
    df.loc[df["date"] == "2025-07-14", "precipitation_mm"] = 90.0
    return df


@pytest.fixture
def recent_frame():
    """Seven observed days followed by forecast days, as the forecast API returns them"""
    days = pd.date_range("2025-07-13", periods=14, freq="D")
    amounts = [20.0] * 7 + [100.0] * 7
    return pd.DataFrame({"date": days, "precipitation_mm": amounts})
