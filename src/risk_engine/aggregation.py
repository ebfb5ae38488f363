"""
Precipitation Aggregation

Reduces daily precipitation series into the statistics the rest of the
engine works from:
- Yearly history: monthly sums, wettest month, peak day, weekly average
- Recent window: trailing sum over the first N days
- Daily chart view of the recent window
"""

import math
from typing import Any, Iterable, Optional, Union

import numpy as np
import pandas as pd

from .models import HistoricalStats, PeakDay, PrecipitationSample, RainfallBar, RainfallHistory


MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Fixed divisor for the weekly average, independent of series completeness
WEEKS_PER_YEAR = 52

SeriesInput = Optional[Union[pd.DataFrame, Iterable[Any]]]


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upwards (0.5 -> 1, -12.5 -> -12)"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _empty_frame() -> pd.DataFrame:
    return pd.DataFrame({
        "date": pd.Series(dtype="datetime64[ns]"),
        "precipitation_mm": pd.Series(dtype="float64"),
    })


def read_precipitation_series(series: SeriesInput) -> Optional[pd.DataFrame]:
    """
    Parse a precipitation series, or None when it cannot be read at all

    Readable inputs are a DataFrame with a ``date`` column, or a list-like of
    PrecipitationSample / dicts. Strings, mappings, scalars, DataFrames
    without dates and non-empty list-likes holding no samples are
    unreadable. An empty list-like reads as an empty frame.
    """
    if series is None:
        return None

    if isinstance(series, pd.DataFrame):
        if "date" not in series.columns:
            return None
        amounts = series["precipitation_mm"] if "precipitation_mm" in series.columns else np.nan
        df = pd.DataFrame({"date": series["date"], "precipitation_mm": amounts})
    else:
        if isinstance(series, (str, bytes, dict)) or not isinstance(series, Iterable):
            return None

        records = []
        seen = 0
        for sample in series:
            seen += 1
            if isinstance(sample, PrecipitationSample):
                records.append({"date": sample.date, "precipitation_mm": sample.amount_mm})
            elif isinstance(sample, dict):
                amount = sample.get("amount_mm", sample.get("precipitation_mm"))
                records.append({"date": sample.get("date"), "precipitation_mm": amount})
        if not records:
            return _empty_frame() if seen == 0 else None
        df = pd.DataFrame(records)

    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df = df.dropna(subset=["date"]).reset_index(drop=True)

    amounts = pd.to_numeric(df["precipitation_mm"], errors="coerce").astype("float64")
    amounts = amounts.where(~np.isinf(amounts))
    df["precipitation_mm"] = amounts.where(amounts >= 0)

    return df


def to_precipitation_frame(series: SeriesInput) -> pd.DataFrame:
    """
    Normalize a precipitation series into a DataFrame

    Unparseable dates are dropped; non-numeric or negative amounts become
    NaN. Absent or unreadable series yield an empty frame.

    Returns:
        DataFrame with ``date`` (datetime64) and ``precipitation_mm`` (float)
    """
    df = read_precipitation_series(series)
    return _empty_frame() if df is None else df


def monthly_totals(series: SeriesInput) -> pd.Series:
    """Sum rainfall per YYYY-MM key; missing amounts count as zero"""
    df = to_precipitation_frame(series)
    if df.empty:
        return pd.Series(dtype="float64")

    month_keys = df["date"].dt.strftime("%Y-%m")
    return df["precipitation_mm"].fillna(0.0).groupby(month_keys, sort=False).sum()


def find_peak_day(df: pd.DataFrame) -> Optional[PeakDay]:
    """First day holding the strictly largest positive amount"""
    peak_amount = 0.0
    peak_date = None

    for day, amount in zip(df["date"], df["precipitation_mm"].fillna(0.0)):
        if amount > peak_amount:
            peak_amount = float(amount)
            peak_date = day

    if peak_date is None:
        return None

    return PeakDay(date=peak_date.date(), amount_mm=peak_amount)


def aggregate_history(series: SeriesInput) -> HistoricalStats:
    """
    Aggregate a ~365 day precipitation series

    Args:
        series: Daily precipitation history (may be empty or None)

    Returns:
        HistoricalStats, zeroed with no wettest month or peak day when the
        series holds no samples
    """
    df = to_precipitation_frame(series)

    if df.empty:
        return HistoricalStats()

    valid = df["precipitation_mm"].dropna()
    yearly_total = float(valid.sum())
    average_daily = yearly_total / len(valid) if len(valid) > 0 else 0.0

    months = monthly_totals(df)
    # idxmax keeps the first maximum in chronological order
    wettest_key = str(months.idxmax())

    return HistoricalStats(
        sample_count=int(len(valid)),
        yearly_total_mm=yearly_total,
        average_daily_mm=average_daily,
        average_weekly_mm=yearly_total / WEEKS_PER_YEAR,
        wettest_month_key=wettest_key,
        wettest_month_total_mm=float(months[wettest_key]),
        peak_day=find_peak_day(df),
        monthly_totals={str(key): float(total) for key, total in months.items()},
    )


def _first_days(window: SeriesInput, days: int) -> pd.DataFrame:
    df = to_precipitation_frame(window)
    if df.empty or days <= 0:
        return df.iloc[0:0]
    return df.sort_values("date", kind="mergesort").head(days)


def sum_recent(window: SeriesInput, days: int = 7) -> float:
    """
    Sum the first ``days`` entries of a recent window

    Longer windows are truncated, not summed whole. Missing amounts count as
    zero and an empty window sums to zero.
    """
    head = _first_days(window, days)
    if head.empty:
        return 0.0
    return float(head["precipitation_mm"].fillna(0.0).sum())


def daily_rainfall_history(window: SeriesInput, days: int = 14) -> RainfallHistory:
    """Daily bars for the first ``days`` entries of a recent window"""
    head = _first_days(window, days)

    bars = []
    for day, amount in zip(head["date"], head["precipitation_mm"].fillna(0.0)):
        bars.append(RainfallBar(
            label=f"{day.day} {MONTH_NAMES[day.month - 1]}",
            amount_mm=round_half_up(float(amount), 1),
            key=day.strftime("%Y-%m-%d"),
        ))

    peak = find_peak_day(head) if not head.empty else None
    if peak is not None:
        peak = PeakDay(date=peak.date, amount_mm=round_half_up(peak.amount_mm))

    return RainfallHistory(
        bars=bars,
        wettest_key=peak.date.isoformat() if peak else None,
        peak_day=peak,
        is_current=True,
    )
