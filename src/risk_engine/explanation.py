"""
Risk Explanation Generator

Turns historical statistics and the recent 7-day total into the
decision-support text shown next to the risk level: three comparison
bullets, a narrative sentence and the monthly chart data.

The narrative is assembled from two rule tables keyed on
(pct_vs_average, is_wettest_month) so each rule can be tested on its own.
"""

from datetime import date
from typing import Callable, List, Optional, Tuple

from .aggregation import MONTH_NAMES, round_half_up
from .classifier import coerce_rainfall
from .models import ClimateSummary, HistoricalStats, PeakDay, RainfallBar, RiskExplanation


NEUTRAL_NARRATIVE = "Conditions are within normal seasonal range. Stay informed with local updates."

# |pct_vs_average| at which the comparison clause enters the narrative
NARRATIVE_PCT_THRESHOLD = 10

MONTHS_CHARTED = 12

Rule = Callable[[int, bool], bool]

CLAUSE_RULES: List[Tuple[Rule, Callable[[int, bool], str]]] = [
    (
        lambda pct, wettest: abs(pct) >= NARRATIVE_PCT_THRESHOLD,
        lambda pct, wettest: (
            f"current rainfall is {abs(pct)}% {'above' if pct > 0 else 'below'} the annual average"
        ),
    ),
    (
        lambda pct, wettest: wettest,
        lambda pct, wettest: "this month historically records the most rain",
    ),
]

SEVERITY_RULES: List[Tuple[Rule, str]] = [
    (lambda pct, wettest: pct > 30, "higher"),
    (lambda pct, wettest: pct > 15 and wettest, "higher"),
]
DEFAULT_SEVERITY = "elevated"


def month_label(key: str, with_year: bool = True) -> str:
    """'2025-07' -> 'Jul 2025' (or 'Jul')"""
    year, month = (int(part) for part in key.split("-")[:2])
    name = MONTH_NAMES[month - 1]
    return f"{name} {year}" if with_year else name


def month_key(day: date) -> str:
    return f"{day.year}-{day.month:02d}"


def percent_vs_average(recent_7day_mm: float, average_weekly_mm: float) -> int:
    """Signed percentage of the recent week against the weekly average, 0 without an average"""
    if average_weekly_mm <= 0:
        return 0
    pct = (recent_7day_mm - average_weekly_mm) / average_weekly_mm * 100
    return int(round_half_up(pct))


def narrative_clauses(pct_vs_average: int, is_wettest_month: bool) -> List[str]:
    return [
        build(pct_vs_average, is_wettest_month)
        for applies, build in CLAUSE_RULES
        if applies(pct_vs_average, is_wettest_month)
    ]


def severity_word(pct_vs_average: int, is_wettest_month: bool) -> str:
    for applies, word in SEVERITY_RULES:
        if applies(pct_vs_average, is_wettest_month):
            return word
    return DEFAULT_SEVERITY


def build_narrative(pct_vs_average: int, is_wettest_month: bool) -> str:
    clauses = narrative_clauses(pct_vs_average, is_wettest_month)
    if not clauses:
        return NEUTRAL_NARRATIVE

    severity = severity_word(pct_vs_average, is_wettest_month)
    return f"This area is at {severity} risk because {' and '.join(clauses)}."


def _recent_vs_average_bullet(recent_7day_mm: float, average_weekly_mm: float, pct: int) -> str:
    recent = f"{round_half_up(recent_7day_mm, 1):g}mm"
    if average_weekly_mm <= 0:
        return f"Last 7 days: {recent} — Insufficient historical data for comparison"

    direction = f"{pct}% above" if pct >= 0 else f"{abs(pct)}% below"
    return (
        f"Last 7 days: {recent} — {direction} yearly average "
        f"({round_half_up(average_weekly_mm):.0f}mm/week)"
    )


def _wettest_month_bullet(stats: HistoricalStats, is_wettest_month: bool) -> str:
    if not stats.wettest_month_key:
        return "Historical data unavailable"

    total = f"{round_half_up(stats.wettest_month_total_mm):.0f}mm"
    if is_wettest_month:
        return (
            f"Yes — {month_label(stats.wettest_month_key, with_year=False)} "
            f"historically records the most rain ({total} avg)"
        )
    return (
        f"No — Wettest month is {month_label(stats.wettest_month_key)} ({total}). "
        "Current month is typically drier."
    )


def _peak_day_bullet(peak_day: Optional[PeakDay]) -> str:
    if peak_day is None:
        return "No significant rainfall events in past year"

    day = peak_day.date
    return (
        f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year} — "
        f"{round_half_up(peak_day.amount_mm):.0f}mm in one day"
    )


def monthly_rainfall_bars(stats: HistoricalStats, months: int = MONTHS_CHARTED) -> List[RainfallBar]:
    """Last ``months`` monthly totals, ascending by key"""
    keys = sorted(stats.monthly_totals)[-months:]
    return [
        RainfallBar(
            label=month_label(key),
            amount_mm=round_half_up(stats.monthly_totals[key], 1),
            key=key,
        )
        for key in keys
    ]


def explain(stats: HistoricalStats, recent_7day_mm: float, current_month_key: str) -> RiskExplanation:
    """
    Build the risk explanation for the current month

    Args:
        stats: Aggregated yearly history
        recent_7day_mm: Rainfall over the trailing 7 days
        current_month_key: YYYY-MM of "now"

    Returns:
        RiskExplanation; with an empty history the bullets fall back to
        "insufficient"/"unavailable" phrasing, the narrative is neutral and
        monthly_rainfall is empty (the engine charts placeholder months)
    """
    recent = coerce_rainfall(recent_7day_mm)
    average_weekly = stats.average_weekly_mm

    pct = percent_vs_average(recent, average_weekly)
    is_wettest = stats.wettest_month_key is not None and stats.wettest_month_key == current_month_key

    peak_day = None
    if stats.peak_day is not None:
        peak_day = PeakDay(date=stats.peak_day.date, amount_mm=round_half_up(stats.peak_day.amount_mm))

    return RiskExplanation(
        bullet1=_recent_vs_average_bullet(recent, average_weekly, pct),
        bullet2=_wettest_month_bullet(stats, is_wettest),
        bullet3=_peak_day_bullet(stats.peak_day),
        narrative=build_narrative(pct, is_wettest),
        is_wettest_month=is_wettest,
        recent_7day_mm=recent,
        average_weekly_mm=average_weekly,
        pct_vs_average=pct,
        monthly_rainfall=monthly_rainfall_bars(stats),
        wettest_month_key=stats.wettest_month_key,
        peak_day=peak_day,
    )


def summarize_climate(stats: HistoricalStats) -> ClimateSummary:
    """Seasonal pattern, notable event and average daily rainfall for the climate card"""
    if stats.wettest_month_key:
        seasonal_pattern = (
            f"{month_label(stats.wettest_month_key)} wettest "
            f"({round_half_up(stats.wettest_month_total_mm):.0f}mm)"
        )
    else:
        seasonal_pattern = "No precipitation data"

    if stats.peak_day is not None:
        last_major_event = (
            f"{stats.peak_day.date.isoformat()} - High rainfall "
            f"({round_half_up(stats.peak_day.amount_mm):.0f}mm)"
        )
    else:
        last_major_event = "No significant events in past year"

    return ClimateSummary(
        seasonal_pattern=seasonal_pattern,
        last_major_event=last_major_event,
        average_daily_mm=round_half_up(stats.average_daily_mm, 1),
    )
