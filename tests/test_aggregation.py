from datetime import date

import pandas as pd
import pytest

from src.risk_engine import aggregate_history, daily_rainfall_history, sum_recent
from src.risk_engine.aggregation import (
    monthly_totals,
    read_precipitation_series,
    round_half_up,
    to_precipitation_frame,
)

from conftest import daily_series


class TestAggregateHistory:

    def test_yearly_statistics(self, yearly_frame):
        stats = aggregate_history(yearly_frame)

        assert stats.sample_count == 365
        assert stats.yearly_total_mm == pytest.approx(1118.0)
        assert stats.average_daily_mm == pytest.approx(1118.0 / 365)
        assert stats.average_weekly_mm == pytest.approx(1118.0 / 52)
        assert stats.wettest_month_key == "2025-07"
        assert stats.wettest_month_total_mm == pytest.approx(450.0)
        assert stats.peak_day.date == date(2025, 7, 14)
        assert stats.peak_day.amount_mm == 90.0

    def test_monthly_totals_are_chronological(self, yearly_frame):
        stats = aggregate_history(yearly_frame)

        keys = list(stats.monthly_totals)
        assert keys[0] == "2024-08"
        assert keys[-1] == "2025-07"
        assert len(keys) == 12
        assert stats.monthly_totals["2025-02"] == pytest.approx(56.0)

    def test_weekly_average_uses_fixed_divisor(self):
        # Two weeks of data still divides by 52
        stats = aggregate_history(daily_series(date(2025, 1, 1), [5.2] * 14))
        assert stats.average_weekly_mm == pytest.approx(5.2 * 14 / 52)

    def test_empty_series(self):
        for series in (None, [], pd.DataFrame(columns=["date", "precipitation_mm"])):
            stats = aggregate_history(series)
            assert stats.sample_count == 0
            assert stats.yearly_total_mm == 0
            assert stats.average_daily_mm == 0
            assert stats.average_weekly_mm == 0
            assert stats.wettest_month_key is None
            assert stats.peak_day is None
            assert stats.monthly_totals == {}

    def test_missing_amounts_excluded_from_count(self):
        series = daily_series(date(2025, 3, 1), [4.0, None, 6.0, None])
        stats = aggregate_history(series)

        assert stats.sample_count == 2
        assert stats.yearly_total_mm == 10.0
        assert stats.average_daily_mm == 5.0
        assert stats.monthly_totals == {"2025-03": 10.0}

    def test_malformed_amounts_ignored(self):
        series = [
            {"date": "2025-03-01", "amount_mm": "abc"},
            {"date": "2025-03-02", "amount_mm": -3.0},
            {"date": "2025-03-03", "amount_mm": 7.5},
            {"date": "not a date", "amount_mm": 100.0},
        ]
        stats = aggregate_history(series)

        assert stats.sample_count == 1
        assert stats.yearly_total_mm == 7.5
        assert stats.peak_day.amount_mm == 7.5

    def test_all_missing_month_still_listed(self):
        series = daily_series(date(2025, 1, 31), [3.0, None])
        stats = aggregate_history(series)
        assert stats.monthly_totals == {"2025-01": 3.0, "2025-02": 0.0}

    def test_wettest_month_tie_keeps_first(self):
        series = daily_series(date(2025, 1, 31), [10.0, 10.0])
        stats = aggregate_history(series)

        assert stats.wettest_month_key == "2025-01"
        assert stats.wettest_month_total_mm == 10.0

    def test_peak_day_tie_keeps_first(self):
        series = daily_series(date(2025, 5, 1), [3.0, 8.0, 1.0, 8.0])
        stats = aggregate_history(series)
        assert stats.peak_day.date == date(2025, 5, 2)

    def test_no_peak_day_without_rain(self):
        stats = aggregate_history(daily_series(date(2025, 5, 1), [0.0, 0.0, None]))
        assert stats.peak_day is None
        assert stats.wettest_month_key == "2025-05"

    def test_duplicate_dates_do_not_crash(self):
        series = [
            {"date": "2025-06-01", "precipitation_mm": 4.0},
            {"date": "2025-06-01", "precipitation_mm": 6.0},
        ]
        stats = aggregate_history(series)
        assert stats.monthly_totals == {"2025-06": 10.0}
        assert stats.peak_day.amount_mm == 6.0

    def test_totals_independent_of_order(self, yearly_frame):
        shuffled = yearly_frame.sample(frac=1.0, random_state=7)
        assert aggregate_history(shuffled).yearly_total_mm == pytest.approx(
            aggregate_history(yearly_frame).yearly_total_mm
        )

    def test_idempotent(self, yearly_frame):
        assert aggregate_history(yearly_frame) == aggregate_history(yearly_frame)


class TestSumRecent:

    def test_sums_first_seven_entries(self, recent_frame):
        assert sum_recent(recent_frame) == 140.0

    def test_custom_days(self, recent_frame):
        assert sum_recent(recent_frame, days=3) == 60.0
        assert sum_recent(recent_frame, days=8) == 240.0

    def test_never_sums_more_than_window(self):
        window = daily_series(date(2025, 7, 1), [1.0] * 3)
        assert sum_recent(window, days=7) == 3.0

    def test_missing_amounts_count_as_zero(self):
        window = daily_series(date(2025, 7, 1), [5.0, None, "bad", 2.5])
        assert sum_recent(window) == 7.5

    def test_empty_window(self):
        assert sum_recent(None) == 0.0
        assert sum_recent([]) == 0.0


class TestDailyRainfallHistory:

    def test_daily_bars(self, recent_frame):
        history = daily_rainfall_history(recent_frame, days=14)

        assert len(history.bars) == 14
        assert history.bars[0].label == "13 Jul"
        assert history.bars[0].key == "2025-07-13"
        assert history.bars[0].amount_mm == 20.0
        assert history.wettest_key == "2025-07-20"
        assert history.peak_day.amount_mm == 100.0
        assert history.is_current

    def test_amounts_rounded_to_one_decimal(self):
        history = daily_rainfall_history(daily_series(date(2025, 7, 1), [2.25, 0.04]))
        assert [bar.amount_mm for bar in history.bars] == [2.3, 0.0]
        assert history.peak_day.amount_mm == 2.0

    def test_empty_window(self):
        history = daily_rainfall_history(None)
        assert history.bars == []
        assert history.peak_day is None
        assert history.wettest_key is None


def test_to_precipitation_frame_accepts_dataframe_without_amounts():
    df = to_precipitation_frame(pd.DataFrame({"date": ["2025-01-01"]}))
    assert len(df) == 1
    assert df["precipitation_mm"].isna().all()


def test_monthly_totals_empty():
    assert monthly_totals(None).empty


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(-12.5) == -12
    assert round_half_up(1.25, 1) == 1.3


class TestReadPrecipitationSeries:

    @pytest.mark.parametrize("series", [
        5,
        3.2,
        "2025-07-01",
        b"raw",
        {"date": "2025-07-01", "amount_mm": 4.0},
        pd.DataFrame({"day": ["2025-07-01"], "precipitation_mm": [4.0]}),
        [1, 2, 3],
    ])
    def test_unreadable_inputs(self, series):
        assert read_precipitation_series(series) is None
        assert to_precipitation_frame(series).empty
        assert aggregate_history(series).sample_count == 0
        assert sum_recent(series) == 0.0
        assert daily_rainfall_history(series).bars == []

    def test_absent_series(self):
        assert read_precipitation_series(None) is None

    def test_empty_list_reads_as_empty_frame(self):
        df = read_precipitation_series([])
        assert df is not None
        assert df.empty

    def test_generator_of_samples(self):
        samples = ({"date": f"2025-07-0{day}", "amount_mm": 2.0} for day in range(1, 4))
        df = read_precipitation_series(samples)
        assert len(df) == 3

    def test_non_sample_items_skipped(self):
        df = read_precipitation_series([{"date": "2025-07-01", "amount_mm": 2.0}, 7])
        assert len(df) == 1
