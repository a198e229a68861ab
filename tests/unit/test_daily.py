import logging

import numpy as np
import pandas as pd
import pytest

from airmonitor.analysis.daily import get_daily_average, rolling_24hr
from airmonitor.core.errors import UnknownSeries

TZ = "Etc/GMT+7"
THREE_DAYS = [1.0] * 24 + [2.0] * 24 + [float(h) for h in range(24)]


def test_three_full_days(make_monitor):
    # 07:00 UTC is local midnight at UTC-7.
    monitor = make_monitor({"a": THREE_DAYS}, start="2024-01-01 07:00", timezone=TZ)
    daily = get_daily_average(monitor, "a")

    assert list(daily.columns) == ["datetime", "avg_pm25"]
    assert len(daily) == 3
    assert daily["datetime"].iloc[0] == pd.Timestamp("2024-01-01 07:00", tz="UTC")
    assert daily["datetime"].iloc[2] == pd.Timestamp("2024-01-03 07:00", tz="UTC")
    assert daily["avg_pm25"].tolist() == [1.0, 2.0, 11.5]


def test_partial_days_are_trimmed_before_averaging(make_monitor):
    values = [100.0] * 5 + THREE_DAYS + [100.0] * 3
    # Starts at local 19:00 and ends at local 02:00.
    monitor = make_monitor({"a": values}, start="2024-01-01 02:00", timezone=TZ)
    daily = monitor.daily_average("a")
    assert len(daily) == 3
    assert daily["datetime"].iloc[0] == pd.Timestamp("2024-01-01 07:00", tz="UTC")
    assert daily["avg_pm25"].tolist() == [1.0, 2.0, 11.5]


def test_timezone_comes_from_series_metadata(make_monitor):
    monitor = make_monitor({"a": THREE_DAYS}, start="2024-01-01 07:00", timezone="UTC")
    daily = monitor.daily_average("a")
    # In UTC the axis starts at 07:00, leaving two whole days.
    assert len(daily) == 2
    assert daily["datetime"].iloc[0] == pd.Timestamp("2024-01-02 00:00", tz="UTC")


def test_missing_readings(make_monitor):
    nan = float("nan")
    values = [2.0] * 12 + [nan] * 12 + [nan] * 24 + [1.0] * 12 + [1.5] * 12
    monitor = make_monitor({"a": values}, start="2024-01-01 07:00", timezone=TZ)
    daily = monitor.daily_average("a")
    assert daily["avg_pm25"].iloc[0] == 2.0
    assert np.isnan(daily["avg_pm25"].iloc[1])
    assert daily["avg_pm25"].iloc[2] == 1.3


def test_rolling_24hr_window():
    series = pd.Series([float(i) for i in range(30)])
    out = rolling_24hr(series)
    assert out.iloc[0] == 0.0
    assert out.iloc[23] == pytest.approx(11.5)
    assert out.iloc[29] == pytest.approx(17.5)


def test_short_series_has_no_days(make_monitor):
    monitor = make_monitor({"a": [1.0] * 10}, start="2024-01-01 07:00", timezone=TZ)
    assert len(monitor.daily_average("a")) == 0


def test_unknown_series(make_monitor):
    monitor = make_monitor({"a": [1.0]})
    with pytest.raises(UnknownSeries):
        get_daily_average(monitor, "zzz")


def test_dst_short_day_logs_partial_block(make_monitor, caplog):
    # Local midnight 2024-03-09 through 23:00 on 2024-03-11; March 10 has 23 hours.
    monitor = make_monitor({"a": [4.0] * 71}, start="2024-03-09 08:00", timezone="America/Los_Angeles")
    caplog.set_level(logging.DEBUG, logger="airmonitor.analysis.daily")

    daily = monitor.daily_average("a")

    assert len(daily) == 2
    assert "not whole days" in caplog.text
