import numpy as np
import pandas as pd
import pytest

from airmonitor.analysis.nowcast import get_nowcast, nowcast_pm
from airmonitor.core.errors import InsufficientData

nan = float("nan")


def _chronological(most_recent_first):
    return list(reversed(most_recent_first))


def test_constant_input_is_exact():
    assert nowcast_pm([10.0] * 12) == 10.0


def test_one_of_three_recent_is_missing():
    window = _chronological([5.0, nan, nan, 10.0, 10.0, 10.0])
    assert np.isnan(nowcast_pm(window))


def test_insufficient_recent_raises_when_strict():
    window = _chronological([5.0, nan, nan, 10.0, 10.0])
    with pytest.raises(InsufficientData):
        nowcast_pm(window, strict=True)


def test_two_of_three_recent_weights_by_hours_ago():
    window = _chronological([5.0, 6.0, nan, 10.0])
    # weight factor 0.5; 10.0 is three hours old, so its weight is 0.5**3.
    expected = (5.0 + 6.0 * 0.5 + 10.0 * 0.125) / (1.0 + 0.5 + 0.125)
    assert nowcast_pm(window) == round(expected, 1)
    assert nowcast_pm(window) == 5.7


def test_weight_factor_floor():
    assert nowcast_pm([1.0, 100.0]) == 67.0


def test_partial_window_rounds_half_up():
    assert nowcast_pm([1.0, 2.0]) == 1.7


def test_all_zero_window():
    assert nowcast_pm([0.0, 0.0, 0.0]) == 0.0


def test_single_value_is_missing():
    assert np.isnan(nowcast_pm(12.0))
    assert np.isnan(nowcast_pm([12.0]))


def test_none_treated_as_missing():
    assert nowcast_pm([None, 4.0, 4.0]) == 4.0
    assert np.isnan(nowcast_pm([None, None, None]))


def test_get_nowcast_every_position():
    times = pd.date_range("2024-01-01", periods=15, freq="1h", tz="UTC")
    series = pd.Series([10.0] * 15, index=times, name="a")
    out = get_nowcast(series)
    assert len(out) == 15
    assert out.index.equals(times)
    assert out.name == "a"
    assert np.isnan(out.iloc[0])
    assert (out.iloc[1:] == 10.0).all()


def test_get_nowcast_uses_trailing_twelve_hours():
    times = pd.date_range("2024-01-01", periods=14, freq="1h", tz="UTC")
    values = [1000.0, 1000.0] + [10.0] * 12
    out = get_nowcast(pd.Series(values, index=times))
    assert out.iloc[-1] == 10.0
    assert out.iloc[-2] > 10.0


def test_get_nowcast_missing_gap(make_monitor):
    monitor = make_monitor({"a": [5.0, 5.0, None, None, 5.0, 5.0]})
    out = monitor.nowcast("a")
    assert out.iloc[1] == 5.0
    assert out.iloc[2] == 5.0
    assert np.isnan(out.iloc[3])
    assert np.isnan(out.iloc[4])
    assert out.iloc[5] == 5.0


def test_rounding_uses_exact_binary_value():
    # 0.15 is stored just below the half, 0.25 exactly on it.
    assert nowcast_pm([0.15, 0.15]) == 0.1
    assert nowcast_pm([0.25, 0.25]) == 0.3
