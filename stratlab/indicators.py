#!filepath: stratlab/indicators.py
from __future__ import annotations

from typing import NamedTuple, Sequence, Union

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

"""
{#!filepath: stratlab/indicators.py}

Technical indicators (pure, causal)

Contract:
- Input: 1-D price (and volume) arrays, oldest first.
- Output: array of the same length as the input.
- Value at index i depends only on inputs 0..i.

Placeholder rule:
- Where the trailing window is not yet full the output is 0.0 (not NaN).
  Callers must treat those leading entries as invalid.
"""

ArrayLike = Union[Sequence[float], np.ndarray]


class BollingerBands(NamedTuple):
    middle: np.ndarray
    upper: np.ndarray
    lower: np.ndarray


def _as_array(values: ArrayLike) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _check_window(window: int, name: str = "window") -> None:
    if window < 1:
        raise ValueError(f"{name} must be >= 1, got {window}")


# ------------------------------------------------------------------
# Moving average / standard deviation
# ------------------------------------------------------------------
def moving_average(values: ArrayLike, window: int) -> np.ndarray:
    """
    Simple moving average over the trailing `window` values.

    out[i] = mean(values[i-window+1 .. i]) for i >= window-1, else 0.0
    """
    _check_window(window)
    x = _as_array(values)
    out = np.zeros(len(x), dtype=float)
    if len(x) < window:
        return out

    out[window - 1:] = sliding_window_view(x, window).mean(axis=1)
    return out


def standard_deviation(values: ArrayLike, moving_avg: ArrayLike, window: int) -> np.ndarray:
    """
    Population standard deviation of the trailing `window` values around
    moving_avg[i]. Same 0.0 placeholder as moving_average.
    """
    _check_window(window)
    x = _as_array(values)
    ma = _as_array(moving_avg)
    if len(ma) != len(x):
        raise ValueError("values and moving_avg must have the same length")

    out = np.zeros(len(x), dtype=float)
    if len(x) < window:
        return out

    windows = sliding_window_view(x, window)
    dev = windows - ma[window - 1:, None]
    out[window - 1:] = np.sqrt((dev ** 2).sum(axis=1) / window)
    return out


# ------------------------------------------------------------------
# RSI (Wilder smoothing)
# ------------------------------------------------------------------
def rsi(values: ArrayLike, period: int) -> np.ndarray:
    """
    Relative Strength Index with Wilder smoothing.

    - delta[k] = values[k+1] - values[k]
    - gain / loss split (loss is positive)
    - avg seeded at k = period-1 as the simple mean of the first `period`
    - avg[k] = (avg[k-1] * (period-1) + x[k]) / period afterwards
    - out[k+1] = 100 if avg_loss[k] == 0 else 100 - 100 / (1 + avg_gain/avg_loss)

    Entries 0..period-1 stay 0.0. Inputs shorter than period+1 give all zeros.
    """
    _check_window(period, "period")
    x = _as_array(values)
    out = np.zeros(len(x), dtype=float)

    delta = np.diff(x)
    if len(delta) < period:
        return out

    gain = np.where(delta > 0, delta, 0.0)
    loss = np.where(delta < 0, -delta, 0.0)

    avg_gain = gain[:period].sum() / period
    avg_loss = loss[:period].sum() / period

    for k in range(period - 1, len(delta)):
        if k >= period:
            avg_gain = (avg_gain * (period - 1) + gain[k]) / period
            avg_loss = (avg_loss * (period - 1) + loss[k]) / period

        if avg_loss == 0:
            out[k + 1] = 100.0
        else:
            rs = avg_gain / avg_loss
            out[k + 1] = 100.0 - 100.0 / (1.0 + rs)

    return out


# ------------------------------------------------------------------
# VWAP
# ------------------------------------------------------------------
def vwap(prices: ArrayLike, volumes: ArrayLike) -> np.ndarray:
    """
    Cumulative volume-weighted average price.

    out[i] = sum(p[0..i] * v[0..i]) / sum(v[0..i])

    While cumulative volume is still 0 the price itself is returned.
    """
    p = _as_array(prices)
    v = _as_array(volumes)
    if len(p) != len(v):
        raise ValueError("prices and volumes must have the same length")

    cum_pv = np.cumsum(p * v)
    cum_v = np.cumsum(v)

    out = p.copy()
    traded = cum_v != 0
    out[traded] = cum_pv[traded] / cum_v[traded]
    return out


# ------------------------------------------------------------------
# Bollinger bands
# ------------------------------------------------------------------
def bollinger_bands(values: ArrayLike, window: int = 20, num_std: float = 2.0) -> BollingerBands:
    """
    middle = moving_average(window)
    upper / lower = middle ± num_std * standard_deviation(window)
    """
    middle = moving_average(values, window)
    std = standard_deviation(values, middle, window)
    return BollingerBands(
        middle=middle,
        upper=middle + num_std * std,
        lower=middle - num_std * std,
    )
