#!filepath: stratlab/data/types.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable

import numpy as np
import pandas as pd

# Series 列名（所有 engine / strategy 只认这些名字）
TICKER = "ticker"
TIMESTAMP = "timestamp"
OPEN = "open"
HIGH = "high"
LOW = "low"
CLOSE = "close"
VOLUME = "volume"

SERIES_COLUMNS = (TICKER, TIMESTAMP, OPEN, HIGH, LOW, CLOSE, VOLUME)


@dataclass(frozen=True)
class Bar:
    """
    One OHLCV record.

    timestamp: epoch seconds, strictly increasing per ticker.
    """

    ticker: str
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float


def bars_to_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    """
    Bars -> time-ordered DataFrame with SERIES_COLUMNS.
    """
    rows = [asdict(b) for b in bars]
    df = pd.DataFrame(rows, columns=list(SERIES_COLUMNS))
    if df.empty:
        return df
    return df.sort_values(TIMESTAMP, kind="stable").reset_index(drop=True)


def frame_to_bars(df: pd.DataFrame) -> list[Bar]:
    return [
        Bar(
            ticker=str(r[TICKER]),
            timestamp=int(r[TIMESTAMP]),
            open=float(r[OPEN]),
            high=float(r[HIGH]),
            low=float(r[LOW]),
            close=float(r[CLOSE]),
            volume=float(r[VOLUME]),
        )
        for r in df.to_dict("records")
    ]


def column(df: pd.DataFrame, name: str) -> np.ndarray:
    """Numeric column as float ndarray."""
    return df[name].to_numpy(dtype=float)


def timestamps_seconds(df: pd.DataFrame) -> np.ndarray:
    """
    timestamp 列 -> epoch seconds (float ndarray)

    接受：
      - int / float epoch seconds
      - datetime64（naive 视为 UTC）
      - object 列（ISO 字符串 / datetime 对象），按 UTC 解析

    无法解析时抛 ValueError / TypeError（由调用方转换）。
    """
    ts = df[TIMESTAMP]
    if pd.api.types.is_numeric_dtype(ts) and not pd.api.types.is_bool_dtype(ts):
        return ts.to_numpy(dtype=float)

    utc = pd.to_datetime(ts, utc=True)
    epoch = pd.Timestamp("1970-01-01", tz="UTC")
    return (utc - epoch).dt.total_seconds().to_numpy(dtype=float)
