# tests/conftest.py
from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import pytest
from loguru import logger

DAY = 86_400
T0 = 1_700_000_000


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def _series(
    closes: Sequence[float],
    opens: Optional[Sequence[float]] = None,
    volumes: Optional[Sequence[float]] = None,
    step: int = DAY,
    start: int = T0,
    ticker: str = "TEST",
) -> pd.DataFrame:
    n = len(closes)
    opens = list(opens) if opens is not None else list(closes)
    volumes = list(volumes) if volumes is not None else [1_000.0] * n
    return pd.DataFrame(
        {
            "ticker": [ticker] * n,
            "timestamp": [start + i * step for i in range(n)],
            "open": [float(x) for x in opens],
            "high": [max(o, c) for o, c in zip(opens, closes)],
            "low": [min(o, c) for o, c in zip(opens, closes)],
            "close": [float(x) for x in closes],
            "volume": [float(v) for v in volumes],
        }
    )


@pytest.fixture
def make_series():
    """
    Factory fixture for synthetic daily Series frames.

    Usage:
        df = make_series([100, 101, 102])
        df = make_series(closes, opens=opens, step=60)
    """
    return _series


@pytest.fixture
def rising_series() -> pd.DataFrame:
    """25 daily bars: open[i] = 99 + i, close[i] = 100 + i"""
    return _series(
        closes=[100.0 + i for i in range(25)],
        opens=[99.0 + i for i in range(25)],
    )


@pytest.fixture
def zigzag_series() -> pd.DataFrame:
    closes = [100, 102, 101, 103, 103, 99, 104, 102, 102, 105, 101, 106, 104, 104, 107]
    return _series(closes=closes, opens=[c - 0.5 for c in closes])
