#!filepath: stratlab/strategy/bollinger.py
from __future__ import annotations

import pandas as pd

from stratlab.backtest.types import Action
from stratlab.data.types import CLOSE, column
from stratlab.indicators import bollinger_bands


class BollingerReversionStrategy:
    def __init__(self, period: int = 20, num_std: float = 2.0) -> None:
        if period < 1:
            raise ValueError(f"period must be >= 1, got {period}")
        self.period = period
        self.num_std = num_std

    def decide(self, prefix: pd.DataFrame) -> Action:
        if len(prefix) < self.period:
            return Action.HOLD

        closes = column(prefix, CLOSE)
        bands = bollinger_bands(closes, self.period, self.num_std)
        price = closes[-1]

        # 触及下轨买，触及上轨卖
        if price <= bands.lower[-1]:
            return Action.BUY
        if price >= bands.upper[-1]:
            return Action.SELL
        return Action.HOLD
