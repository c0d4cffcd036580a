#!filepath: stratlab/strategy/vwap.py
from __future__ import annotations

import pandas as pd

from stratlab.backtest.types import Action
from stratlab.data.types import CLOSE, VOLUME, column
from stratlab.indicators import vwap


class VWAPReversionStrategy:
    """
    价格相对 VWAP 偏离超过 threshold 时反向操作：
      (price - vwap) / vwap < -threshold -> Buy
      (price - vwap) / vwap >  threshold -> Sell
    """

    def __init__(self, threshold: float = 0.01) -> None:
        if threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {threshold}")
        self.threshold = threshold

    def decide(self, prefix: pd.DataFrame) -> Action:
        if len(prefix) < 1:
            return Action.HOLD

        closes = column(prefix, CLOSE)
        current_vwap = vwap(closes, column(prefix, VOLUME))[-1]
        if current_vwap == 0:
            return Action.HOLD

        deviation = (closes[-1] - current_vwap) / current_vwap

        if deviation < -self.threshold:
            return Action.BUY
        if deviation > self.threshold:
            return Action.SELL
        return Action.HOLD
