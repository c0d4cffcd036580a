#!filepath: stratlab/strategy/rsi.py
from __future__ import annotations

import pandas as pd

from stratlab.backtest.types import Action
from stratlab.data.types import CLOSE, column
from stratlab.indicators import rsi


class RSIReversionStrategy:
    """
    RSI < oversold -> Buy, RSI > overbought -> Sell, else Hold.
    Needs period + 1 bars.
    """

    def __init__(self, period: int = 2, oversold: float = 30.0, overbought: float = 70.0) -> None:
        if period < 1:
            raise ValueError(f"period must be >= 1, got {period}")
        self.period = period
        self.oversold = oversold
        self.overbought = overbought

    def decide(self, prefix: pd.DataFrame) -> Action:
        if len(prefix) - 1 < self.period:
            return Action.HOLD

        current = rsi(column(prefix, CLOSE), self.period)[-1]

        if current < self.oversold:
            return Action.BUY
        if current > self.overbought:
            return Action.SELL
        return Action.HOLD
