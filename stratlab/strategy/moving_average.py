#!filepath: stratlab/strategy/moving_average.py
from __future__ import annotations

import pandas as pd

from stratlab.backtest.types import Action
from stratlab.data.types import CLOSE, column
from stratlab.indicators import moving_average


class MovingAverageCrossoverStrategy:
    """
    短均线上穿长均线 -> Buy，下穿 -> Sell，否则 Hold。

    需要至少 long_window 根 bar。长均线刚变得有效的那一根，
    上一根的长均线仍是占位值（无效），此时只比较当前位置：
    short > long -> Buy，short < long -> Sell。
    """

    def __init__(self, short_window: int = 5, long_window: int = 20) -> None:
        if not 1 <= short_window <= long_window:
            raise ValueError(
                f"need 1 <= short_window <= long_window, got {short_window}, {long_window}"
            )
        self.short_window = short_window
        self.long_window = long_window

    def decide(self, prefix: pd.DataFrame) -> Action:
        n = len(prefix)
        if n < self.long_window:
            return Action.HOLD

        closes = column(prefix, CLOSE)
        short_ma = moving_average(closes, self.short_window)
        long_ma = moving_average(closes, self.long_window)

        cur_short, cur_long = short_ma[-1], long_ma[-1]

        # 上一根长均线尚无效：没有“上一状态”，任何方向的分离都算穿越
        if n == self.long_window:
            prev_short, prev_long = cur_long, cur_long
        else:
            prev_short, prev_long = short_ma[-2], long_ma[-2]

        if prev_short <= prev_long and cur_short > cur_long:
            return Action.BUY
        if prev_short >= prev_long and cur_short < cur_long:
            return Action.SELL
        return Action.HOLD
