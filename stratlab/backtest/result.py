#!filepath: stratlab/backtest/result.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Tuple

import pandas as pd

from stratlab.backtest.types import Action


@dataclass(frozen=True)
class TradeLogEntry:
    """
    One evaluated bar.

    timestamp: epoch seconds of the bar.
    """

    timestamp: float
    action: Action
    open_price: float
    close_price: float
    step_profit_loss: float
    cumulative_profit_loss: float
    capital_after: float


@dataclass(frozen=True)
class BacktestResult:
    """
    BacktestResult (FINAL / FROZEN)

    不可变事实结果，由 run_backtest 独占生成：
      - P/L 以货币计
      - max_up / max_down 是累计 P/L 的高/低水位（非百分比）
      - gain_* 为无量纲比例
    """

    total_profit_loss: float = 0.0
    max_up: float = 0.0
    max_down: float = 0.0
    trade_log: Tuple[TradeLogEntry, ...] = field(default_factory=tuple)
    buy_count: int = 0
    sell_count: int = 0
    hold_count: int = 0
    gain_market: float = 0.0
    gain_strategy: float = 0.0
    gain_vs_market: float = 0.0

    @classmethod
    def empty(cls) -> "BacktestResult":
        return cls()

    @property
    def total_count(self) -> int:
        return len(self.trade_log)

    def trade_log_frame(self) -> pd.DataFrame:
        """Ledger as a DataFrame (action as plain string)."""
        rows = []
        for e in self.trade_log:
            row = asdict(e)
            row["action"] = e.action.value
            rows.append(row)
        columns = [
            "timestamp", "action", "open_price", "close_price",
            "step_profit_loss", "cumulative_profit_loss", "capital_after",
        ]
        return pd.DataFrame(rows, columns=columns)
