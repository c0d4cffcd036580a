"""
Backtest (FINAL / FROZEN)

- engine : run_backtest(series, decide, interval, initial_capital) -> (result, error)
- result : immutable BacktestResult + per-bar TradeLogEntry ledger
- metrics: pure functions of BacktestResult
"""

from .engine import Backtester, run_backtest
from .result import BacktestResult, TradeLogEntry
from .types import ACTION_PRIORITY, Action

__all__ = [
    "Action",
    "ACTION_PRIORITY",
    "Backtester",
    "BacktestResult",
    "TradeLogEntry",
    "run_backtest",
]
