#!filepath: stratlab/backtest/engine.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from stratlab import logs
from stratlab.backtest.result import BacktestResult, TradeLogEntry
from stratlab.backtest.types import Action, DecideFn
from stratlab.data.types import CLOSE, OPEN, TIMESTAMP, column, timestamps_seconds
from stratlab.utils.errors import ValidationError

"""
{#!filepath: stratlab/backtest/engine.py}

Backtest engine (FINAL / FROZEN)

Semantics:
- One strategy, one series, one pass over the bars.
- Bar i is skipped when it is closer than `interval` to bar i-1.
- Otherwise decide(bars[0:i]) is called; bar i itself is never visible.
- The action is applied to bar i's open -> close move, sized by the
  current capital.

Invariants:
- Capital never goes below 0.
- max_up / max_down are the high / low water marks of cumulative P/L.
- Validation errors are detected before the first step; no partial ledger.

This engine answers:
"What would this rule have earned on this history, bar by bar?"
"""

IntervalLike = Union[timedelta, pd.Timedelta, str, float, int]


def _interval_seconds(interval: IntervalLike) -> float:
    """timedelta / "1D" / seconds -> float seconds"""
    if isinstance(interval, (int, float)) and not isinstance(interval, bool):
        return float(interval)
    return pd.Timedelta(interval).total_seconds()


def _time_between(t1: float, t2: float) -> float:
    return abs(t2 - t1)


def is_interval_fine_enough(timestamps: np.ndarray, interval_sec: float) -> bool:
    """
    True when at least ONE adjacent pair is no further apart than interval.

    Permissive: a mostly-coarse series with one close pair passes.
    """
    for i in range(1, len(timestamps)):
        if _time_between(timestamps[i - 1], timestamps[i]) <= interval_sec:
            return True
    return False


def _format_ts(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


class Backtester:
    """
    Stateful runner for one invocation.

    run() raises ValidationError; run_backtest() is the value-returning boundary.
    """

    def __init__(self, series: pd.DataFrame, decide: DecideFn, interval: IntervalLike, initial_capital: float):
        self.series = series
        self.decide = decide
        self.interval = interval
        self.initial_capital = float(initial_capital)

    # --------------------------------------------------
    def _validate(self) -> Tuple[np.ndarray, float]:
        if TIMESTAMP not in self.series.columns:
            raise ValidationError(f"series must have a '{TIMESTAMP}' column")

        missing = [c for c in (OPEN, CLOSE) if c not in self.series.columns]
        if missing:
            raise ValidationError(f"series is missing price columns: {missing}")

        if not self.initial_capital > 0:
            raise ValidationError(f"initial capital must be > 0, got {self.initial_capital}")

        try:
            interval_sec = _interval_seconds(self.interval)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"invalid interval: {self.interval!r}") from e
        if interval_sec <= 0:
            raise ValidationError(f"interval must be positive, got {self.interval!r}")

        try:
            timestamps = timestamps_seconds(self.series)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"'{TIMESTAMP}' column is not numeric or datetime: {e}") from e

        if not is_interval_fine_enough(timestamps, interval_sec):
            raise ValidationError(
                f"data interval is not fine-grained enough for the specified interval: {self.interval}"
            )

        return timestamps, interval_sec

    # --------------------------------------------------
    def run(self) -> BacktestResult:
        timestamps, interval_sec = self._validate()

        opens = column(self.series, OPEN)
        closes = column(self.series, CLOSE)

        total_pl = 0.0
        max_up = 0.0
        max_down = 0.0
        capital = self.initial_capital
        ledger: List[TradeLogEntry] = []

        for i in range(len(timestamps)):
            if i > 0 and _time_between(timestamps[i - 1], timestamps[i]) < interval_sec:
                logs.debug(f"[Backtest] skip i={i} gap={timestamps[i] - timestamps[i - 1]:.0f}s < {interval_sec:.0f}s")
                continue

            # 只给 strategy 看 [0, i)
            # ensemble 在 decide 内部解析成员投票，同样算作非法 action
            try:
                action = Action.parse(self.decide(self.series.iloc[:i]))
            except ValueError as e:
                raise ValidationError(f"strategy returned an invalid action at bar {i}: {e}") from e

            open_price = opens[i]
            close_price = closes[i]

            step_pl = 0.0
            if open_price != 0:
                if action is Action.BUY:
                    step_pl = (close_price - open_price) / open_price * capital
                elif action is Action.SELL:
                    step_pl = (open_price - close_price) / open_price * capital

            total_pl += step_pl
            capital += step_pl

            # 不允许负资金（无保证金）
            if capital < 0:
                capital = 0.0

            max_up = max(max_up, total_pl)
            max_down = min(max_down, total_pl)

            ledger.append(
                TradeLogEntry(
                    timestamp=float(timestamps[i]),
                    action=action,
                    open_price=float(open_price),
                    close_price=float(close_price),
                    step_profit_loss=step_pl,
                    cumulative_profit_loss=total_pl,
                    capital_after=capital,
                )
            )

            logs.debug(
                f"[Backtest] {_format_ts(timestamps[i])} {action.value:<4} "
                f"pl={step_pl:.2f} total={total_pl:.2f} capital={capital:.2f}"
            )

        return self._summarize(ledger, total_pl, max_up, max_down)

    # --------------------------------------------------
    def _summarize(self, ledger: List[TradeLogEntry], total_pl: float, max_up: float, max_down: float) -> BacktestResult:
        buy = sum(1 for e in ledger if e.action is Action.BUY)
        sell = sum(1 for e in ledger if e.action is Action.SELL)
        hold = sum(1 for e in ledger if e.action is Action.HOLD)

        # 市场收益只看被评估的 bar
        first_open = ledger[0].open_price
        last_close = ledger[-1].close_price
        gain_market = (last_close - first_open) / first_open if first_open != 0 else 0.0

        gain_strategy = total_pl / self.initial_capital

        result = BacktestResult(
            total_profit_loss=total_pl,
            max_up=max_up,
            max_down=max_down,
            trade_log=tuple(ledger),
            buy_count=buy,
            sell_count=sell,
            hold_count=hold,
            gain_market=gain_market,
            gain_strategy=gain_strategy,
            gain_vs_market=gain_strategy - gain_market,
        )

        logs.info(
            f"[Backtest] steps={len(ledger)} buy={buy} sell={sell} hold={hold} "
            f"pl={total_pl:.2f} gain={gain_strategy:.4f} market={gain_market:.4f}"
        )
        return result


def run_backtest(
    series: pd.DataFrame,
    decide: DecideFn,
    interval: IntervalLike,
    initial_capital: float,
) -> Tuple[BacktestResult, Optional[ValidationError]]:
    """
    Engine boundary: errors are returned, never raised.

    Returns (result, None) on success, (BacktestResult.empty(), err) otherwise.
    """
    try:
        return Backtester(series, decide, interval, initial_capital).run(), None
    except ValidationError as e:
        logs.warning(f"[Backtest] validation failed: {e}")
        return BacktestResult.empty(), e
