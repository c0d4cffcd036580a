#!filepath: stratlab/backtest/metrics.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

import numpy as np

from stratlab.backtest.result import BacktestResult


class MetricsCollector(ABC):
    """
    MetricsCollector (FINAL)

    BacktestResult -> metrics dict

    Metrics are pure functions of BacktestResult.
    Metrics must not affect backtest execution.
    """

    @abstractmethod
    def compute(self, result: BacktestResult) -> Dict[str, float]:
        ...


class BasicMetrics(MetricsCollector):
    def __init__(self, initial_capital: float):
        self._initial = float(initial_capital)

    def compute(self, result: BacktestResult) -> Dict[str, float]:
        if not result.trade_log:
            return {
                "final_capital": self._initial,
                "n_steps": 0,
                "win_rate": 0.0,
                "max_drawdown_pct": 0.0,
                "sharpe": 0.0,
            }

        pl = np.array([e.step_profit_loss for e in result.trade_log])
        eq = np.concatenate([[self._initial], [e.capital_after for e in result.trade_log]])

        traded = pl[pl != 0]
        win_rate = float(np.mean(traded > 0)) if len(traded) else 0.0

        peak = np.maximum.accumulate(eq)
        with np.errstate(divide="ignore", invalid="ignore"):
            dd = np.where(peak > 0, (peak - eq) / peak, 0.0)

        # 每步资金收益率（资金归零后的步骤不计）
        prev = eq[:-1]
        ret = np.divide(pl, prev, out=np.zeros_like(pl), where=prev > 0)
        std = np.std(ret)
        sharpe = float(np.mean(ret) / std) if std > 0 else 0.0

        return {
            "final_capital": float(eq[-1]),
            "n_steps": len(pl),
            "win_rate": win_rate,
            "max_drawdown_pct": float(np.max(dd)),
            "sharpe": sharpe,
        }


class MetricsPipeline:
    def __init__(self, collectors: list[MetricsCollector]):
        self._collectors = collectors

    def compute(self, result: BacktestResult) -> Dict[str, float]:
        metrics = {}
        for c in self._collectors:
            metrics.update(c.compute(result))
        return metrics
