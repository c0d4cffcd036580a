#!filepath: stratlab/workflows/backtest_workflow.py
from __future__ import annotations

import random
from typing import Dict, Optional

import pandas as pd

from stratlab import logs
from stratlab.backtest.engine import run_backtest
from stratlab.backtest.metrics import BasicMetrics, MetricsPipeline
from stratlab.backtest.result import BacktestResult
from stratlab.config.app_config import AppConfig
from stratlab.config.data_config import DataConfig
from stratlab.data.cleaning import FillStrategy, fill_missing, remove_outliers
from stratlab.data.file_source import FileDataSource
from stratlab.data.types import bars_to_frame
from stratlab.observability.instrumentation import Instrumentation
from stratlab.strategy.base import Trainable
from stratlab.strategy.factory import StrategyFactory
from stratlab.utils.errors import UpstreamError


def load_series(cfg: DataConfig) -> pd.DataFrame:
    """
    DataConfig -> 清洗后的 Series frame
    """
    source = FileDataSource(cfg.path, cfg.format)
    bars = source.fetch(cfg.ticker, cfg.start, cfg.end)
    if not bars:
        raise UpstreamError(f"no bars for ticker={cfg.ticker} in {cfg.path}")

    df = bars_to_frame(bars)

    cleaning = cfg.cleaning
    if cleaning.fill != "none":
        df = fill_missing(df, FillStrategy(cleaning.fill), cleaning.fill_value)
    if cleaning.remove_outliers:
        df = remove_outliers(df, cleaning.outlier_std)

    return df


def run_backtest_workflow(cfg: AppConfig, inst: Optional[Instrumentation] = None) -> BacktestResult:
    """
    config -> data -> strategy(build) -> backtest

    返回的 error 直接抛给调用方（CLI 负责展示）。
    """
    inst = inst if inst is not None else Instrumentation(enabled=True)
    bt = cfg.backtest

    with inst.timer("load_series"):
        series = load_series(cfg.data)
    inst.metrics.record("bars", len(series))

    rng = random.Random(bt.seed)
    strategy = StrategyFactory.create(bt.strategy, rng=rng)

    # Markov 等需要先看完整段历史（与回测区间重叠）
    if isinstance(strategy, Trainable):
        with inst.timer("build_strategy"):
            strategy.build(series)

    with inst.timer("simulate"):
        result, err = run_backtest(series, strategy.decide, bt.interval_timedelta, bt.initial_capital)
    if err is not None:
        raise err

    metrics = MetricsPipeline([BasicMetrics(bt.initial_capital)]).compute(result)
    for name, value in metrics.items():
        inst.metrics.record(name, value)

    inst.report(bt.name)
    return result


def summarize(result: BacktestResult) -> Dict[str, float]:
    return {
        "buy_count": result.buy_count,
        "sell_count": result.sell_count,
        "hold_count": result.hold_count,
        "total_profit_loss": result.total_profit_loss,
        "gain_strategy": result.gain_strategy,
        "max_up": result.max_up,
        "max_down": result.max_down,
        "gain_market": result.gain_market,
        "gain_vs_market": result.gain_vs_market,
    }
