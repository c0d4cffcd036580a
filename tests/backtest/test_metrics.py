#!filepath: tests/backtest/test_metrics.py
import pytest

from stratlab.backtest import Action, BacktestResult, run_backtest
from stratlab.backtest.metrics import BasicMetrics, MetricsCollector, MetricsPipeline


def always(action):
    return lambda prefix: action


def test_basic_metrics_empty_result():
    m = BasicMetrics(1_000.0).compute(BacktestResult.empty())

    assert m["final_capital"] == 1_000.0
    assert m["n_steps"] == 0
    assert m["sharpe"] == 0.0


def test_basic_metrics(make_series):
    df = make_series([110.0, 90.0, 100.0], opens=[100.0, 100.0, 100.0])
    result, _ = run_backtest(df, always(Action.BUY), "1D", 1_000.0)

    m = BasicMetrics(1_000.0).compute(result)

    assert m["final_capital"] == pytest.approx(990.0)
    assert m["n_steps"] == 3
    # one win, one loss, one flat bar
    assert m["win_rate"] == pytest.approx(0.5)
    assert m["max_drawdown_pct"] == pytest.approx(0.1)


def test_metrics_do_not_touch_result(rising_series):
    result, _ = run_backtest(rising_series, always(Action.BUY), "1D", 1_000.0)
    before = result.trade_log

    BasicMetrics(1_000.0).compute(result)

    assert result.trade_log is before


def test_pipeline_merges_collectors(rising_series):
    class CountMetrics(MetricsCollector):
        def compute(self, result):
            return {"buys": result.buy_count}

    result, _ = run_backtest(rising_series, always(Action.BUY), "1D", 1_000.0)

    m = MetricsPipeline([BasicMetrics(1_000.0), CountMetrics()]).compute(result)

    assert m["buys"] == 25
    assert "sharpe" in m
    assert m["sharpe"] > 0
