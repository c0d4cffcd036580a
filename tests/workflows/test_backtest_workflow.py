#!filepath: tests/workflows/test_backtest_workflow.py
import pytest

from stratlab.config import AppConfig
from stratlab.observability import Instrumentation
from stratlab.utils.errors import UpstreamError, ValidationError
from stratlab.workflows import load_series, run_backtest_workflow, summarize


@pytest.fixture
def csv_path(tmp_path, zigzag_series):
    path = tmp_path / "TEST.csv"
    zigzag_series.to_csv(path, index=False)
    return path


def _cfg(path, **backtest):
    bt = {"name": "wf", "interval": "1D", "seed": 7, "strategy": {"type": "markov", "depth": 1}}
    bt.update(backtest)
    return AppConfig(data={"path": str(path), "ticker": "TEST"}, backtest=bt)


def test_load_series(csv_path, zigzag_series):
    df = load_series(_cfg(csv_path).data)

    assert len(df) == len(zigzag_series)
    assert df["close"].tolist() == zigzag_series["close"].tolist()
    assert df["timestamp"].is_monotonic_increasing


def test_load_series_unknown_ticker(csv_path):
    cfg = AppConfig(data={"path": str(csv_path), "ticker": "NOPE"})

    with pytest.raises(UpstreamError):
        load_series(cfg.data)


def test_workflow_runs_and_instruments(csv_path, zigzag_series):
    inst = Instrumentation(enabled=True)

    result = run_backtest_workflow(_cfg(csv_path), inst)

    assert result.total_count == len(zigzag_series)
    assert list(inst.timeline) == ["load_series", "build_strategy", "simulate"]
    assert inst.metrics.metrics["bars"] == len(zigzag_series)
    assert "sharpe" in inst.metrics.metrics


def test_workflow_is_deterministic_per_seed(csv_path):
    a = run_backtest_workflow(_cfg(csv_path, seed=11))
    b = run_backtest_workflow(_cfg(csv_path, seed=11))

    assert [e.action for e in a.trade_log] == [e.action for e in b.trade_log]
    assert a.total_profit_loss == b.total_profit_loss


def test_workflow_plain_strategy_skips_build(csv_path):
    inst = Instrumentation(enabled=True)

    run_backtest_workflow(_cfg(csv_path, strategy={"type": "rsi", "period": 2}), inst)

    assert "build_strategy" not in inst.timeline


def test_workflow_raises_validation_error(csv_path):
    with pytest.raises(ValidationError):
        run_backtest_workflow(_cfg(csv_path, interval="1h"))


def test_summarize(csv_path):
    s = summarize(run_backtest_workflow(_cfg(csv_path)))

    assert s["buy_count"] + s["sell_count"] + s["hold_count"] == 15
    assert s["gain_vs_market"] == pytest.approx(s["gain_strategy"] - s["gain_market"])
