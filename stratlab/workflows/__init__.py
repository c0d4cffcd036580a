from .backtest_workflow import load_series, run_backtest_workflow, summarize

__all__ = ["load_series", "run_backtest_workflow", "summarize"]
