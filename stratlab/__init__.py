#!filepath: stratlab/__init__.py
"""
stratlab: strategy backtesting over historical OHLCV series.

Layer responsibilities:
- indicators : pure numeric functions over price / volume arrays
- strategy   : decide(prefix) -> Action, never sees the bar being traded
- backtest   : drives one strategy bar-by-bar, accounts P/L and capital
- data       : collaborators that hand the engine a time-ordered Series
- workflows  : config -> data -> strategy -> backtest -> summary
"""

from .utils.logger import Logging, init_logging, logs
from .config.app_config import AppConfig

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "AppConfig",
    "__version__",
]
