from .app_config import AppConfig
from .backtest_config import BacktestConfig
from .data_config import CleaningConfig, DataConfig
from .log_config import LogConfig

__all__ = ["AppConfig", "BacktestConfig", "CleaningConfig", "DataConfig", "LogConfig"]
