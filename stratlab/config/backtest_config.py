#!filepath: stratlab/config/backtest_config.py
from __future__ import annotations

from datetime import timedelta
from typing import Dict, Optional

import pandas as pd
from pydantic import BaseModel, Field, field_validator


class BacktestConfig(BaseModel):
    """
    BacktestConfig

    语义：
      - 一次回测“实验定义”
      - strategy 为 opaque dict，只由 StrategyFactory 解释
      - 不定义数据路径
    """

    # 实验名
    name: str = "default"

    # 最小再决策间隔，如 "1D" / "30min" / "1h"
    interval: str = "1D"

    initial_capital: float = Field(10_000.0, gt=0)

    # Markov 随机源种子（None = 不可复现）
    seed: Optional[int] = None

    # strategy 参数（opaque）
    strategy: Dict = Field(default_factory=lambda: {"type": "moving_average"})

    @field_validator("interval")
    @classmethod
    def _check_interval(cls, v: str) -> str:
        try:
            td = pd.Timedelta(v)
        except ValueError as e:
            raise ValueError(f"invalid interval: {v!r}") from e
        if td <= pd.Timedelta(0):
            raise ValueError(f"interval must be positive: {v!r}")
        return v

    @property
    def interval_timedelta(self) -> timedelta:
        return pd.Timedelta(self.interval).to_pytimedelta()
