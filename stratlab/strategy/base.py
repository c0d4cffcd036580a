#!filepath: stratlab/strategy/base.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

import pandas as pd

from stratlab.backtest.types import Action


@runtime_checkable
class Strategy(Protocol):
    """
    Strategy (FROZEN)

    纯解释器：
      series prefix (bars 0..i-1) -> Action

    Contract:
    - No side effects on the prefix.
    - Never sees the bar it is deciding for.
    - Returns exactly one of Buy / Sell / Hold.
    """

    def decide(self, prefix: pd.DataFrame) -> Action:
        ...


@runtime_checkable
class Trainable(Protocol):
    """
    Strategies that must see the full history once before deciding.
    """

    def build(self, series: pd.DataFrame) -> "Trainable":
        ...
