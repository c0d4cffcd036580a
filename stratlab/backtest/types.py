#!filepath: stratlab/backtest/types.py
from __future__ import annotations

from enum import Enum
from typing import Callable

import pandas as pd


class Action(str, Enum):
    """
    The only three decisions a strategy may return.
    """

    BUY = "Buy"
    SELL = "Sell"
    HOLD = "Hold"

    @classmethod
    def parse(cls, value: "Action | str") -> "Action":
        """
        Coerce "Buy" / "Sell" / "Hold" (or an Action) into an Action.
        Anything else raises ValueError.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"invalid action: {value!r}") from None


# 平局时的固定优先级（ensemble 使用）
ACTION_PRIORITY: tuple[Action, ...] = (Action.BUY, Action.SELL, Action.HOLD)

# decide(prefix) -> Action；prefix 为 bar i 之前的所有 bar
DecideFn = Callable[[pd.DataFrame], "Action | str"]
