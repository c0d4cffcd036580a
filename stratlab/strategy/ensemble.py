#!filepath: stratlab/strategy/ensemble.py
from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Union

import pandas as pd

from stratlab.backtest.types import ACTION_PRIORITY, Action
from stratlab.strategy.base import Strategy, Trainable

Member = Union[Strategy, Callable[[pd.DataFrame], "Action | str"]]


def _decide_fn(member: Member) -> Callable[[pd.DataFrame], "Action | str"]:
    if isinstance(member, Strategy):
        return member.decide
    if callable(member):
        return member
    raise TypeError(f"ensemble member must be a Strategy or callable, got {type(member).__name__}")


class EnsembleStrategy:
    """
    加权投票：

      score[action] += weight_i   for each member i voting `action`

    选 score 最大的 action；平局按固定优先级 Buy > Sell > Hold
    （按该顺序遍历，仅在严格大于时替换）。
    """

    def __init__(self, members: Sequence[Member], weights: Optional[Sequence[float]] = None) -> None:
        if not members:
            raise ValueError("ensemble needs at least one member")

        if weights is None or len(weights) == 0:
            weights = [1.0 / len(members)] * len(members)

        if len(weights) != len(members):
            raise ValueError(f"got {len(weights)} weights for {len(members)} members")
        if any(w < 0 for w in weights):
            raise ValueError("weights must be non-negative")

        self.members = list(members)
        self.weights = [float(w) for w in weights]
        self._decide_fns = [_decide_fn(m) for m in self.members]

    def build(self, series: pd.DataFrame) -> "EnsembleStrategy":
        for m in self.members:
            if isinstance(m, Trainable):
                m.build(series)
        return self

    def tally(self, prefix: pd.DataFrame) -> Dict[Action, float]:
        scores = {a: 0.0 for a in ACTION_PRIORITY}
        for decide, weight in zip(self._decide_fns, self.weights):
            scores[Action.parse(decide(prefix))] += weight
        return scores

    def decide(self, prefix: pd.DataFrame) -> Action:
        scores = self.tally(prefix)

        best = ACTION_PRIORITY[0]
        best_score = scores[best]
        for action in ACTION_PRIORITY[1:]:
            if scores[action] > best_score:
                best = action
                best_score = scores[action]
        return best
