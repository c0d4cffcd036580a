#!filepath: stratlab/strategy/markov.py
from __future__ import annotations

import random
from collections import Counter, defaultdict
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Literal, Mapping, Optional, Sequence, Tuple

import pandas as pd

from stratlab import logs
from stratlab.backtest.types import Action
from stratlab.data.types import CLOSE, column

"""
{#!filepath: stratlab/strategy/markov.py}

Markov chain strategy (order = depth)

Semantics:
- Each adjacent close pair is discretised into Up / Down / Unchanged.
- Key = tuple of the `depth` most recent single-step states.
- Build: count key -> next-state transitions over the whole series once,
  then normalise every observed row to probabilities.
- Predict: sample the next state with an injected random source.

Invariants:
- The TransitionModel is read-only after build (safe to share).
- Unseen keys have no row; every probability reads as 0.
- Same seed + same series + same depth -> same decisions.
"""


class State(str, Enum):
    UP = "Up"
    DOWN = "Down"
    UNCHANGED = "Unchanged"


# 固定的状态顺序：采样累加顺序 & 平局顺序
STATES: Tuple[State, ...] = (State.UP, State.DOWN, State.UNCHANGED)

StateKey = Tuple[State, ...]

_STATE_TO_ACTION = {
    State.UP: Action.BUY,
    State.DOWN: Action.SELL,
    State.UNCHANGED: Action.HOLD,
}


def price_state(prev_price: float, curr_price: float) -> State:
    if curr_price > prev_price:
        return State.UP
    if curr_price < prev_price:
        return State.DOWN
    return State.UNCHANGED


def state_sequence(prices: Sequence[float]) -> list[State]:
    """n prices -> n-1 single-step states."""
    return [price_state(prices[i - 1], prices[i]) for i in range(1, len(prices))]


# ------------------------------------------------------------------
# Transition model
# ------------------------------------------------------------------
class TransitionModel:
    """
    Immutable mapping: StateKey -> {State: probability}.

    probability() is get-or-zero for unseen keys / states.
    """

    __slots__ = ("_rows", "depth")

    def __init__(self, rows: Mapping[StateKey, Mapping[State, float]], depth: int) -> None:
        frozen = {
            tuple(k): MappingProxyType({s: float(row.get(s, 0.0)) for s in STATES})
            for k, row in rows.items()
        }
        self._rows: Mapping[StateKey, Mapping[State, float]] = MappingProxyType(frozen)
        self.depth = depth

    @classmethod
    def empty(cls, depth: int = 1) -> "TransitionModel":
        return cls({}, depth)

    @classmethod
    def from_prices(cls, prices: Sequence[float], depth: int) -> "TransitionModel":
        """
        For every index i with `depth` states ending at i, the key is
        states[i-depth+1 .. i] and the observed next state is
        price_state(prices[i], prices[i+1]).
        """
        states = state_sequence(prices)
        counts: Dict[StateKey, Counter] = defaultdict(Counter)

        # states[j] 描述 prices[j] -> prices[j+1]
        for j in range(depth, len(states)):
            key = tuple(states[j - depth:j])
            counts[key][states[j]] += 1

        rows = {}
        for key, counter in counts.items():
            total = sum(counter.values())
            rows[key] = {s: counter[s] / total for s in STATES}

        return cls(rows, depth)

    def probability(self, key: StateKey, state: State) -> float:
        row = self._rows.get(tuple(key))
        if row is None:
            return 0.0
        return row[state]

    def row(self, key: StateKey) -> Mapping[State, float]:
        row = self._rows.get(tuple(key))
        if row is None:
            return MappingProxyType({s: 0.0 for s in STATES})
        return row

    def keys(self) -> Iterator[StateKey]:
        return iter(self._rows)

    def __contains__(self, key) -> bool:
        return tuple(key) in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"TransitionModel(depth={self.depth}, keys={len(self)})"


# ------------------------------------------------------------------
# Prediction
# ------------------------------------------------------------------
def predict_next_state(model: TransitionModel, key: StateKey, rng: random.Random) -> State:
    """
    Draw u ~ U[0, 1) and return the first state (Up, Down, Unchanged order)
    whose cumulative probability reaches u.

    Row never reaches u (unseen key / rounding) -> first state of the key.
    """
    u = rng.random()
    cumulative = 0.0

    for state in STATES:
        cumulative += model.probability(key, state)
        if u <= cumulative:
            return state

    return key[0]


def predict_most_likely(model: TransitionModel, key: StateKey) -> State:
    """Arg-max over the row; first state in order wins ties; unseen key -> Up."""
    best_state = STATES[0]
    best_prob = 0.0
    for state in STATES:
        p = model.probability(key, state)
        if p > best_prob:
            best_prob = p
            best_state = state
    return best_state


# ------------------------------------------------------------------
# Strategy
# ------------------------------------------------------------------
class MarkovChainStrategy:
    """
    build(series) once, then decide(prefix) per bar.

    Up -> Buy, Down -> Sell, Unchanged -> Hold.
    A prefix too short to form a full key (depth + 1 closes) -> Hold.
    """

    def __init__(
        self,
        depth: int = 1,
        rng: Optional[random.Random] = None,
        sampling: Literal["random", "max"] = "random",
    ) -> None:
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        if sampling not in ("random", "max"):
            raise ValueError(f"unknown sampling mode: {sampling!r}")

        self.depth = depth
        self.rng = rng if rng is not None else random.Random()
        self.sampling = sampling
        self.model = TransitionModel.empty(depth)

    def build(self, series: pd.DataFrame) -> "MarkovChainStrategy":
        """
        在整段 series 上统计转移矩阵（包含之后回测的区间）。
        """
        self.model = TransitionModel.from_prices(column(series, CLOSE), self.depth)
        logs.info(
            f"[Markov] built depth={self.depth} over {len(series)} bars, "
            f"observed keys={len(self.model)}"
        )
        return self

    def current_key(self, prefix: pd.DataFrame) -> Optional[StateKey]:
        if len(prefix) < self.depth + 1:
            return None
        closes = column(prefix, CLOSE)[-(self.depth + 1):]
        return tuple(state_sequence(closes))

    def decide(self, prefix: pd.DataFrame) -> Action:
        key = self.current_key(prefix)
        if key is None:
            return Action.HOLD

        if self.sampling == "max":
            next_state = predict_most_likely(self.model, key)
        else:
            next_state = predict_next_state(self.model, key, self.rng)

        return _STATE_TO_ACTION[next_state]

