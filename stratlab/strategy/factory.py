#!filepath: stratlab/strategy/factory.py
from __future__ import annotations

import random
from typing import Callable, Dict, Optional

from stratlab.strategy.base import Strategy
from stratlab.strategy.bollinger import BollingerReversionStrategy
from stratlab.strategy.ensemble import EnsembleStrategy
from stratlab.strategy.markov import MarkovChainStrategy
from stratlab.strategy.moving_average import MovingAverageCrossoverStrategy
from stratlab.strategy.rsi import RSIReversionStrategy
from stratlab.strategy.vwap import VWAPReversionStrategy
from stratlab.utils.errors import UserInputError


def _markov(params: Dict, rng: random.Random) -> Strategy:
    return MarkovChainStrategy(rng=rng, **params)


def _ensemble(params: Dict, rng: random.Random) -> Strategy:
    if "members" not in params:
        raise KeyError("[StrategyFactory] ensemble needs 'members'")

    members = [StrategyFactory.create(m, rng=rng) for m in params["members"]]
    return EnsembleStrategy(members, weights=params.get("weights"))


def _plain(cls) -> Callable[[Dict, random.Random], Strategy]:
    def _build(params: Dict, rng: random.Random) -> Strategy:
        return cls(**params)

    return _build


class StrategyFactory:
    """
    StrategyFactory (FROZEN)

    注册式 Strategy 构造器

    All strategies must be explicitly registered in StrategyFactory._REGISTRY.
    Registration is centralized and static.
    Adding a strategy requires a deliberate code change in the factory.

    Every Markov strategy built in one create() call (ensemble members
    included) shares the same injected random source.
    """

    _REGISTRY: Dict[str, Callable[[Dict, random.Random], Strategy]] = {
        "moving_average": _plain(MovingAverageCrossoverStrategy),
        "rsi": _plain(RSIReversionStrategy),
        "bollinger": _plain(BollingerReversionStrategy),
        "vwap": _plain(VWAPReversionStrategy),
        "markov": _markov,
        "ensemble": _ensemble,
    }

    # --------------------------------------------------
    @classmethod
    def create(cls, cfg: Dict, rng: Optional[random.Random] = None) -> Strategy:
        """
        cfg:
          backtest.strategy（完整 dict），例如
            {"type": "markov", "depth": 2}
            {"type": "ensemble", "members": [{"type": "rsi"}, {"type": "vwap"}]}

        冻结规则：
          - cfg["type"] 必须存在
          - 未注册 type -> UserInputError
          - cfg 不被修改
        """
        if "type" not in cfg:
            raise KeyError("[StrategyFactory] missing 'type' in strategy config")

        typ = cfg["type"]

        if typ not in cls._REGISTRY:
            raise UserInputError(f"[StrategyFactory] unknown strategy type: {typ}")

        # type 字段不传给 Strategy 本体
        params = {k: v for k, v in cfg.items() if k != "type"}

        rng = rng if rng is not None else random.Random()
        try:
            return cls._REGISTRY[typ](params, rng)
        except TypeError as e:
            raise UserInputError(f"[StrategyFactory] bad params for {typ}: {e}") from e

    @classmethod
    def names(cls) -> list[str]:
        return list(cls._REGISTRY)
