#!filepath: tests/strategy/test_strategy_factory.py
from __future__ import annotations

import copy
import inspect
import random

import pytest

from stratlab.strategy import (
    BollingerReversionStrategy,
    EnsembleStrategy,
    MarkovChainStrategy,
    MovingAverageCrossoverStrategy,
    RSIReversionStrategy,
    Strategy,
    StrategyFactory,
    VWAPReversionStrategy,
)
from stratlab.utils.errors import UserInputError


# =============================================================================
# Contract tests
# =============================================================================

def test_missing_type_raises():
    cfg = {"depth": 2}

    with pytest.raises(KeyError, match="missing 'type'"):
        StrategyFactory.create(cfg)


def test_unknown_type_raises():
    cfg = {"type": "unknown_strategy"}

    with pytest.raises(UserInputError, match="unknown strategy type"):
        StrategyFactory.create(cfg)


def test_bad_params_raise_user_input_error():
    with pytest.raises(UserInputError, match="bad params"):
        StrategyFactory.create({"type": "rsi", "window": 3})


@pytest.mark.parametrize(
    "typ, cls",
    [
        ("moving_average", MovingAverageCrossoverStrategy),
        ("rsi", RSIReversionStrategy),
        ("bollinger", BollingerReversionStrategy),
        ("vwap", VWAPReversionStrategy),
        ("markov", MarkovChainStrategy),
    ],
)
def test_create_returns_strategy(typ, cls):
    strategy = StrategyFactory.create({"type": typ})

    assert isinstance(strategy, cls)
    assert isinstance(strategy, Strategy)


def test_params_forwarded():
    strategy = StrategyFactory.create({"type": "rsi", "period": 3})

    assert strategy.period == 3


def test_markov_gets_injected_rng():
    rng = random.Random(5)

    strategy = StrategyFactory.create({"type": "markov", "depth": 2, "sampling": "max"}, rng=rng)

    assert strategy.rng is rng
    assert strategy.depth == 2
    assert strategy.sampling == "max"


def test_ensemble_members_and_weights():
    rng = random.Random(5)
    cfg = {
        "type": "ensemble",
        "members": [{"type": "markov"}, {"type": "rsi"}, {"type": "markov", "depth": 2}],
        "weights": [0.5, 0.25, 0.25],
    }

    ens = StrategyFactory.create(cfg, rng=rng)

    assert isinstance(ens, EnsembleStrategy)
    assert [type(m) for m in ens.members] == [MarkovChainStrategy, RSIReversionStrategy, MarkovChainStrategy]
    assert ens.weights == [0.5, 0.25, 0.25]
    assert ens.members[0].rng is rng
    assert ens.members[2].rng is rng


def test_ensemble_without_members_raises():
    with pytest.raises(KeyError, match="members"):
        StrategyFactory.create({"type": "ensemble"})


def test_registry_not_mutated_during_create():
    original = StrategyFactory._REGISTRY.copy()

    StrategyFactory.create({"type": "ensemble", "members": [{"type": "vwap"}]})

    assert StrategyFactory._REGISTRY == original


def test_cfg_not_modified():
    cfg = {"type": "ensemble", "members": [{"type": "markov", "depth": 3}], "weights": [1.0]}
    cfg_copy = copy.deepcopy(cfg)

    StrategyFactory.create(cfg)

    assert cfg == cfg_copy


def test_names():
    assert set(StrategyFactory.names()) == {
        "moving_average", "rsi", "bollinger", "vwap", "markov", "ensemble",
    }


def test_no_branching_on_strategy_type():
    """
    Strategy selection must be registry-based, not if/else.
    """
    src = inspect.getsource(StrategyFactory.create)

    for kw in ["if typ ==", "elif"]:
        assert kw not in src, f"Branching logic '{kw}' found in StrategyFactory.create"
