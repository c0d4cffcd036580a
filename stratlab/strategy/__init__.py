from .base import Strategy, Trainable
from .bollinger import BollingerReversionStrategy
from .ensemble import EnsembleStrategy
from .factory import StrategyFactory
from .markov import MarkovChainStrategy, TransitionModel
from .moving_average import MovingAverageCrossoverStrategy
from .rsi import RSIReversionStrategy
from .vwap import VWAPReversionStrategy

__all__ = [
    "Strategy",
    "Trainable",
    "BollingerReversionStrategy",
    "EnsembleStrategy",
    "MarkovChainStrategy",
    "MovingAverageCrossoverStrategy",
    "RSIReversionStrategy",
    "StrategyFactory",
    "TransitionModel",
    "VWAPReversionStrategy",
]
