#!filepath: stratlab/data/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import pandas as pd

from stratlab.data.types import Bar

"""
{#!filepath: stratlab/data/interfaces.py}

Data collaborators

Contract:
- DataSource answers: which bars exist for symbol in [start, end]?
- DataStorage keeps bars and hands them back as a Series frame.

Invariants:
- Returned bars are time-ordered per ticker.
- Failures surface as UpstreamError; the backtest core never sees them.
"""


class DataSource(ABC):
    @abstractmethod
    def fetch(
        self,
        symbol: Optional[str],
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> list[Bar]:
        """Bars for symbol within inclusive [start, end] (epoch seconds)."""


class DataStorage(ABC):
    @abstractmethod
    def save(self, bars: Sequence[Bar]) -> None:
        ...

    @abstractmethod
    def load(self, symbol: str, start: int, end: int) -> list[Bar]:
        ...

    @abstractmethod
    def to_frame(self, bars: Sequence[Bar]) -> pd.DataFrame:
        ...
