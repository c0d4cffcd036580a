#!filepath: stratlab/data/storage.py
from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

import pandas as pd

from stratlab.data.interfaces import DataStorage
from stratlab.data.types import Bar, bars_to_frame
from stratlab.utils.errors import UpstreamError


class InMemoryStorage(DataStorage):
    """
    进程内 bar 存储：ticker -> [Bar]（按 save 顺序追加）
    """

    def __init__(self) -> None:
        self._store: Dict[str, List[Bar]] = defaultdict(list)

    def save(self, bars: Sequence[Bar]) -> None:
        for b in bars:
            self._store[b.ticker].append(b)

    def load(self, symbol: str, start: int, end: int) -> list[Bar]:
        if symbol not in self._store:
            raise UpstreamError(f"no data found for symbol: {symbol}")

        return [b for b in self._store[symbol] if start <= b.timestamp <= end]

    def to_frame(self, bars: Sequence[Bar]) -> pd.DataFrame:
        return bars_to_frame(bars)

    def symbols(self) -> list[str]:
        return sorted(self._store)
