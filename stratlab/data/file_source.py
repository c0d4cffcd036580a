#!filepath: stratlab/data/file_source.py
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import pandas as pd

from stratlab import logs
from stratlab.data.interfaces import DataSource
from stratlab.data.types import (
    SERIES_COLUMNS,
    TICKER,
    TIMESTAMP,
    VOLUME,
    Bar,
    frame_to_bars,
    timestamps_seconds,
)
from stratlab.utils.errors import UpstreamError


class FileDataSource(DataSource):
    """
    CSV / parquet 文件 -> Bars

    - 列名大小写不敏感（Timestamp / timestamp 均可）
    - datetime 类型的 timestamp 转为 epoch seconds
    - 缺少 ticker 列时用文件名（不含后缀）作为 ticker
    - 缺少 volume 列时填 0
    """

    def __init__(self, path: str | Path, fmt: Optional[Literal["csv", "parquet"]] = None):
        self.path = Path(path)
        if fmt is None:
            fmt = "parquet" if self.path.suffix.lower() in (".parquet", ".pq") else "csv"
        self.fmt = fmt

    # --------------------------------------------------
    @logs.catch()
    def read_frame(self) -> pd.DataFrame:
        try:
            if self.fmt == "parquet":
                raw = pd.read_parquet(self.path, engine="pyarrow")
            else:
                raw = pd.read_csv(self.path)
        except (OSError, ValueError) as e:
            raise UpstreamError(f"[FileDataSource] cannot read {self.path}: {e}") from e

        df = raw.rename(columns={c: str(c).strip().lower() for c in raw.columns})

        if TIMESTAMP in df.columns and not pd.api.types.is_numeric_dtype(df[TIMESTAMP]):
            df[TIMESTAMP] = pd.to_datetime(df[TIMESTAMP], utc=True)
        if TIMESTAMP in df.columns:
            df[TIMESTAMP] = timestamps_seconds(df).astype("int64")

        if TICKER not in df.columns:
            df[TICKER] = self.path.stem
        if VOLUME not in df.columns:
            df[VOLUME] = 0.0

        missing = [c for c in SERIES_COLUMNS if c not in df.columns]
        if missing:
            raise UpstreamError(f"[FileDataSource] {self.path} missing columns: {missing}")

        logs.info(f"[FileDataSource] loaded {len(df)} rows from {self.path}")
        return df

    def fetch(
        self,
        symbol: Optional[str],
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> list[Bar]:
        df = self.read_frame()

        if symbol is not None:
            df = df[df[TICKER].astype(str) == symbol]
        if start is not None:
            df = df[df[TIMESTAMP] >= start]
        if end is not None:
            df = df[df[TIMESTAMP] <= end]

        df = df.sort_values(TIMESTAMP, kind="stable")
        return frame_to_bars(df)
