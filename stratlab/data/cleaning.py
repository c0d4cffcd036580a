#!filepath: stratlab/data/cleaning.py
from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd

from stratlab import logs
from stratlab.data.types import TIMESTAMP


class FillStrategy(str, Enum):
    NONE = "none"
    VALUE = "value"
    MEAN = "mean"
    MEDIAN = "median"


def remove_outliers(df: pd.DataFrame, num_std: float = 2.0) -> pd.DataFrame:
    """
    逐列删除 mean ± num_std * std 以外的行。

    - 只处理数值列（timestamp 除外）
    - 按列顺序处理，每列的统计量基于已经过滤后的 frame
    - std 用样本标准差（ddof=1）
    """
    out = df
    for col in out.columns:
        if col == TIMESTAMP or not pd.api.types.is_numeric_dtype(out[col]):
            continue

        s = out[col]
        mean = s.mean()
        std = s.std()
        if pd.isna(std):
            continue

        lower = mean - num_std * std
        upper = mean + num_std * std
        out = out[(s >= lower) & (s <= upper)]

    dropped = len(df) - len(out)
    if dropped:
        logs.info(f"[Cleaning] removed {dropped} outlier rows")
    return out.reset_index(drop=True)


def fill_missing(
    df: pd.DataFrame,
    strategy: FillStrategy | str = FillStrategy.VALUE,
    fill_value: float = 0.0,
) -> pd.DataFrame:
    """
    填充 float 列中的 NaN：常数 / 列均值 / 列中位数
    """
    strategy = FillStrategy(strategy)
    if strategy is FillStrategy.NONE:
        return df

    out = df.copy()
    for col in out.columns:
        if not pd.api.types.is_float_dtype(out[col]):
            continue

        if strategy is FillStrategy.VALUE:
            value = fill_value
        elif strategy is FillStrategy.MEAN:
            value = out[col].mean()
        else:
            value = out[col].median()

        out[col] = out[col].fillna(value)

    return out


def insert_outliers_and_nans(
    df: pd.DataFrame,
    rng: Optional[np.random.Generator] = None,
) -> pd.DataFrame:
    """
    测试用：给每个 float 列注入约 10% 的 NaN 和约 10% 的极端值
    （max * 10 或 min / 10）。
    """
    rng = rng if rng is not None else np.random.default_rng()
    out = df.copy()
    n = len(out)

    for col in out.columns:
        if not pd.api.types.is_float_dtype(out[col]):
            continue

        data = out[col].to_numpy(dtype=float, copy=True)
        high = np.nanmax(data) * 10
        low = np.nanmin(data) / 10

        for _ in range(n // 10):
            data[rng.integers(n)] = np.nan

        for _ in range(n // 10):
            data[rng.integers(n)] = high if rng.random() > 0.5 else low

        out[col] = data

    return out
