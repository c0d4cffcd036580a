#!filepath: stratlab/config/data_config.py
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class CleaningConfig(BaseModel):
    """
    数据清洗选项（默认全部关闭）
    """

    remove_outliers: bool = False
    outlier_std: float = Field(2.0, gt=0)
    fill: Literal["none", "value", "mean", "median"] = "none"
    fill_value: float = 0.0


class DataConfig(BaseModel):
    """
    DataConfig

    语义：
      - 一个 ticker 的历史 bar 从哪里读
      - 读完后如何清洗
    """

    path: str
    # 省略时按后缀推断
    format: Optional[Literal["csv", "parquet"]] = None
    ticker: Optional[str] = None

    # epoch seconds，闭区间
    start: Optional[int] = None
    end: Optional[int] = None

    cleaning: CleaningConfig = Field(default_factory=CleaningConfig)

    @model_validator(mode="after")
    def _infer_format(self) -> "DataConfig":
        if self.format is None:
            suffix = Path(self.path).suffix.lower()
            self.format = "parquet" if suffix in (".parquet", ".pq") else "csv"
        return self
