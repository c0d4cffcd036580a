#!filepath: stratlab/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .backtest_config import BacktestConfig
from .data_config import DataConfig
from .log_config import LogConfig


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    stratlab/config/app_config.py → stratlab/config → stratlab → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(__file__), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    data: DataConfig
    backtest: BacktestConfig = BacktestConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 stratlab/config/base.yml
        - 不依赖当前工作目录
        - LOG_LEVEL 环境变量覆盖 log.level
        """
        root = project_root()

        # 1) 先加载 .env（在项目根目录下）
        load_dotenv(os.path.join(root, ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        level = os.getenv("LOG_LEVEL")
        if level:
            raw.setdefault("log", {})["level"] = level.upper()

        return cls(**raw)
