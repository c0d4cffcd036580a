#!filepath: stratlab/observability/instrumentation.py
from __future__ import annotations

import time
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict

from stratlab import logs


@dataclass
class MetricRecorder:
    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")


@dataclass
class Instrumentation:
    """
    回测运行期的计时 + 指标记录。

    - timer(name) 记录到有序 timeline（name -> 秒）
    - metrics.record(name, value)
    - enabled=False 时不记录任何东西
    - 不在热路径打日志（只在 report 时输出）
    """

    enabled: bool = True

    def __post_init__(self):
        self.metrics = MetricRecorder(enabled=self.enabled)
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str):
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            start = time.perf_counter()
            try:
                yield
            finally:
                inst.timeline[name] = time.perf_counter() - start

        return _ctx()

    def report(self, title: str) -> None:
        if not self.enabled:
            return

        logs.info(f"[Timeline] ===== Backtest timeline for {title} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
        logs.info("[Timeline] ===========================================")
