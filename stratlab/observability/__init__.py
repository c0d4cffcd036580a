from .instrumentation import Instrumentation, MetricRecorder

__all__ = ["Instrumentation", "MetricRecorder"]
