from .content_source import ContentSource
from .metrics import MetricsSink
from .notifier import SearchEngineNotifier

__all__ = [
    "ContentSource",
    "MetricsSink",
    "SearchEngineNotifier",
]
