from __future__ import annotations

from typing import Mapping, Protocol


class MetricsSink(Protocol):
    """
    Receives named measurements and error events from monitored components.
    """

    def record(self, name: str, value: float) -> None:
        ...

    def error(self, name: str, exc: BaseException, *, context: Mapping[str, object] | None = None) -> None:
        ...
