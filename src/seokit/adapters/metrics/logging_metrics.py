from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoggingMetricsSink:
    """
    MetricsSink that writes every measurement to the log.

    The last value per metric name is kept in `values` for inspection.
    """
    values: dict[str, float] = field(default_factory=dict)

    def record(self, name: str, value: float) -> None:
        self.values[name] = value
        logger.info("[metric] %s=%s", name, value)

    def error(self, name: str, exc: BaseException, *, context: Mapping[str, object] | None = None) -> None:
        logger.error(
            "[error] %s: %s: %s",
            name,
            type(exc).__name__,
            exc,
            extra={"metric": name, "context": dict(context or {})},
        )
