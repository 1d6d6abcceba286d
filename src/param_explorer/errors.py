"""Exception types raised by the explorer pipeline.

Missing numeric fields are never raised; they degrade to NaN downstream.
"""

from __future__ import annotations


class ExplorerError(Exception):
    """Base class for explorer failures scoped to a single user action."""


class ParseError(ExplorerError, ValueError):
    """Uploaded text is not valid JSON or not the expected top-level shape."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class UnknownMetricError(ExplorerError, ValueError):
    """Metric identifier is not part of the metric catalog."""

    def __init__(self, metric: str, available: list[str] | tuple[str, ...]):
        self.metric = metric
        self.available = tuple(available)
        super().__init__(
            f"Unknown metric '{metric}'. Available metrics: {', '.join(self.available)}"
        )
