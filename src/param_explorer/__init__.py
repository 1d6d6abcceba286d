"""Strategy parameter explorer.

Loads batches of strategy backtest records and relates each strategy
parameter to a chosen performance metric, one test period at a time:

    loader -> periods -> correlation

``state`` holds the active dataset/period/metric for interactive use; the
CLI, tables and figures only present engine output.
"""

from .catalog import AVAILABLE_METRICS, DEFAULT_METRIC, load_metric_catalog
from .config import ExplorerConfig, load_config
from .correlation import (
    CorrelationAnalysis,
    CorrelationPoint,
    ParameterSeries,
    ParameterStatistics,
    analyze_period,
    build_correlation_series,
    compute_parameter_statistics,
)
from .errors import ExplorerError, ParseError, UnknownMetricError
from .loader import StrategyRecord, TestPeriod, load_strategies, load_strategies_async, parse_strategies
from .periods import default_period, filter_by_period, list_periods, period_key
from .state import ExplorerSession, ExplorerState

__all__ = [
    "AVAILABLE_METRICS",
    "DEFAULT_METRIC",
    "load_metric_catalog",
    "ExplorerConfig",
    "load_config",
    "CorrelationAnalysis",
    "CorrelationPoint",
    "ParameterSeries",
    "ParameterStatistics",
    "analyze_period",
    "build_correlation_series",
    "compute_parameter_statistics",
    "ExplorerError",
    "ParseError",
    "UnknownMetricError",
    "StrategyRecord",
    "TestPeriod",
    "load_strategies",
    "load_strategies_async",
    "parse_strategies",
    "default_period",
    "filter_by_period",
    "list_periods",
    "period_key",
    "ExplorerSession",
    "ExplorerState",
]
