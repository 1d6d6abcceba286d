"""Correlation series and per-parameter summary statistics.

For one period's records and a chosen metric this builds, per strategy
parameter, the (parameter value, metric value, strategy id) points used for
scatter plots, plus min/max/mean of the parameter values and the parameter
value of the best-performing strategy.

Two behaviours are deliberate and kept as the default:

- The parameter set is taken from the *first* record only
  (``schema="first"``). ``schema="union"`` collects keys across all records.
- Missing values are NaN and propagate into min/max/avg
  (``skip_missing=False``). ``skip_missing=True`` drops NaNs per aggregate,
  which changes the reported statistics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from .catalog import validate_metric
from .loader import StrategyRecord


SchemaMode = Literal["first", "union"]


@dataclass(frozen=True)
class CorrelationPoint:
    param_value: float
    metric_value: float
    strategy_id: str


@dataclass(frozen=True)
class ParameterSeries:
    parameter: str
    data: tuple[CorrelationPoint, ...]

    @property
    def param_values(self) -> np.ndarray:
        return np.array([p.param_value for p in self.data], dtype="float64")

    @property
    def metric_values(self) -> np.ndarray:
        return np.array([p.metric_value for p in self.data], dtype="float64")


@dataclass(frozen=True)
class ParameterStatistics:
    parameter: str
    min: float
    max: float
    avg: float
    best_param_value: float
    best_strategy_id: Optional[str] = None


@dataclass(frozen=True)
class CorrelationAnalysis:
    """Engine output for one (records, metric) pair."""

    metric: str
    series: tuple[ParameterSeries, ...]
    statistics: tuple[ParameterStatistics, ...]

    @property
    def is_empty(self) -> bool:
        return not self.series


def parameter_universe(records: Sequence[StrategyRecord], schema: SchemaMode = "first") -> list[str]:
    """Parameter keys to analyse, in key order of the record that introduced them."""
    if not records:
        return []
    if schema == "first":
        return list(records[0].params)
    if schema == "union":
        keys: dict[str, None] = {}
        for record in records:
            for key in record.params:
                keys.setdefault(key, None)
        return list(keys)
    raise ValueError(f"Unknown schema mode: {schema}")


def build_correlation_series(
    records: Sequence[StrategyRecord],
    metric: str,
    *,
    schema: SchemaMode = "first",
    catalog: Optional[Mapping[str, str]] = None,
) -> list[ParameterSeries]:
    """One series per parameter with a point per record.

    A record lacking the parameter or the metric contributes a NaN value
    rather than being dropped.
    """
    validate_metric(metric, catalog)
    if not records:
        return []

    series = []
    for param in parameter_universe(records, schema):
        points = tuple(
            CorrelationPoint(
                param_value=record.params.get(param, math.nan),
                metric_value=record.results.get(metric, math.nan),
                strategy_id=record.id,
            )
            for record in records
        )
        series.append(ParameterSeries(parameter=param, data=points))
    return series


def _best_point(data: Sequence[CorrelationPoint], skip_missing: bool) -> CorrelationPoint:
    candidates = data
    if skip_missing:
        candidates = [p for p in data if not math.isnan(p.metric_value)] or data
    best = candidates[0]
    for point in candidates[1:]:
        # Strictly greater: the first maximum wins ties; NaN never wins.
        if point.metric_value > best.metric_value:
            best = point
    return best


def _extremes(values: np.ndarray, skip_missing: bool) -> tuple[float, float, float]:
    if skip_missing:
        values = values[~np.isnan(values)]
        if values.size == 0:
            return math.nan, math.nan, math.nan
    return float(np.min(values)), float(np.max(values)), float(np.sum(values) / values.size)


def compute_parameter_statistics(
    series: Sequence[ParameterSeries],
    *,
    skip_missing: bool = False,
) -> list[ParameterStatistics]:
    """Min/max/avg of parameter values and the best performer's value."""
    stats = []
    for s in series:
        if not s.data:
            continue
        lo, hi, avg = _extremes(s.param_values, skip_missing)
        best = _best_point(s.data, skip_missing)
        stats.append(
            ParameterStatistics(
                parameter=s.parameter,
                min=lo,
                max=hi,
                avg=avg,
                best_param_value=float(best.param_value),
                best_strategy_id=best.strategy_id,
            )
        )
    return stats


def analyze_period(
    records: Sequence[StrategyRecord],
    metric: str,
    *,
    schema: SchemaMode = "first",
    skip_missing: bool = False,
    catalog: Optional[Mapping[str, str]] = None,
) -> CorrelationAnalysis:
    """Run the engine for already period-filtered records.

    Pure: the result depends only on the arguments and is recomputed on
    every call.
    """
    series = build_correlation_series(records, metric, schema=schema, catalog=catalog)
    stats = compute_parameter_statistics(series, skip_missing=skip_missing)
    return CorrelationAnalysis(metric=metric, series=tuple(series), statistics=tuple(stats))


def series_to_frame(series: Sequence[ParameterSeries]) -> pd.DataFrame:
    """Long-form table: one row per (parameter, strategy) point."""
    rows = [
        {
            "parameter": s.parameter,
            "strategy_id": p.strategy_id,
            "param_value": p.param_value,
            "metric_value": p.metric_value,
        }
        for s in series
        for p in s.data
    ]
    return pd.DataFrame(rows, columns=["parameter", "strategy_id", "param_value", "metric_value"])


def statistics_to_frame(stats: Sequence[ParameterStatistics]) -> pd.DataFrame:
    rows = [
        {
            "parameter": s.parameter,
            "min": s.min,
            "max": s.max,
            "avg": s.avg,
            "best_param_value": s.best_param_value,
            "best_strategy_id": s.best_strategy_id,
        }
        for s in stats
    ]
    return pd.DataFrame(
        rows,
        columns=["parameter", "min", "max", "avg", "best_param_value", "best_strategy_id"],
    )
