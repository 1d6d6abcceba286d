"""Table rendering for parameter statistics and correlation points.

Formats engine output for display; no statistics are computed here.
"""

from __future__ import annotations

import math
from typing import Literal, Sequence

import pandas as pd

from .correlation import CorrelationPoint, ParameterStatistics, statistics_to_frame


TableFormat = Literal["text", "csv", "latex"]


def _fmt(value: float, decimals: int) -> str:
    if value is None or math.isnan(value):
        return "NaN"
    return f"{value:.{decimals}f}"


def statistics_table(stats: Sequence[ParameterStatistics], metric_label: str) -> pd.DataFrame:
    """Statistics with display column headers."""
    df = statistics_to_frame(stats).drop(columns="best_strategy_id")
    return df.rename(
        columns={
            "parameter": "Parameter",
            "min": "Min Value",
            "max": "Max Value",
            "avg": "Avg Value",
            "best_param_value": f"Best Value for {metric_label}",
        }
    )


def _df_to_latex(df: pd.DataFrame, *, decimals: int = 4) -> str:
    if df is None or df.empty:
        return "\\emph{(No data)}"
    return df.to_latex(
        index=False,
        escape=True,
        float_format=lambda x: _fmt(x, decimals),
        column_format="l" + "r" * (len(df.columns) - 1),
    )


def _df_to_text(df: pd.DataFrame, *, decimals: int = 4) -> str:
    if df.empty:
        return "(No data)"
    shown = df.copy()
    for col in shown.columns[1:]:
        shown[col] = shown[col].map(lambda x: _fmt(x, decimals))
    return shown.to_string(index=False)


def format_statistics(
    stats: Sequence[ParameterStatistics],
    metric_label: str,
    fmt: TableFormat = "text",
    *,
    decimals: int = 4,
) -> str:
    """Render the statistics table as text, CSV or LaTeX."""
    df = statistics_table(stats, metric_label)
    if fmt == "text":
        return _df_to_text(df, decimals=decimals)
    if fmt == "csv":
        return df.to_csv(index=False, float_format=f"%.{decimals}f")
    if fmt == "latex":
        return _df_to_latex(df, decimals=decimals)
    raise ValueError(f"Unknown table format: {fmt}")


def format_point_tooltip(
    point: CorrelationPoint,
    parameter: str,
    metric_label: str,
    *,
    param_decimals: int = 4,
    metric_decimals: int = 2,
) -> list[str]:
    """Hover text for one scatter point: strategy id, parameter, metric."""
    return [
        point.strategy_id,
        f"{parameter}: {_fmt(point.param_value, param_decimals)}",
        f"{metric_label}: {_fmt(point.metric_value, metric_decimals)}",
    ]
