"""Scatter grids of parameter value against the selected metric."""

import math
import os
from pathlib import Path
from typing import Optional, Sequence

# Prevent MKL/OpenMP shared-memory usage in restricted environments
os.environ.setdefault("MKL_THREADING_LAYER", "SEQUENTIAL")

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from ..correlation import ParameterSeries, ParameterStatistics
from .styles import FIGURE_DEFAULTS, FONT_SETTINGS, LAYOUT_SETTINGS, PALETTE, apply_style


def best_point_index(series: ParameterSeries, stats: Optional[ParameterStatistics]) -> Optional[int]:
    """Position of the best performer's point in ``series``, or None if it has no plottable value."""
    if stats is None or stats.best_strategy_id is None or np.isnan(stats.best_param_value):
        return None
    for i, point in enumerate(series.data):
        if point.strategy_id == stats.best_strategy_id:
            return i
    return None


class CorrelationVisualizer:
    """Write one scatter panel per strategy parameter."""

    def __init__(self, output_dir: Path | str, columns: int = 2):
        """Initialize with output directory for figures."""
        if columns < 1:
            raise ValueError("columns must be >= 1")
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.columns = columns

    def plot_parameter_grid(
        self,
        series: Sequence[ParameterSeries],
        metric_label: str,
        period: Optional[str] = None,
        statistics: Optional[Sequence[ParameterStatistics]] = None,
        output_path: Optional[Path] = None,
    ) -> Path:
        """Create the scatter grid; best performers are marked when statistics are given."""
        if not series:
            raise ValueError("No parameter series to plot")

        ncols = min(self.columns, len(series))
        nrows = math.ceil(len(series) / ncols)
        panel_w, panel_h = LAYOUT_SETTINGS["panel_size"]
        fig, axes = plt.subplots(nrows, ncols, figsize=(panel_w * ncols, panel_h * nrows), squeeze=False)

        best_by_param = {s.parameter: s for s in statistics or ()}

        for ax, s in zip(axes.flat, series):
            x = s.param_values
            y = s.metric_values
            ax.scatter(x, y, s=LAYOUT_SETTINGS["marker_size"], color=PALETTE["scatter"], alpha=0.8)

            idx = best_point_index(s, best_by_param.get(s.parameter))
            if idx is not None:
                ax.scatter(
                    x[idx], y[idx],
                    s=LAYOUT_SETTINGS["best_marker_size"],
                    facecolors="none",
                    edgecolors=PALETTE["best"],
                    linewidths=1.5,
                    label="Best",
                )
                ax.legend(loc="best", fontsize=FONT_SETTINGS["tick_size"])

            apply_style(ax, title=f"{s.parameter} vs {metric_label}", xlabel=s.parameter, ylabel=metric_label)

        for ax in list(axes.flat)[len(series):]:
            ax.set_visible(False)

        if period:
            fig.suptitle(
                f"Parameter correlation, {period}",
                fontsize=FONT_SETTINGS["suptitle_size"],
                fontweight="bold",
                color=PALETTE["primary"],
            )
        fig.tight_layout()

        if output_path is None:
            output_path = self.output_dir / "parameter_correlation.png"
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig.savefig(output_path, **FIGURE_DEFAULTS)
        plt.close(fig)
        return output_path
