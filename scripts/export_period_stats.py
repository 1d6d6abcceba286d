from __future__ import annotations

"""
Export parameter statistics for every test period in a strategies file.

Generates, per period:
- <period>/statistics.csv (min/max/avg/best per parameter)
- <period>/points.csv (long-form correlation points)
- <period>/parameter_correlation.png (scatter grid)
and a top-level periods.csv with strategy counts.
"""

import argparse
import logging
import re
from pathlib import Path

import pandas as pd

from param_explorer.catalog import load_metric_catalog
from param_explorer.config import load_config
from param_explorer.correlation import analyze_period, series_to_frame, statistics_to_frame
from param_explorer.loader import load_strategies
from param_explorer.periods import group_by_period, period_counts
from param_explorer.visualization import CorrelationVisualizer


LOGGER = logging.getLogger(__name__)


def _ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p


def _period_slug(key: str) -> str:
    return re.sub(r"[^0-9A-Za-z_-]+", "_", key).strip("_") or "period"


def main() -> int:
    ap = argparse.ArgumentParser(description="Per-period parameter statistics export.")
    ap.add_argument("input", help="Strategies JSON file")
    ap.add_argument("--config", default=None, help="Explorer YAML config")
    ap.add_argument("--metric", default=None, help="Metric id (default: config default_metric)")
    ap.add_argument("--outdir", default="output/param_stats")
    ap.add_argument("--no-plots", action="store_true", help="Skip scatter grids")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(levelname)s %(message)s")

    cfg = load_config(args.config)
    catalog = load_metric_catalog(cfg.metrics_path)
    metric = args.metric or cfg.default_metric
    if metric not in catalog:
        ap.error(f"unknown metric {metric!r}; choose from {', '.join(catalog)}")

    records = load_strategies(args.input)
    outdir = _ensure_dir(Path(args.outdir))

    counts = period_counts(records)
    counts.to_csv(outdir / "periods.csv")
    LOGGER.info("Wrote %s (%d periods)", outdir / "periods.csv", len(counts))

    rows = []
    for key, members in group_by_period(records).items():
        period_dir = _ensure_dir(outdir / _period_slug(key))
        analysis = analyze_period(
            members, metric, schema=cfg.schema, skip_missing=cfg.skip_missing, catalog=catalog
        )

        stats = statistics_to_frame(analysis.statistics)
        stats.to_csv(period_dir / "statistics.csv", index=False)
        series_to_frame(analysis.series).to_csv(period_dir / "points.csv", index=False)
        LOGGER.info("%s: %d strategies, %d parameters", key, len(members), len(analysis.series))

        if not args.no_plots and not analysis.is_empty:
            CorrelationVisualizer(period_dir, columns=cfg.figure_columns).plot_parameter_grid(
                analysis.series, catalog[metric], period=key, statistics=analysis.statistics
            )

        stats.insert(0, "period", key)
        rows.append(stats)

    if rows:
        combined = pd.concat(rows, ignore_index=True)
        combined.to_csv(outdir / "statistics_all_periods.csv", index=False)
        LOGGER.info("Wrote %s", outdir / "statistics_all_periods.csv")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
