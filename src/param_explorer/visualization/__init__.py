"""Visualization module for parameter correlation charts."""

from .correlation_plots import CorrelationVisualizer, best_point_index
from .styles import PALETTE, apply_style

__all__ = ["CorrelationVisualizer", "best_point_index", "PALETTE", "apply_style"]
