"""Figure styles for parameter correlation charts."""

from typing import Dict, Any
import matplotlib as mpl
from matplotlib import font_manager as fm


def _configure_fonts() -> None:
    """Select an available font to avoid hard failures in minimal environments."""
    preferred = [
        "DejaVu Sans",
        "Liberation Sans",
        "Arial",
        "Helvetica",
    ]
    available = {f.name for f in fm.fontManager.ttflist}
    if not available:
        return

    chosen = next((name for name in preferred if name in available), sorted(available)[0])
    mpl.rcParams["font.family"] = chosen
    mpl.rcParams["font.sans-serif"] = [chosen]


_configure_fonts()

PALETTE: Dict[str, str] = {
    "scatter": "#8884D8",       # Lavender (strategy points)
    "best": "#C0392B",          # Muted red (best performer)
    "primary": "#2C3E50",       # Dark blue-gray (text, spines)
    "neutral": "#95A5A6",       # Light gray (grid)
}

FIGURE_DEFAULTS: Dict[str, Any] = {
    "dpi": 150,
    "bbox_inches": "tight",
    "facecolor": "white",
    "edgecolor": "none",
    "pad_inches": 0.1,
}

FONT_SETTINGS: Dict[str, Any] = {
    "suptitle_size": 14,
    "title_size": 11,
    "label_size": 10,
    "tick_size": 8,
}

LAYOUT_SETTINGS: Dict[str, Any] = {
    "panel_size": (6.0, 4.0),
    "spine_linewidth": 1.0,
    "grid_alpha": 0.3,
    "grid_linestyle": "--",
    "marker_size": 24,
    "best_marker_size": 60,
}


def apply_style(ax, title: str = "", xlabel: str = "", ylabel: str = "") -> None:
    """Apply consistent styling to an axis."""
    if title:
        ax.set_title(title, fontsize=FONT_SETTINGS["title_size"], fontweight="bold", pad=8)
    if xlabel:
        ax.set_xlabel(xlabel, fontsize=FONT_SETTINGS["label_size"])
    if ylabel:
        ax.set_ylabel(ylabel, fontsize=FONT_SETTINGS["label_size"])
    ax.tick_params(labelsize=FONT_SETTINGS["tick_size"])
    ax.grid(True, alpha=LAYOUT_SETTINGS["grid_alpha"], linestyle=LAYOUT_SETTINGS["grid_linestyle"])
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["left"].set_linewidth(LAYOUT_SETTINGS["spine_linewidth"])
    ax.spines["bottom"].set_linewidth(LAYOUT_SETTINGS["spine_linewidth"])
